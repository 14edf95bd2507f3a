"""JSON-lines logging for the action engine.

Every record is one JSON object. Structured fields travel in
``extra={"extra_fields": {...}}`` and are merged into the top level of the
object; ``log_event`` is the shorthand used throughout the package.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import IO, Any, Optional


SERVICE_NAME = "ease-actions"

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("name", logging.INFO, "path", 1, "msg", None, None).__dict__
) | {"message", "asctime", "stack_info"}


class JsonFormatter(logging.Formatter):
    """Formats records as single-line JSON objects."""

    def __init__(self, *args, service: str = SERVICE_NAME, **kwargs):
        super().__init__(*args, **kwargs)
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "service": self.service,
            "component": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            if key == "extra_fields" and isinstance(value, dict):
                entry.update(value)
            else:
                entry[key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        # Reply text and handler payloads may hold arbitrary objects
        return json.dumps(entry, default=str, ensure_ascii=False)


def log_event(
    logger: logging.Logger,
    level: int,
    message: str,
    event: str,
    exc_info: bool = False,
    **fields: Any,
) -> None:
    """Logs message with an ``event`` name and structured fields.

    Args:
        logger: Logger to write to.
        level: A ``logging`` level constant.
        message: Human-readable summary.
        event: Dotted event name, e.g. ``dispatch.result``.
        exc_info: Attach the active exception's traceback.
        **fields: Extra key/value pairs merged into the JSON object.
    """
    if not logger.isEnabledFor(level):
        return
    logger.log(
        level,
        message,
        exc_info=exc_info,
        extra={"extra_fields": {"event": event, **fields}},
    )


def setup_logging(level: Optional[str] = None, stream: Optional[IO[str]] = None):
    """Installs a single JSON handler on the root logger.

    Output goes to stderr by default so that command output on stdout stays
    machine-readable.

    Args:
        level: Log level name. Defaults to the LOG_LEVEL env var, then INFO.
        stream: Destination stream. Defaults to sys.stderr.
    """
    log_level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()

    root = logging.getLogger()
    root.setLevel(log_level)

    for h in root.handlers[:]:
        root.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
