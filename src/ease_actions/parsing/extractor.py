"""Extraction of action call sites from free-form model replies.

A call site looks like ``[FUNCTION:<name>:<json-object>]``. The JSON object
is decoded with a real JSON decoder anchored right after the name, so braces
and brackets inside string values do not confuse the scan.
"""

import json
import re
from abc import ABC, abstractmethod
from typing import Iterator, NamedTuple, Optional

from ease_actions.models.action import ActionCall
from ease_actions.observability.logging import get_logger


logger = get_logger(__name__)

MARKER_PREFIX = "[FUNCTION:"
MARKER_SUFFIX = "]"

_HEAD_RE = re.compile(r"\[FUNCTION:([^:\[\]\n]+):")
_WS_RE = re.compile(r"\s*")
_DECODER = json.JSONDecoder()


class CallSite(NamedTuple):
    """A matched marker span; call is None when the site is malformed."""

    start: int
    end: int
    call: Optional[ActionCall]


class CallExtractor(ABC):
    """Interface for strategies that find action calls in text."""

    @abstractmethod
    def iter_calls(self, text: str) -> Iterator[ActionCall]:
        """Lazily yields the well-formed calls in text, left to right."""
        pass  # pragma: no cover

    @abstractmethod
    def clean(self, text: str) -> str:
        """Returns text with every call site, valid or not, removed."""
        pass  # pragma: no cover

    def extract(self, text: str) -> list[ActionCall]:
        return list(self.iter_calls(text))


class MarkerCallExtractor(CallExtractor):
    """Single-pass scanner for ``[FUNCTION:name:{...}]`` markers."""

    def iter_sites(self, text: str) -> Iterator[CallSite]:
        """Yields every marker span in order, including malformed ones.

        Malformed spans run from the marker prefix to the next closing
        bracket, or to the end of the line when there is none.
        """
        pos = 0
        while True:
            start = text.find(MARKER_PREFIX, pos)
            if start < 0:
                return

            site = self._parse_site(text, start)
            if site.call is None:
                logger.debug(
                    "Skipping malformed call site",
                    extra={
                        "extra_fields": {
                            "event": "extract.malformed",
                            "snippet": text[start : min(site.end, start + 80)],
                        }
                    },
                )
            yield site
            pos = site.end

    def iter_calls(self, text: str) -> Iterator[ActionCall]:
        for site in self.iter_sites(text or ""):
            if site.call is not None:
                yield site.call

    def clean(self, text: str) -> str:
        cleaned = text or ""
        # Removing one site can splice two fragments into a new marker
        while MARKER_PREFIX in cleaned:
            cleaned = self._remove_sites(cleaned)
        return cleaned.strip()

    def _remove_sites(self, text: str) -> str:
        parts = []
        pos = 0
        for site in self.iter_sites(text):
            parts.append(text[pos : site.start])
            pos = site.end
        parts.append(text[pos:])
        return "".join(parts)

    def _parse_site(self, text: str, start: int) -> CallSite:
        head = _HEAD_RE.match(text, start)
        if head is not None:
            name = head.group(1).strip()
            obj_start = _WS_RE.match(text, head.end()).end()
            try:
                arguments, obj_end = _DECODER.raw_decode(text, obj_start)
            except (ValueError, RecursionError):
                # Invalid or pathologically nested JSON
                arguments = None
            if name and isinstance(arguments, dict):
                close = _WS_RE.match(text, obj_end).end()
                if text.startswith(MARKER_SUFFIX, close):
                    return CallSite(
                        start,
                        close + len(MARKER_SUFFIX),
                        ActionCall(name=name, arguments=arguments),
                    )
        return CallSite(start, self._malformed_end(text, start), None)

    @staticmethod
    def _malformed_end(text: str, start: int) -> int:
        search_from = start + len(MARKER_PREFIX)
        candidates = [len(text)]

        close = text.find(MARKER_SUFFIX, search_from)
        if close >= 0:
            candidates.append(close + len(MARKER_SUFFIX))
        newline = text.find("\n", search_from)
        if newline >= 0:
            candidates.append(newline)
        # A following marker starts its own site
        next_marker = text.find(MARKER_PREFIX, search_from)
        if next_marker >= 0:
            candidates.append(next_marker)
        return min(candidates)
