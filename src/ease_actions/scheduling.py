"""Helpers for computing when reminders should fire."""

import re
from datetime import datetime, timedelta


NOTIFICATION_WINDOW = timedelta(hours=24)

_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def parse_clock_time(value: str) -> tuple[int, int]:
    """Parses an 'HH:MM' string into (hour, minute).

    Raises:
        ValueError: If value is not a valid 24-hour clock time.
    """
    match = _TIME_RE.match(value or "")
    if not match:
        raise ValueError(f"Invalid clock time: {value!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid clock time: {value!r}")
    return hour, minute


def next_occurrence(time_str: str, now: datetime) -> datetime:
    """Returns the next moment matching time_str, today or tomorrow.

    A time equal to or earlier than now rolls over to the following day.
    """
    hour, minute = parse_clock_time(time_str)
    candidate = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if candidate <= now:
        candidate += timedelta(days=1)
    return candidate


def is_within_notification_window(when: datetime, now: datetime) -> bool:
    """True if when lies strictly between now and now + 24 hours."""
    delta = when - now
    return timedelta(0) < delta < NOTIFICATION_WINDOW
