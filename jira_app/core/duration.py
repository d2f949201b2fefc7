"""Jira style duration strings ("1w 2d 3h 30m") to seconds and back."""

from __future__ import annotations

import math
import re

from .config import DAYS_PER_WEEK, HOURS_PER_DAY

SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = HOURS_PER_DAY * SECONDS_PER_HOUR
SECONDS_PER_WEEK = DAYS_PER_WEEK * SECONDS_PER_DAY

# Units are optional but must appear in w, d, h, m order.
_DURATION_RE = re.compile(
    r"^(?:(?P<weeks>\d+)w\s*)?(?:(?P<days>\d+)d\s*)?(?:(?P<hours>\d+)h\s*)?(?:(?P<minutes>\d+)m)?$",
    re.IGNORECASE,
)


def parse_duration(text: str | None) -> int | None:
    """Convert a duration string into seconds.

    One day counts as 8 working hours and one week as 5 working days, the
    same convention Jira uses for time tracking.

    >>> parse_duration("1h 30m")
    5400
    >>> parse_duration("1d")
    28800
    >>> parse_duration("soon") is None
    True

    Returns ``None`` when the text is empty or contains no recognisable token.
    """
    if text is None:
        return None
    match = _DURATION_RE.match(str(text).strip())
    if match is None:
        return None
    parts = match.groupdict()
    if all(v is None for v in parts.values()):
        return None
    weeks, days, hours, minutes = (int(parts[k] or 0) for k in ("weeks", "days", "hours", "minutes"))
    return weeks * SECONDS_PER_WEEK + days * SECONDS_PER_DAY + hours * SECONDS_PER_HOUR + minutes * 60


def format_duration(seconds: int | float | None) -> str:
    """Hours and minutes, e.g. ``5400 -> "1h 30m"``."""
    total = int(seconds or 0)
    hours, rest = divmod(total, SECONDS_PER_HOUR)
    return f"{hours}h {rest // 60}m"


def format_time(seconds: int | float | None) -> str:
    """Compact time tracking value: ``-`` when unset, minutes only under an hour."""
    if not seconds:
        return "-"
    total = int(seconds)
    hours, rest = divmod(total, SECONDS_PER_HOUR)
    if hours > 0:
        return f"{hours}h {rest // 60}m"
    return f"{rest // 60}m"


def seconds_to_hours(seconds: int | float | None) -> float:
    """Decimal hours rounded half up to two places (450s -> 0.13)."""
    return math.floor((seconds or 0) / SECONDS_PER_HOUR * 100 + 0.5) / 100
