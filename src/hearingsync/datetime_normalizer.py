"""Combine notice date and 12-hour clock strings into aware datetimes."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import DateNormalizationFailure

log = logging.getLogger(__name__)

DEFAULT_TIME_ZONE = "America/Los_Angeles"

_DATE_RE = re.compile(r"^\s*(\d{1,2})/(\d{1,2})/(\d{4})\s*$")
# "08:30 A.M.", "8:30am", "12 P.M.", "14:00"; anything trailing is malformed
_TIME_RE = re.compile(
    r"^\s*(\d{1,2})(?::(\d{2}))?\s*(?:([AaPp])\.?\s*[Mm]\.?)?\s*$",
)


def resolve_zone(time_zone: str | ZoneInfo) -> ZoneInfo:
    """Return a ZoneInfo for ``time_zone``; raises ValueError for unknown names."""
    if isinstance(time_zone, ZoneInfo):
        return time_zone
    try:
        return ZoneInfo(time_zone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown time zone: {time_zone!r}") from e


def parse_clock_time(time_str: str) -> tuple[int, int] | None:
    """Parse a clock string into 24-hour (hour, minute), or None if malformed."""
    match = _TIME_RE.match(time_str)
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    period = match.group(3)

    if minute > 59:
        return None

    if period is None:
        # No marker: read as a 24-hour clock
        return (hour, minute) if hour < 24 else None

    if hour > 12:
        return None
    period = period.upper()
    if period == "P" and hour != 12:
        hour += 12
    elif period == "A" and hour == 12:
        hour = 0
    return hour, minute


def combine_date_time(date_str: str, time_str: str, time_zone: str | ZoneInfo) -> datetime:
    """Build the hearing start, raising DateNormalizationFailure on bad input."""
    zone = resolve_zone(time_zone)

    date_match = _DATE_RE.match(date_str)
    if not date_match:
        raise DateNormalizationFailure(date_str, time_str, "expected MM/DD/YYYY")
    month, day, year = (int(g) for g in date_match.groups())

    clock = parse_clock_time(time_str)
    if clock is None:
        raise DateNormalizationFailure(date_str, time_str, "unrecognized clock time")
    hour, minute = clock

    try:
        return datetime(year, month, day, hour, minute, tzinfo=zone)
    except ValueError as e:
        raise DateNormalizationFailure(date_str, time_str, str(e)) from e


def normalize_hearing_datetime(
    date_str: str,
    time_str: str,
    time_zone: str | ZoneInfo = DEFAULT_TIME_ZONE,
) -> datetime | None:
    """Return the hearing start in ``time_zone``, or None when it cannot be built."""
    try:
        return combine_date_time(date_str, time_str, time_zone)
    except DateNormalizationFailure as e:
        log.warning("%s", e)
        return None
