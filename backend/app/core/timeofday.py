"""
Time-of-day helpers.

Bookings and institutions store times as strings ("14:30", "08:00:00").
Everything that orders or compares them goes through parse_time_of_day so
there is exactly one accepted format.
"""

import re
from datetime import date, datetime, timedelta, timezone
from typing import Callable

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


def parse_time_of_day(value: str) -> timedelta:
    """
    Parse "HH:MM" or "HH:MM:SS" into an offset from midnight.

    Raises ValueError for anything else, including out-of-range fields
    such as "24:00" or "12:60".
    """
    if not isinstance(value, str):
        raise ValueError(f"Time of day must be a string, got {type(value).__name__}")

    match = _TIME_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time of day: {value!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    seconds = int(match.group(3) or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        raise ValueError(f"Time of day out of range: {value!r}")

    return timedelta(hours=hours, minutes=minutes, seconds=seconds)


def to_day(value: date | datetime) -> date:
    """Truncate a datetime to its calendar day; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
