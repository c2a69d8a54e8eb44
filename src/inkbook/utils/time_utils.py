"""Clock-time arithmetic for appointment windows.

Times are 24-hour ``HH:MM`` strings; internally they become integer minute
offsets from midnight so windows can be compared as half-open intervals.
"""

import re

from inkbook.domain.errors import InvalidTimeFormat, invalid_time

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^([0-9]{1,2}):([0-9]{2})$")


def time_to_minutes(time: str) -> int:
    """Convert an ``HH:MM`` string to minutes since midnight.

    Args:
        time: Clock time such as "09:30" or "9:30"

    Returns:
        hour * 60 + minute

    Raises:
        InvalidTimeFormat: If the string is not a valid 24-hour clock time
    """
    if not isinstance(time, str):
        raise InvalidTimeFormat(invalid_time(str(time)))

    match = _TIME_PATTERN.match(time.strip())
    if match is None:
        raise InvalidTimeFormat(invalid_time(time))

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise InvalidTimeFormat(invalid_time(time))
    return hour * 60 + minute


def minutes_to_time(minutes: int) -> str:
    """Format a minute offset as ``HH:MM``.

    The hour wraps modulo 24, so an end time past midnight is shown as the
    next day's clock time.
    """
    hours = (minutes // 60) % 24
    return f"{hours:02d}:{minutes % 60:02d}"


def normalize_time(time: str) -> str:
    """Return the zero-padded form of a clock time ("9:05" -> "09:05")."""
    return minutes_to_time(time_to_minutes(time))


def interval_end(start_time: str, estimated_hours: float) -> int:
    """Return the end minute of a window starting at ``start_time``."""
    return time_to_minutes(start_time) + round(estimated_hours * 60)


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open overlap test: windows that only touch do not overlap."""
    return start_a < end_b and end_a > start_b
