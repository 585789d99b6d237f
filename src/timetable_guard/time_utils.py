"""Wall-clock time arithmetic for lesson intervals."""

import re
from typing import Protocol

from .constants import MINUTES_PER_DAY, TIME_PATTERN
from .exceptions import InvalidTimeFormatError


class TimedLesson(Protocol):
    start_time: str
    end_time: str


def to_minutes(time: str) -> int:
    """Convert "HH:mm" to minutes since midnight.

    Args:
        time: Time string like "09:30" (24-hour clock, "24:00" allowed)

    Returns:
        hours * 60 + minutes

    Raises:
        InvalidTimeFormatError: If the string is not a valid time
    """
    if not isinstance(time, str) or not re.match(TIME_PATTERN, time.strip()):
        raise InvalidTimeFormatError(time)

    hours, minutes = time.strip().split(":")
    return int(hours) * 60 + int(minutes)


def format_minutes(minutes: int) -> str:
    """Convert minutes since midnight to "HH:mm" (e.g., 570 -> '09:30')."""
    if not 0 <= minutes <= MINUTES_PER_DAY:
        raise InvalidTimeFormatError(minutes, expected="0-1440 minutes")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_time_slot(slot: str) -> tuple[str, str]:
    """Split a "HH:mm-HH:mm" slot into its start and end times.

    Raises:
        InvalidTimeFormatError: If the slot is not two valid times joined by '-'
    """
    if not isinstance(slot, str):
        raise InvalidTimeFormatError(slot, expected="HH:mm-HH:mm")

    parts = slot.split("-")
    if len(parts) != 2:
        raise InvalidTimeFormatError(slot, expected="HH:mm-HH:mm")

    start, end = parts[0].strip(), parts[1].strip()
    to_minutes(start)
    to_minutes(end)
    return start, end


def intervals_overlap(a: tuple[str, str], b: tuple[str, str]) -> bool:
    """Check whether two half-open [start, end) intervals overlap.

    An interval ending exactly when the other begins does not overlap it.
    """
    start_a, end_a = to_minutes(a[0]), to_minutes(a[1])
    start_b, end_b = to_minutes(b[0]), to_minutes(b[1])
    return start_a < end_b and end_a > start_b


def lessons_overlap(first: TimedLesson, second: TimedLesson) -> bool:
    """Check whether two lessons' time ranges overlap."""
    return intervals_overlap(
        (first.start_time, first.end_time),
        (second.start_time, second.end_time),
    )
