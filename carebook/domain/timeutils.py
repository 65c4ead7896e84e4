"""
Time primitives: clock-time parsing, comparison, durations and calendar dates.

Times are compared as integer minute offsets, never as floats or datetimes.
Calendar dates are built from their year/month/day components so that the
day of month does not depend on the host timezone.
"""

import re
from datetime import date
from enum import Enum
from typing import List

import pendulum
from pendulum import Date

from .exceptions import InvalidFormatError, InvalidRangeError
from .models import Interval, TimeOfDay

_TIME_PATTERN = re.compile(r"^([0-9]{2}):([0-9]{2})$")
_DATE_PATTERN = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")


class Ordering(Enum):
    """Result of comparing two times of day."""
    BEFORE = -1
    EQUAL = 0
    AFTER = 1


def parse_time(value: str) -> TimeOfDay:
    """
    Parse a zero-padded 24h "HH:MM" string.

    Raises:
        InvalidFormatError: If the string is not HH:MM or a component is out of range
    """
    match = _TIME_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if not match:
        raise InvalidFormatError(f"Invalid time '{value}', expected HH:MM")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise InvalidFormatError(f"Invalid time '{value}', expected HH:MM")

    return TimeOfDay(hour * 60 + minute)


def format_time(value: TimeOfDay) -> str:
    """Format a time as zero-padded "HH:MM"."""
    return str(value)


def compare(a: TimeOfDay, b: TimeOfDay) -> Ordering:
    """Compare two times of day."""
    if a.minutes < b.minutes:
        return Ordering.BEFORE
    if a.minutes > b.minutes:
        return Ordering.AFTER
    return Ordering.EQUAL


def duration_minutes(start: TimeOfDay, end: TimeOfDay) -> int:
    """
    Minutes between two times of the same day.

    Raises:
        InvalidRangeError: If end is not after start (overnight spans are not allowed)
    """
    if end <= start:
        raise InvalidRangeError(f"End time {end} must be after start time {start}")
    return end.minutes - start.minutes


def add_minutes(value: TimeOfDay, minutes: int) -> TimeOfDay:
    """Shift a time within the same day."""
    return TimeOfDay(value.minutes + minutes)


def parse_interval(start: str, end: str) -> Interval:
    """Parse a pair of "HH:MM" strings into an Interval."""
    start_time = parse_time(start)
    end_time = parse_time(end)
    duration_minutes(start_time, end_time)
    return Interval(start=start_time, end=end_time)


def parse_calendar_date(value: str) -> Date:
    """
    Parse a "YYYY-MM-DD" string into a calendar date.

    The components are read directly rather than through a timestamp, so the
    day of month is always the one written in the string.

    Raises:
        InvalidFormatError: If the string is not YYYY-MM-DD or is not a real date
    """
    match = _DATE_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if not match:
        raise InvalidFormatError(f"Invalid date '{value}', expected YYYY-MM-DD")

    year, month, day = (int(part) for part in match.groups())
    try:
        return pendulum.date(year, month, day)
    except ValueError as exc:
        raise InvalidFormatError(f"Invalid date '{value}': {exc}") from exc


def as_date(day: date) -> Date:
    """Return the calendar date as a pendulum Date."""
    if isinstance(day, Date):
        return day
    return pendulum.date(day.year, day.month, day.day)


def time_options(start: str = "06:00", end: str = "22:00", step: int = 30) -> List[str]:
    """
    List every time from start to end inclusive, every `step` minutes.

    Used to fill time pickers.
    """
    if step <= 0:
        raise InvalidRangeError(f"Step must be positive, got {step}")

    first = parse_time(start)
    last = parse_time(end)

    options: List[str] = []
    current = first.minutes
    while current <= last.minutes:
        options.append(format_time(TimeOfDay(current)))
        current += step
    return options
