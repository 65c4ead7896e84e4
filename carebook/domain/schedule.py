"""
Weekly schedule model.

A provider's recurring hours are stored sparsely (one entry per worked
weekday) and edited densely (a fixed seven-slot week, None for days off).
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from .exceptions import InvalidInputError, InvalidRangeError
from .models import Interval, ScheduleEntry, TimeOfDay, WeekDay
from .timeutils import parse_time

DAYS_PER_WEEK = 7

Week = List[Optional[Interval]]


def empty_week() -> Week:
    """A week with no working day."""
    return [None] * DAYS_PER_WEEK


def expand_to_week(entries: Iterable[ScheduleEntry]) -> Week:
    """
    Expand schedule entries into a dense week indexed by WeekDay.

    Days without an entry map to None. If a weekday appears twice the later
    entry wins.
    """
    week = empty_week()
    for entry in entries:
        week[entry.weekday] = entry.interval
    return week


def compact_from_week(week: Sequence[Optional[Interval]]) -> List[ScheduleEntry]:
    """
    Collapse a dense week back to schedule entries, dropping days off.

    Raises:
        InvalidInputError: If the week does not have exactly seven slots
    """
    if len(week) != DAYS_PER_WEEK:
        raise InvalidInputError(f"A week has {DAYS_PER_WEEK} days, got {len(week)}")

    return [
        ScheduleEntry(weekday=WeekDay(index), interval=interval)
        for index, interval in enumerate(week)
        if interval is not None
    ]


def working_weekdays(entries: Iterable[ScheduleEntry]) -> List[WeekDay]:
    """Sorted weekdays that have a working interval."""
    return sorted({entry.weekday for entry in entries})


def interval_for(entries: Iterable[ScheduleEntry], weekday: WeekDay) -> Optional[Interval]:
    """Return the working interval of a weekday, or None on a day off."""
    return expand_to_week(entries)[weekday]


def split_into_slots(interval: Interval, step: int = 30) -> List[Interval]:
    """
    Split an interval into consecutive slots of `step` minutes.

    A trailing remainder shorter than `step` becomes a final shorter slot.

    Example:
        08:00-09:45 with step 30 -> [08:00-08:30, 08:30-09:00, 09:00-09:30, 09:30-09:45]
    """
    if step <= 0:
        raise InvalidRangeError(f"Slot length must be positive, got {step}")

    slots: List[Interval] = []
    current = interval.start.minutes
    while current < interval.end.minutes:
        end = min(current + step, interval.end.minutes)
        slots.append(Interval(start=TimeOfDay(current), end=TimeOfDay(end)))
        current = end
    return slots


def display_window(
    entries: Iterable[ScheduleEntry],
    default: Tuple[str, str] = ("08:00", "18:00"),
    floor: str = "06:00",
    ceiling: str = "22:00",
    padding: int = 60,
) -> Interval:
    """
    Compute the range of hours a weekly calendar should display.

    Pads the earliest start and latest end by `padding` minutes, keeps the
    result within [floor, ceiling] and widens it to whole hours.
    """
    entries = list(entries)
    if not entries:
        return Interval(start=parse_time(default[0]), end=parse_time(default[1]))

    earliest = min(entry.interval.start.minutes for entry in entries)
    latest = max(entry.interval.end.minutes for entry in entries)

    start = max(earliest - padding, parse_time(floor).minutes)
    end = min(latest + padding, parse_time(ceiling).minutes)

    start = (start // 60) * 60
    end = -(-end // 60) * 60
    # 24:00 is not a valid time of day
    end = min(end, 23 * 60 + 59)

    return Interval(start=TimeOfDay(start), end=TimeOfDay(end))
