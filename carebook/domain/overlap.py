"""
Slot overlap and capacity engine.

Every conflict and occupancy check reduces to Interval.overlaps, which uses
half-open semantics: 08:00-10:00 and 10:00-12:00 do not overlap.
"""

from datetime import date
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from .exceptions import OutsideWorkingHoursError
from .models import BookingPeriod, Capacity, Interval, WeekDay


class OccupancyLevel(str, Enum):
    """Coarse fill level of a slot, used for capacity gradients."""
    FREE = "free"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    FULL = "full"


def overlaps(a: Interval, b: Interval) -> bool:
    """True iff the two intervals share at least one minute."""
    return a.overlaps(b)


def contains(outer: Interval, inner: Interval) -> bool:
    """True iff `inner` lies entirely within `outer`."""
    return outer.contains(inner)


def ensure_within(working: Optional[Interval], candidate: Interval, weekday: WeekDay) -> None:
    """
    Check that a candidate slot fits in a weekday's working interval.

    Raises:
        OutsideWorkingHoursError: If the weekday is not worked or the slot spills over
    """
    if working is None:
        raise OutsideWorkingHoursError(f"{weekday.name.capitalize()} is not a working day")
    if not contains(working, candidate):
        raise OutsideWorkingHoursError(
            f"Slot {candidate} is outside working hours {working} on {weekday.name.capitalize()}"
        )


def occupancy_count(candidate: Interval, existing: Iterable[Interval]) -> int:
    """Number of existing intervals overlapping the candidate."""
    return sum(1 for interval in existing if overlaps(candidate, interval))


def bookings_on(day: date, bookings: Iterable[BookingPeriod]) -> List[BookingPeriod]:
    """Bookings whose period covers the date and that hold a slot on its weekday."""
    weekday = WeekDay.of(day)
    return [b for b in bookings if b.is_active_on(day) and b.occupies(weekday)]


def date_occupancy(day: date, candidate: Interval, bookings: Sequence[BookingPeriod]) -> int:
    """
    Number of bookings occupying the candidate slot on a calendar date.

    A booking holding several overlapping slots that day still counts once.
    """
    weekday = WeekDay.of(day)
    return sum(
        1
        for booking in bookings_on(day, bookings)
        if occupancy_count(candidate, (slot.interval for slot in booking.slots_on(weekday)))
    )


def remaining_places(occupied: int, capacity: Capacity) -> int:
    """Places left in a slot, never negative."""
    return max(0, capacity.max_concurrent - occupied)


def is_full(occupied: int, capacity: Capacity) -> bool:
    return occupied >= capacity.max_concurrent


def capacity_level(occupied: int, capacity: Capacity) -> OccupancyLevel:
    """
    Bucket an occupancy count by quarter of capacity.

    0 is FREE, up to 25% LOW, up to 50% MEDIUM, up to 75% HIGH, above FULL.
    """
    if occupied <= 0:
        return OccupancyLevel.FREE

    ratio = occupied / capacity.max_concurrent
    if ratio <= 0.25:
        return OccupancyLevel.LOW
    if ratio <= 0.5:
        return OccupancyLevel.MEDIUM
    if ratio <= 0.75:
        return OccupancyLevel.HIGH
    return OccupancyLevel.FULL
