"""
Domain models for weekly schedules, bookings and availability results.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum, IntEnum
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from .exceptions import InvalidInputError, InvalidRangeError

MINUTES_PER_DAY = 24 * 60


class WeekDay(IntEnum):
    """Day of the week, Monday first (0=Monday, 6=Sunday)."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def of(cls, day: date) -> "WeekDay":
        """Return the weekday of a calendar date."""
        return cls(day.weekday())


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """
    A wall-clock time with minute granularity.

    Invariant: 0 <= minutes < 1440. Never carries a date or timezone.
    """
    minutes: int

    def __post_init__(self):
        if not 0 <= self.minutes < MINUTES_PER_DAY:
            raise InvalidRangeError(
                f"Time of day must be within 00:00-23:59, got {self.minutes} minutes"
            )

    @classmethod
    def of(cls, hour: int, minute: int = 0) -> "TimeOfDay":
        """Build a time from hour and minute components."""
        if not 0 <= minute < 60:
            raise InvalidRangeError(f"Minute must be between 0 and 59, got {minute}")
        return cls(hour * 60 + minute)

    @property
    def hour(self) -> int:
        return self.minutes // 60

    @property
    def minute(self) -> int:
        return self.minutes % 60

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True, order=True)
class Interval:
    """
    Half-open interval of the day [start, end).

    Invariant: start must be before end (no interval wraps midnight).
    """
    start: TimeOfDay
    end: TimeOfDay

    def __post_init__(self):
        if self.start >= self.end:
            raise InvalidRangeError(f"Start time {self.start} must be before end time {self.end}")

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return self.end.minutes - self.start.minutes

    def overlaps(self, other: "Interval") -> bool:
        """Check if this interval overlaps another. Touching endpoints do not overlap."""
        return self.start < other.end and other.start < self.end

    def contains(self, other: "Interval") -> bool:
        """Check if another interval lies entirely within this one."""
        return self.start <= other.start and other.end <= self.end

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class ScheduleEntry:
    """One recurring working block on a weekday."""
    weekday: WeekDay
    interval: Interval

    def __post_init__(self):
        object.__setattr__(self, "weekday", WeekDay(self.weekday))


def ensure_unique_weekdays(entries: Iterable[ScheduleEntry]) -> None:
    """
    Check a schedule has at most one working block per weekday.

    Raises:
        InvalidInputError: If a weekday appears twice
    """
    seen = set()
    for entry in entries:
        if entry.weekday in seen:
            raise InvalidInputError(f"Duplicate schedule entry for {entry.weekday.name.capitalize()}")
        seen.add(entry.weekday)


@dataclass(frozen=True)
class Capacity:
    """Maximum number of confirmed bookings sharing the same weekday and time."""
    max_concurrent: int

    def __post_init__(self):
        if self.max_concurrent < 1:
            raise InvalidRangeError(
                f"Capacity must be a positive integer, got {self.max_concurrent}"
            )


class BookingStatus(str, Enum):
    """Lifecycle state of a booking request."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class BookingSlot:
    """A recurring slot a booking occupies on one weekday."""
    weekday: WeekDay
    interval: Interval

    def __post_init__(self):
        object.__setattr__(self, "weekday", WeekDay(self.weekday))


@dataclass(frozen=True)
class BookingPeriod:
    """Period and slots shared by booking requests and confirmed bookings."""
    id: str
    slots: Tuple[BookingSlot, ...]
    start_date: date
    end_date: Optional[date] = None

    def __post_init__(self):
        object.__setattr__(self, "slots", tuple(self.slots))
        if self.end_date is not None and self.end_date < self.start_date:
            raise InvalidRangeError(
                f"Booking {self.id}: end date {self.end_date} is before start date {self.start_date}"
            )

    @property
    def is_indefinite(self) -> bool:
        """True for open-ended bookings (no end date)."""
        return self.end_date is None

    @property
    def is_dated(self) -> bool:
        """True for temporary bookings bounded by an end date."""
        return self.end_date is not None

    def is_active_on(self, day: date) -> bool:
        """Check if the booking period covers a calendar date."""
        if day < self.start_date:
            return False
        return self.end_date is None or day <= self.end_date

    def slots_on(self, weekday: WeekDay) -> List[BookingSlot]:
        """Return the slots this booking holds on a weekday."""
        return [slot for slot in self.slots if slot.weekday == weekday]

    def occupies(self, weekday: WeekDay) -> bool:
        """Check if the booking holds at least one slot on a weekday."""
        return any(slot.weekday == weekday for slot in self.slots)


@dataclass(frozen=True)
class ConfirmedBooking(BookingPeriod):
    """
    A booking known to be confirmed.

    Only instances of this type are accepted by the availability calculator,
    so pending or cancelled requests cannot leak into capacity counts.
    """


@dataclass(frozen=True)
class Booking(BookingPeriod):
    """A booking request in any lifecycle state."""
    status: BookingStatus = BookingStatus.CONFIRMED

    def confirmed(self) -> ConfirmedBooking:
        """
        Narrow this booking to a ConfirmedBooking.

        Raises:
            InvalidInputError: If the booking is not confirmed
        """
        if self.status is not BookingStatus.CONFIRMED:
            raise InvalidInputError(f"Booking {self.id} is {self.status.value}, not confirmed")
        return ConfirmedBooking(
            id=self.id,
            slots=self.slots,
            start_date=self.start_date,
            end_date=self.end_date,
        )


def confirmed_only(bookings: List[Booking]) -> List[ConfirmedBooking]:
    """Keep the confirmed bookings, dropping pending and cancelled ones."""
    return [b.confirmed() for b in bookings if b.status is BookingStatus.CONFIRMED]


def pending_only(bookings: List[Booking]) -> List[Booking]:
    """Keep the requests still awaiting an answer."""
    return [b for b in bookings if b.status is BookingStatus.PENDING]


@dataclass(frozen=True)
class DayAvailability:
    """
    Availability of one working weekday.

    When saturated_indefinitely is set, open-ended bookings fill the capacity
    and available_from is None. Otherwise available_from is the first date a
    new booking may start on that weekday.
    """
    weekday: WeekDay
    available_from: Optional[date]
    saturated_indefinitely: bool
    indefinite_count: int = 0
    dated_count: int = 0

    def is_open_on(self, day: date) -> bool:
        """Check if a new booking could start on this weekday at the given date."""
        if self.saturated_indefinitely or self.available_from is None:
            return False
        return self.available_from <= day


@dataclass(frozen=True)
class AvailabilityResult:
    """Availability aggregated over every working weekday of a provider."""
    earliest_date: Optional[date]
    earliest_weekdays: FrozenSet[WeekDay]
    fully_available_now: bool
    per_weekday: Dict[WeekDay, DayAvailability] = field(default_factory=dict)

    @property
    def has_schedule(self) -> bool:
        """False when the provider has not configured any working day."""
        return bool(self.per_weekday)

    @property
    def is_fully_booked(self) -> bool:
        """True when every working weekday is saturated by open-ended bookings."""
        return self.has_schedule and self.earliest_date is None

    def weekdays_open_on(self, day: date) -> List[WeekDay]:
        """Working weekdays on which a booking could start at the given date."""
        return sorted(w for w, info in self.per_weekday.items() if info.is_open_on(day))

    def is_available_on(self, day: date) -> bool:
        """Check if at least one working weekday is open at the given date."""
        return bool(self.weekdays_open_on(day))


@dataclass(frozen=True)
class Provider:
    """A childcare provider with its weekly schedule and bookings."""
    id: str
    name: str
    schedule: Tuple[ScheduleEntry, ...]
    capacity: Capacity
    vacation_weeks: int = 5
    bookings: Tuple[Booking, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "schedule", tuple(self.schedule))
        object.__setattr__(self, "bookings", tuple(self.bookings))
        ensure_unique_weekdays(self.schedule)

    @property
    def working_weekdays(self) -> List[WeekDay]:
        return sorted(entry.weekday for entry in self.schedule)

    def confirmed_bookings(self) -> List[ConfirmedBooking]:
        return confirmed_only(list(self.bookings))

    def pending_bookings(self) -> List[Booking]:
        return pending_only(list(self.bookings))
