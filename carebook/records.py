"""
Persisted record shapes and their conversion to domain objects.

Rows keep times as "HH:MM" strings and dates as "YYYY-MM-DD" strings, the
way the data store holds them. Parsing into domain types happens here, so
malformed data is rejected at the boundary and never reaches the
calculators.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .domain.models import (
    Booking,
    BookingSlot,
    BookingStatus,
    Capacity,
    Provider,
    ScheduleEntry,
    WeekDay,
    ensure_unique_weekdays,
)
from .domain.exceptions import InvalidInputError
from .domain.timeutils import format_time, parse_calendar_date, parse_interval


class ScheduleRow(BaseModel):
    """Working hours of a provider on one weekday."""
    weekday: int = Field(ge=0, le=6)
    start: str
    end: str


class SlotRow(BaseModel):
    """A weekday slot held by a booking."""
    weekday: int = Field(ge=0, le=6)
    start: str
    end: str


class BookingRow(BaseModel):
    """A booking with its period and weekday slots."""
    id: str
    status: BookingStatus = BookingStatus.CONFIRMED
    start_date: str
    end_date: Optional[str] = None
    slots: List[SlotRow] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value) -> str:
        """Accept numeric ids from the store."""
        return str(value)


class ProviderRecord(BaseModel):
    """A provider as stored: profile settings, schedule rows and bookings."""
    id: str
    name: str
    capacity: Optional[int] = None
    vacation_weeks: Optional[int] = None
    schedule: List[ScheduleRow] = Field(default_factory=list)
    bookings: List[BookingRow] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value) -> str:
        return str(value)

    @field_validator("schedule")
    @classmethod
    def validate_unique_weekdays(cls, value: List[ScheduleRow]) -> List[ScheduleRow]:
        """A provider works at most one block per weekday."""
        seen: set[int] = set()
        for row in value:
            if row.weekday in seen:
                raise ValueError(f"Duplicate schedule row for weekday {row.weekday}")
            seen.add(row.weekday)
        return value


def schedule_from_rows(rows: List[ScheduleRow]) -> List[ScheduleEntry]:
    """
    Parse schedule rows into schedule entries.

    Raises:
        InvalidFormatError: If a time string is malformed
        InvalidRangeError: If a row ends before it starts
        InvalidInputError: If a weekday has more than one row
    """
    entries = [
        ScheduleEntry(weekday=WeekDay(row.weekday), interval=parse_interval(row.start, row.end))
        for row in rows
    ]
    ensure_unique_weekdays(entries)
    return entries


def schedule_to_rows(entries: List[ScheduleEntry]) -> List[ScheduleRow]:
    """Serialize schedule entries back to rows, ordered by weekday."""
    return [
        ScheduleRow(
            weekday=int(entry.weekday),
            start=format_time(entry.interval.start),
            end=format_time(entry.interval.end),
        )
        for entry in sorted(entries, key=lambda e: e.weekday)
    ]


def booking_from_row(row: BookingRow) -> Booking:
    """
    Parse a booking row.

    Raises:
        InvalidFormatError: If a date or time string is malformed
        InvalidRangeError: If a slot or the booking period is inverted
        InvalidInputError: If the booking has no slot
    """
    if not row.slots:
        raise InvalidInputError(f"Booking {row.id} has no slot")

    slots = [
        BookingSlot(weekday=WeekDay(slot.weekday), interval=parse_interval(slot.start, slot.end))
        for slot in row.slots
    ]
    return Booking(
        id=row.id,
        slots=tuple(slots),
        start_date=parse_calendar_date(row.start_date),
        end_date=parse_calendar_date(row.end_date) if row.end_date else None,
        status=row.status,
    )


def provider_from_record(
    record: ProviderRecord,
    bookings: List[Booking],
    default_capacity: int,
    default_vacation_weeks: int,
) -> Provider:
    """Assemble the provider aggregate from its record and parsed bookings."""
    capacity = record.capacity if record.capacity is not None else default_capacity
    vacation_weeks = (
        record.vacation_weeks if record.vacation_weeks is not None else default_vacation_weeks
    )
    return Provider(
        id=record.id,
        name=record.name,
        schedule=tuple(schedule_from_rows(record.schedule)),
        capacity=Capacity(capacity),
        vacation_weeks=vacation_weeks,
        bookings=tuple(bookings),
    )
