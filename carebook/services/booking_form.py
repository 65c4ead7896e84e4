"""
Booking form support: which weekdays and times a client may select.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from ..domain.availability import AvailabilityCalculator
from ..domain.exceptions import CapacityExceededError, InvalidInputError
from ..domain.formatting import format_date_fr
from ..domain.models import (
    AvailabilityResult,
    BookingPeriod,
    BookingSlot,
    Capacity,
    ConfirmedBooking,
    Interval,
    Provider,
    ScheduleEntry,
    WeekDay,
)
from ..domain.overlap import (
    OccupancyLevel,
    capacity_level,
    date_occupancy,
    ensure_within,
    is_full,
    remaining_places,
)
from ..domain.schedule import expand_to_week, split_into_slots
from ..domain.timeutils import as_date

logger = logging.getLogger(__name__)


class WeekdayState(str, Enum):
    NOT_WORKED = "not_worked"
    SATURATED = "saturated"
    OPEN = "open"


@dataclass(frozen=True)
class WeekdayStatus:
    """What the booking form shows for one weekday."""
    weekday: WeekDay
    state: WeekdayState
    working_hours: Optional[Interval] = None
    available_from: Optional[date] = None

    @property
    def label(self) -> str:
        if self.state is WeekdayState.NOT_WORKED:
            return "Non travaillé"
        if self.state is WeekdayState.SATURATED:
            return "Complet"
        return f"Disponible à partir du {format_date_fr(self.available_from)}"


@dataclass(frozen=True)
class SlotOccupancy:
    """Occupancy of one grid slot on a calendar date."""
    interval: Interval
    occupied: int
    remaining: int
    level: OccupancyLevel


def first_occurrence(weekday: WeekDay, on_or_after: date) -> date:
    """First date falling on `weekday` at or after the given date."""
    return as_date(on_or_after).add(days=(weekday - on_or_after.weekday()) % 7)


class BookingFormService:
    """
    Validates booking requests against a provider's schedule and occupancy.

    Weekday availability is computed from confirmed bookings only. Slot
    occupancy also counts pending requests, so a slot already claimed by
    requests awaiting an answer is shown as taken.

    Checks are advisory: two clients may pass validation at the same time,
    preventing overbooking is up to the store that records the booking.
    """

    def __init__(
        self,
        schedule: Sequence[ScheduleEntry],
        capacity: Capacity,
        bookings: Sequence[ConfirmedBooking],
        pending: Sequence[BookingPeriod] = (),
    ) -> None:
        self._week = expand_to_week(schedule)
        self._capacity = capacity
        self._bookings = list(bookings)
        self._pending = list(pending)
        self._calculator = AvailabilityCalculator(schedule=schedule, capacity=capacity)

    @classmethod
    def for_provider(cls, provider: Provider) -> "BookingFormService":
        return cls(
            schedule=provider.schedule,
            capacity=provider.capacity,
            bookings=provider.confirmed_bookings(),
            pending=provider.pending_bookings(),
        )

    def availability(self, today: date) -> AvailabilityResult:
        return self._calculator.calculate(self._bookings, today)

    def weekday_states(self, today: date) -> Dict[WeekDay, WeekdayStatus]:
        """State of every weekday, worked or not."""
        result = self.availability(today)
        states: Dict[WeekDay, WeekdayStatus] = {}

        for weekday in WeekDay:
            working = self._week[weekday]
            info = result.per_weekday.get(weekday)
            if working is None or info is None:
                states[weekday] = WeekdayStatus(weekday=weekday, state=WeekdayState.NOT_WORKED)
            elif info.saturated_indefinitely:
                states[weekday] = WeekdayStatus(
                    weekday=weekday, state=WeekdayState.SATURATED, working_hours=working
                )
            else:
                states[weekday] = WeekdayStatus(
                    weekday=weekday,
                    state=WeekdayState.OPEN,
                    working_hours=working,
                    available_from=info.available_from,
                )

        return states

    def occupancy(self, day: date, interval: Interval) -> int:
        """Number of confirmed bookings and pending requests holding the slot on a date."""
        return date_occupancy(day, interval, [*self._bookings, *self._pending])

    def is_selectable(self, day: date, interval: Interval) -> bool:
        """Check a slot on a date is within working hours and not full."""
        working = self._week[WeekDay.of(day)]
        if working is None or not working.contains(interval):
            return False
        return not is_full(self.occupancy(day, interval), self._capacity)

    def occupancy_grid(self, day: date, step: int = 30) -> List[SlotOccupancy]:
        """
        Occupancy of each `step`-minute slot of the working hours on a date.

        Returns an empty list on a day off.
        """
        working = self._week[WeekDay.of(day)]
        if working is None:
            return []

        grid: List[SlotOccupancy] = []
        for slot in split_into_slots(working, step):
            occupied = self.occupancy(day, slot)
            grid.append(
                SlotOccupancy(
                    interval=slot,
                    occupied=occupied,
                    remaining=remaining_places(occupied, self._capacity),
                    level=capacity_level(occupied, self._capacity),
                )
            )
        return grid

    def validate_request(self, start_date: date, slots: Iterable[BookingSlot], today: date) -> None:
        """
        Check a booking request before it is submitted.

        Raises:
            InvalidInputError: If no slot is requested or the start date is in the past
            OutsideWorkingHoursError: If a slot is outside working hours
            CapacityExceededError: If a weekday is saturated or not yet open at start_date
        """
        slots = list(slots)
        if not slots:
            raise InvalidInputError("At least one slot must be requested")
        if start_date < today:
            raise InvalidInputError(f"Start date {start_date} is in the past")

        result = self.availability(today)

        for slot in slots:
            ensure_within(self._week[slot.weekday], slot.interval, slot.weekday)

            info = result.per_weekday[slot.weekday]
            name = slot.weekday.name.capitalize()
            if info.saturated_indefinitely:
                raise CapacityExceededError(f"{name} is fully booked")
            if not info.is_open_on(start_date):
                raise CapacityExceededError(
                    f"{name} is only available from {info.available_from.isoformat()}"
                )

        logger.debug("Booking request from %s with %d slot(s) is valid", start_date, len(slots))
