"""
Availability calculator.

Computes, for each working weekday of a provider, whether open-ended
bookings saturate it and otherwise the first date a new booking may start.
Pure computation: the current date is injected, nothing is read from the
system clock and nothing is persisted.
"""

import logging
from datetime import date
from typing import Dict, List, Sequence

from .models import (
    AvailabilityResult,
    Capacity,
    ConfirmedBooking,
    DayAvailability,
    ScheduleEntry,
    WeekDay,
)
from .schedule import working_weekdays
from .timeutils import as_date

logger = logging.getLogger(__name__)


class AvailabilityCalculator:
    """
    Calculates earliest availability of a provider.

    Algorithm, per working weekday:
    1. Split the confirmed bookings holding a slot that day into open-ended
       and dated ones
    2. If open-ended bookings alone reach capacity the weekday is saturated;
       no date will free it without a cancellation
    3. With no dated booking the weekday is open from today
    4. Otherwise it opens the day after the latest dated booking ends

    Step 4 is deliberately conservative: any temporary booking blocks the
    whole weekday until the last one on that weekday has ended, whatever the
    time of day of the slots involved.
    """

    def __init__(self, schedule: Sequence[ScheduleEntry], capacity: Capacity):
        self.schedule = list(schedule)
        self.capacity = capacity

    def calculate(self, bookings: Sequence[ConfirmedBooking], today: date) -> AvailabilityResult:
        """
        Compute availability for every working weekday and aggregate it.

        Args:
            bookings: Confirmed bookings of the provider
            today: Reference date for "open now"

        Returns:
            AvailabilityResult. An empty per_weekday map means no schedule is
            configured; earliest_date None with a non-empty map means fully booked.
        """
        today = as_date(today)
        weekdays = working_weekdays(self.schedule)

        if not weekdays:
            logger.debug("No working weekday configured, no availability data")
            return AvailabilityResult(
                earliest_date=None,
                earliest_weekdays=frozenset(),
                fully_available_now=False,
                per_weekday={},
            )

        per_weekday: Dict[WeekDay, DayAvailability] = {
            weekday: self.day_availability(weekday, bookings, today)
            for weekday in weekdays
        }

        return self._aggregate(per_weekday, today)

    def day_availability(
        self,
        weekday: WeekDay,
        bookings: Sequence[ConfirmedBooking],
        today: date,
    ) -> DayAvailability:
        """Availability of a single weekday."""
        today = as_date(today)
        on_weekday = [b for b in bookings if b.occupies(weekday)]
        indefinite = [b for b in on_weekday if b.is_indefinite]
        dated = [b for b in on_weekday if b.is_dated]

        if len(indefinite) >= self.capacity.max_concurrent:
            logger.debug(
                "%s saturated by %d open-ended booking(s) (capacity %d)",
                weekday.name, len(indefinite), self.capacity.max_concurrent,
            )
            return DayAvailability(
                weekday=weekday,
                available_from=None,
                saturated_indefinitely=True,
                indefinite_count=len(indefinite),
                dated_count=len(dated),
            )

        if not dated:
            available_from = today
        else:
            latest_end = max(b.end_date for b in dated)
            # Dated bookings that already ended never push the date into the past
            available_from = max(today, as_date(latest_end).add(days=1))

        logger.debug("%s available from %s", weekday.name, available_from)
        return DayAvailability(
            weekday=weekday,
            available_from=available_from,
            saturated_indefinitely=False,
            indefinite_count=len(indefinite),
            dated_count=len(dated),
        )

    def _aggregate(self, per_weekday: Dict[WeekDay, DayAvailability], today: date) -> AvailabilityResult:
        open_days: List[DayAvailability] = [
            info for info in per_weekday.values() if not info.saturated_indefinitely
        ]

        if not open_days:
            return AvailabilityResult(
                earliest_date=None,
                earliest_weekdays=frozenset(),
                fully_available_now=False,
                per_weekday=per_weekday,
            )

        earliest_date = min(info.available_from for info in open_days)
        earliest_weekdays = frozenset(
            info.weekday for info in open_days if info.available_from <= earliest_date
        )

        fully_available_now = (
            len(open_days) == len(per_weekday)
            and earliest_date <= today
            and earliest_weekdays == frozenset(per_weekday)
        )

        return AvailabilityResult(
            earliest_date=earliest_date,
            earliest_weekdays=earliest_weekdays,
            fully_available_now=fully_available_now,
            per_weekday=per_weekday,
        )


def calculate_availability(
    schedule: Sequence[ScheduleEntry],
    capacity: Capacity,
    bookings: Sequence[ConfirmedBooking],
    today: date,
) -> AvailabilityResult:
    """Convenience wrapper around AvailabilityCalculator."""
    return AvailabilityCalculator(schedule=schedule, capacity=capacity).calculate(bookings, today)
