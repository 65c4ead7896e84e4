"""
Tests for the booking form service.
"""

from datetime import date

import pendulum
import pytest

from carebook.domain.exceptions import (
    CapacityExceededError,
    InvalidInputError,
    OutsideWorkingHoursError,
)
from carebook.domain.models import (
    BookingSlot,
    BookingStatus,
    Capacity,
    Provider,
    ScheduleEntry,
    TimeOfDay,
    WeekDay,
)
from carebook.domain.overlap import OccupancyLevel
from carebook.domain.timeutils import parse_interval
from carebook.services.booking_form import BookingFormService, WeekdayState, first_occurrence

TODAY = date(2026, 1, 10)  # a Saturday
MONDAY = date(2026, 1, 12)
TUESDAY = date(2026, 1, 13)
FRIDAY = date(2026, 1, 16)


def _slot(weekday, start, end):
    return BookingSlot(weekday=weekday, interval=parse_interval(start, end))


@pytest.fixture
def form(make_booking):
    schedule = [
        ScheduleEntry(WeekDay.MONDAY, parse_interval("08:00", "18:00")),
        ScheduleEntry(WeekDay.TUESDAY, parse_interval("08:00", "18:00")),
        ScheduleEntry(WeekDay.FRIDAY, parse_interval("08:00", "16:30")),
    ]
    bookings = [
        make_booking("m1", [(WeekDay.MONDAY, "08:00", "17:00")]),
        make_booking("m2", [(WeekDay.MONDAY, "09:00", "18:00")]),
        make_booking("t1", [(WeekDay.TUESDAY, "08:30", "12:00")], start="2026-01-05", end="2026-03-01"),
        make_booking("f1", [(WeekDay.FRIDAY, "08:00", "12:00")]),
    ]
    return BookingFormService(
        schedule=schedule,
        capacity=Capacity(2),
        bookings=[b.confirmed() for b in bookings],
    )


class TestFirstOccurrence:
    def test_later_in_week(self):
        assert first_occurrence(WeekDay.FRIDAY, TODAY) == FRIDAY

    def test_same_day(self):
        assert first_occurrence(WeekDay.SATURDAY, TODAY) == TODAY

    def test_wraps_to_next_week(self):
        assert first_occurrence(WeekDay.MONDAY, TODAY) == MONDAY

    def test_returns_pendulum_date(self):
        assert isinstance(first_occurrence(WeekDay.FRIDAY, TODAY), pendulum.Date)


class TestWeekdayStates:
    def test_every_weekday_has_a_state(self, form):
        states = form.weekday_states(TODAY)
        assert list(states) == list(WeekDay)

    def test_saturated_monday(self, form):
        status = form.weekday_states(TODAY)[WeekDay.MONDAY]
        assert status.state is WeekdayState.SATURATED
        assert status.available_from is None
        assert status.label == "Complet"

    def test_tuesday_opens_after_replacement(self, form):
        status = form.weekday_states(TODAY)[WeekDay.TUESDAY]
        assert status.state is WeekdayState.OPEN
        assert status.available_from == date(2026, 3, 2)
        assert status.label == "Disponible à partir du 2 mars 2026"

    def test_friday_open_today(self, form):
        status = form.weekday_states(TODAY)[WeekDay.FRIDAY]
        assert status.state is WeekdayState.OPEN
        assert status.available_from == TODAY
        assert status.working_hours == parse_interval("08:00", "16:30")

    def test_day_off(self, form):
        status = form.weekday_states(TODAY)[WeekDay.WEDNESDAY]
        assert status.state is WeekdayState.NOT_WORKED
        assert status.working_hours is None
        assert status.label == "Non travaillé"


class TestOccupancy:
    def test_grid_covers_working_hours(self, form):
        grid = form.occupancy_grid(FRIDAY)
        assert len(grid) == 17
        assert grid[0].interval == parse_interval("08:00", "08:30")
        assert grid[-1].interval == parse_interval("16:00", "16:30")

    def test_grid_counts_bookings(self, form):
        grid = form.occupancy_grid(FRIDAY)
        morning = [cell for cell in grid if cell.interval.end <= TimeOfDay.of(12)]
        afternoon = [cell for cell in grid if cell.interval.start >= TimeOfDay.of(12)]

        assert len(morning) == 8
        assert all(cell.occupied == 1 for cell in morning)
        assert all(cell.remaining == 1 for cell in morning)
        assert all(cell.level is OccupancyLevel.MEDIUM for cell in morning)
        assert all(cell.occupied == 0 and cell.level is OccupancyLevel.FREE for cell in afternoon)

    def test_grid_with_hour_step(self, form):
        grid = form.occupancy_grid(FRIDAY, step=60)
        assert len(grid) == 9
        assert grid[-1].interval == parse_interval("16:00", "16:30")

    def test_grid_empty_on_day_off(self, form):
        assert form.occupancy_grid(date(2026, 1, 14)) == []

    def test_dated_booking_only_counts_while_active(self, form):
        slot = parse_interval("09:00", "09:30")
        assert form.occupancy(TUESDAY, slot) == 1
        assert form.occupancy(date(2026, 3, 3), slot) == 0

    def test_monday_slots(self, form):
        assert form.occupancy(MONDAY, parse_interval("08:00", "08:30")) == 1
        assert form.occupancy(MONDAY, parse_interval("09:00", "09:30")) == 2
        assert form.occupancy(MONDAY, parse_interval("17:00", "18:00")) == 1


class TestIsSelectable:
    def test_slot_with_a_free_place(self, form):
        assert form.is_selectable(MONDAY, parse_interval("08:00", "08:30"))

    def test_full_slot(self, form):
        assert not form.is_selectable(MONDAY, parse_interval("09:00", "10:00"))

    def test_outside_working_hours(self, form):
        assert not form.is_selectable(FRIDAY, parse_interval("16:00", "17:00"))

    def test_day_off(self, form):
        assert not form.is_selectable(date(2026, 1, 14), parse_interval("09:00", "10:00"))


class TestValidateRequest:
    def test_accepts_open_weekday(self, form):
        form.validate_request(TODAY, [_slot(WeekDay.FRIDAY, "13:00", "16:30")], TODAY)

    def test_accepts_tuesday_after_replacement(self, form):
        form.validate_request(date(2026, 3, 2), [_slot(WeekDay.TUESDAY, "08:00", "12:00")], TODAY)

    def test_requires_a_slot(self, form):
        with pytest.raises(InvalidInputError, match="At least one slot"):
            form.validate_request(TODAY, [], TODAY)

    def test_rejects_past_start(self, form):
        with pytest.raises(InvalidInputError, match="in the past"):
            form.validate_request(date(2026, 1, 9), [_slot(WeekDay.FRIDAY, "08:00", "10:00")], TODAY)

    def test_rejects_day_off(self, form):
        with pytest.raises(OutsideWorkingHoursError, match="not a working day"):
            form.validate_request(TODAY, [_slot(WeekDay.WEDNESDAY, "08:00", "10:00")], TODAY)

    def test_rejects_slot_past_closing(self, form):
        with pytest.raises(OutsideWorkingHoursError, match="outside working hours"):
            form.validate_request(TODAY, [_slot(WeekDay.FRIDAY, "15:00", "17:00")], TODAY)

    def test_rejects_saturated_weekday(self, form):
        with pytest.raises(CapacityExceededError, match="Monday is fully booked"):
            form.validate_request(date(2026, 3, 2), [_slot(WeekDay.MONDAY, "08:00", "09:00")], TODAY)

    def test_rejects_start_before_weekday_opens(self, form):
        with pytest.raises(CapacityExceededError, match="only available from 2026-03-02"):
            form.validate_request(date(2026, 2, 2), [_slot(WeekDay.TUESDAY, "14:00", "18:00")], TODAY)

    def test_one_bad_slot_rejects_the_request(self, form):
        slots = [_slot(WeekDay.FRIDAY, "08:00", "12:00"), _slot(WeekDay.MONDAY, "08:00", "12:00")]
        with pytest.raises(CapacityExceededError):
            form.validate_request(TODAY, slots, TODAY)


class TestPendingRequests:
    @pytest.fixture
    def provider(self, make_booking):
        return Provider(
            id="p1",
            name="Test",
            schedule=(ScheduleEntry(WeekDay.MONDAY, parse_interval("08:00", "18:00")),),
            capacity=Capacity(2),
            bookings=(
                make_booking("c1", [(WeekDay.MONDAY, "08:00", "12:00")]),
                make_booking("p1", [(WeekDay.MONDAY, "08:00", "12:00")], status=BookingStatus.PENDING),
                make_booking("x1", [(WeekDay.MONDAY, "14:00", "18:00")], status=BookingStatus.CANCELLED),
            ),
        )

    def test_pending_request_fills_slot(self, provider):
        form = BookingFormService.for_provider(provider)
        slot = parse_interval("08:00", "08:30")

        assert form.occupancy(MONDAY, slot) == 2
        assert not form.is_selectable(MONDAY, slot)

    def test_grid_counts_pending_requests(self, provider):
        grid = BookingFormService.for_provider(provider).occupancy_grid(MONDAY)

        assert grid[0].occupied == 2
        assert grid[0].remaining == 0
        assert grid[0].level is OccupancyLevel.FULL

    def test_cancelled_requests_are_ignored(self, provider):
        form = BookingFormService.for_provider(provider)
        assert form.occupancy(MONDAY, parse_interval("14:00", "15:00")) == 0
        assert form.is_selectable(MONDAY, parse_interval("14:00", "15:00"))

    def test_availability_uses_confirmed_bookings_only(self, provider):
        result = BookingFormService.for_provider(provider).availability(TODAY)

        assert result.per_weekday[WeekDay.MONDAY].indefinite_count == 1
        assert result.fully_available_now
