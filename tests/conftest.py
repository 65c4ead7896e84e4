"""Shared test fixtures."""

from pathlib import Path
from typing import List, Optional, Tuple

import pytest

from carebook.domain.models import Booking, BookingSlot, BookingStatus, WeekDay
from carebook.domain.timeutils import parse_calendar_date, parse_interval

SlotSpec = Tuple[WeekDay, str, str]


@pytest.fixture
def make_booking():
    """Factory building bookings from plain strings."""

    def _make(
        booking_id: str,
        slots: List[SlotSpec],
        start: str = "2025-09-01",
        end: Optional[str] = None,
        status: BookingStatus = BookingStatus.CONFIRMED,
    ) -> Booking:
        return Booking(
            id=booking_id,
            slots=tuple(
                BookingSlot(weekday=weekday, interval=parse_interval(s, e)) for weekday, s, e in slots
            ),
            start_date=parse_calendar_date(start),
            end_date=parse_calendar_date(end) if end else None,
            status=status,
        )

    return _make


CONFIG_YAML = """
defaults:
  capacity: 4
  vacation_weeks: 5

providers:
  - id: "marie"
    name: "Marie Dupont"
    capacity: 2
    schedule:
      - {weekday: 0, start: "08:00", end: "18:00"}
      - {weekday: 1, start: "08:00", end: "18:00"}
    bookings:
      - id: "r1"
        start_date: "2025-09-01"
        slots:
          - {weekday: 0, start: "08:00", end: "17:00"}
      - id: "r2"
        start_date: "2025-09-01"
        slots:
          - {weekday: 0, start: "09:00", end: "18:00"}
      - id: "r3"
        start_date: "2026-01-05"
        end_date: "2026-03-01"
        slots:
          - {weekday: 1, start: "08:30", end: "12:00"}
      - id: "r4"
        status: pending
        start_date: "2026-01-05"
        slots:
          - {weekday: 1, start: "08:00", end: "18:00"}
      - id: "broken"
        start_date: "2026-13-01"
        slots:
          - {weekday: 1, start: "08:00", end: "18:00"}

  - id: "sophie"
    name: "Sophie Martin"
    schedule:
      - {weekday: 2, start: "07:30", end: "19:00"}
      - {weekday: 4, start: "07:30", end: "19:00"}

  - id: "lea"
    name: "Léa Bernard"
    schedule: []
"""


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """A carebook.yaml with three providers."""
    path = tmp_path / "carebook.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    return path
