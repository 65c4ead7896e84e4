"""
Weekly and monthly working-hours summaries.
"""

from dataclasses import dataclass
from typing import Iterable

from .exceptions import InvalidRangeError
from .models import ScheduleEntry

WEEKS_PER_YEAR = 52
MONTHS_PER_YEAR = 12
DEFAULT_VACATION_WEEKS = 5


def weekly_hours(entries: Iterable[ScheduleEntry]) -> float:
    """Total working hours over one week."""
    return sum(entry.interval.duration_minutes() for entry in entries) / 60


def monthly_hours(hours_per_week: float, vacation_weeks: int = DEFAULT_VACATION_WEEKS) -> float:
    """
    Average monthly hours once vacation weeks are taken off the year.

    Formula: hours_per_week * (52 - vacation_weeks) / 12

    Raises:
        InvalidRangeError: If vacation_weeks is not within [0, 52]
    """
    if not 0 <= vacation_weeks <= WEEKS_PER_YEAR:
        raise InvalidRangeError(
            f"Vacation weeks must be between 0 and {WEEKS_PER_YEAR}, got {vacation_weeks}"
        )
    return hours_per_week * (WEEKS_PER_YEAR - vacation_weeks) / MONTHS_PER_YEAR


@dataclass(frozen=True)
class HoursSummary:
    """Weekly and monthly hours of a schedule."""
    weekly_hours: float
    monthly_hours: float
    vacation_weeks: int

    @classmethod
    def from_schedule(
        cls,
        entries: Iterable[ScheduleEntry],
        vacation_weeks: int = DEFAULT_VACATION_WEEKS,
    ) -> "HoursSummary":
        weekly = weekly_hours(entries)
        return cls(
            weekly_hours=weekly,
            monthly_hours=monthly_hours(weekly, vacation_weeks),
            vacation_weeks=vacation_weeks,
        )
