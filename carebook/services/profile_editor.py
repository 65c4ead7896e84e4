"""
Profile editor support: schedule round trip and hours summary.
"""

from typing import List, Optional, Sequence

from ..domain.hours import HoursSummary
from ..domain.models import Interval, ScheduleEntry
from ..domain.schedule import Week, compact_from_week, expand_to_week
from ..domain.timeutils import parse_interval
from ..records import ScheduleRow, schedule_from_rows, schedule_to_rows


class ProfileEditor:
    """
    Converts a provider's schedule between the stored rows and the dense
    seven-day week edited on the profile page.
    """

    def __init__(self, vacation_weeks: int = 5):
        self.vacation_weeks = vacation_weeks

    def load(self, rows: Sequence[ScheduleRow]) -> Week:
        """Rows from the store to a dense week."""
        return expand_to_week(schedule_from_rows(list(rows)))

    def save(self, week: Sequence[Optional[Interval]]) -> List[ScheduleRow]:
        """Dense week to rows for the store, days off dropped."""
        return schedule_to_rows(compact_from_week(week))

    @staticmethod
    def set_day(week: Week, weekday: int, start: Optional[str], end: Optional[str]) -> Week:
        """
        Return a copy of the week with one day changed.

        Passing no start/end turns the day off.
        """
        updated = list(week)
        updated[weekday] = parse_interval(start, end) if start and end else None
        return updated

    def summary(self, week: Sequence[Optional[Interval]]) -> HoursSummary:
        entries: List[ScheduleEntry] = compact_from_week(week)
        return HoursSummary.from_schedule(entries, self.vacation_weeks)
