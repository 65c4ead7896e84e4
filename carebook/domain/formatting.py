"""
French display helpers for schedules, hours and booking periods.
"""

from datetime import date
from typing import Iterable, List, Optional

from .exceptions import InvalidInputError
from .models import Interval, ScheduleEntry, TimeOfDay, WeekDay, BookingPeriod
from .timeutils import as_date

WEEKDAY_NAMES = {
    WeekDay.MONDAY: "lundi",
    WeekDay.TUESDAY: "mardi",
    WeekDay.WEDNESDAY: "mercredi",
    WeekDay.THURSDAY: "jeudi",
    WeekDay.FRIDAY: "vendredi",
    WeekDay.SATURDAY: "samedi",
    WeekDay.SUNDAY: "dimanche",
}

WEEKDAY_SHORT_NAMES = {weekday: name[:3] for weekday, name in WEEKDAY_NAMES.items()}

NO_WORKING_DAY = "Aucun jour de travail"


def weekday_name(weekday: WeekDay, short: bool = False) -> str:
    """French name of a weekday ("lundi", or "lun" when short)."""
    names = WEEKDAY_SHORT_NAMES if short else WEEKDAY_NAMES
    return names[WeekDay(weekday)]


def weekday_from_name(name: str) -> WeekDay:
    """
    Resolve a French weekday name (full or short, any case).

    Raises:
        InvalidInputError: If the name is not a weekday
    """
    key = name.strip().lower()
    for weekday, full in WEEKDAY_NAMES.items():
        if key in (full, WEEKDAY_SHORT_NAMES[weekday]):
            return weekday
    raise InvalidInputError(f"Unknown weekday '{name}'")


def format_time_fr(value: TimeOfDay) -> str:
    """08:00 -> 8h00"""
    return f"{value.hour}h{value.minute:02d}"


def format_interval_fr(interval: Interval) -> str:
    """08:00-18:00 -> 8h00 - 18h00"""
    return f"{format_time_fr(interval.start)} - {format_time_fr(interval.end)}"


def format_hours_fr(hours: float) -> str:
    """47.5 -> 47,5h"""
    return f"{hours:.1f}".replace(".", ",") + "h"


def format_date_fr(day: Optional[date], fmt: str = "D MMMM YYYY") -> str:
    """Format a calendar date in French, e.g. 2 mars 2026."""
    if day is None:
        return "-"
    return as_date(day).format(fmt, locale="fr")


def booking_length_months(booking: BookingPeriod) -> Optional[int]:
    """Whole months covered by a dated booking, None for open-ended ones."""
    if booking.end_date is None:
        return None
    return as_date(booking.start_date).diff(as_date(booking.end_date)).in_months()


def describe_booking_period(booking: BookingPeriod) -> str:
    """Human label for a booking period ("CDI" or replacement length)."""
    if booking.end_date is None:
        return f"CDI depuis le {format_date_fr(booking.start_date)}"
    months = booking_length_months(booking)
    return (
        f"Remplacement du {format_date_fr(booking.start_date)} "
        f"au {format_date_fr(booking.end_date)} ({months} mois)"
    )


def summarize_schedule(entries: Iterable[ScheduleEntry]) -> str:
    """
    One-line summary of a weekly schedule.

    Examples:
        Monday-Friday 08:00-18:00 -> "lun-ven 8h00 - 18h00"
        Monday and Wednesday, different hours -> "lun, mer (horaires variables)"
    """
    ordered = sorted(entries, key=lambda entry: entry.weekday)
    if not ordered:
        return NO_WORKING_DAY

    first = ordered[0].interval
    same_hours = all(entry.interval == first for entry in ordered)

    days: List[int] = [entry.weekday for entry in ordered]
    consecutive = all(day == days[i - 1] + 1 for i, day in enumerate(days) if i > 0)

    if consecutive and len(days) > 2:
        days_str = f"{weekday_name(days[0], short=True)}-{weekday_name(days[-1], short=True)}"
    else:
        days_str = ", ".join(weekday_name(day, short=True) for day in days)

    if same_hours:
        return f"{days_str} {format_interval_fr(first)}"
    return f"{days_str} (horaires variables)"
