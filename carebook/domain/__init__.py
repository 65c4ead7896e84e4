"""
Domain layer - Pure scheduling logic without external dependencies.
"""

from .availability import AvailabilityCalculator, calculate_availability
from .exceptions import (
    CapacityExceededError,
    InvalidFormatError,
    InvalidInputError,
    InvalidRangeError,
    OutsideWorkingHoursError,
    ProviderNotFoundError,
    SchedulingError,
)
from .models import (
    AvailabilityResult,
    Booking,
    BookingSlot,
    BookingStatus,
    Capacity,
    ConfirmedBooking,
    DayAvailability,
    Interval,
    Provider,
    ScheduleEntry,
    TimeOfDay,
    WeekDay,
    confirmed_only,
    ensure_unique_weekdays,
    pending_only,
)
from .schedule import compact_from_week, expand_to_week

__all__ = [
    "AvailabilityCalculator",
    "AvailabilityResult",
    "Booking",
    "BookingSlot",
    "BookingStatus",
    "Capacity",
    "CapacityExceededError",
    "ConfirmedBooking",
    "DayAvailability",
    "Interval",
    "InvalidFormatError",
    "InvalidInputError",
    "InvalidRangeError",
    "OutsideWorkingHoursError",
    "Provider",
    "ProviderNotFoundError",
    "ScheduleEntry",
    "SchedulingError",
    "TimeOfDay",
    "WeekDay",
    "calculate_availability",
    "compact_from_week",
    "confirmed_only",
    "ensure_unique_weekdays",
    "expand_to_week",
    "pending_only",
]
