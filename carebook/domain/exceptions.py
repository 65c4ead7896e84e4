"""
Domain-specific exception hierarchy for carebook.
"""


class SchedulingError(Exception):
    """Base class for all carebook errors."""


class InvalidInputError(SchedulingError, ValueError):
    """Raised when a caller supplies a value outside the accepted domain."""


class InvalidFormatError(InvalidInputError):
    """Raised when a time or date string is malformed."""


class InvalidRangeError(InvalidInputError):
    """Raised when an end is not after its start or a bound is exceeded."""


class OutsideWorkingHoursError(SchedulingError):
    """Raised when a requested slot is not within the provider's working hours."""


class CapacityExceededError(SchedulingError):
    """Raised when a requested slot is already fully occupied."""


class ProviderNotFoundError(SchedulingError):
    """Raised when a provider cannot be found in the repository."""
