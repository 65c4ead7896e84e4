"""
Service layer helpers that orchestrate the repository and domain logic.
"""

from .booking_form import BookingFormService, WeekdayState, WeekdayStatus
from .profile_editor import ProfileEditor
from .provider_search import (
    ProviderRepositoryProtocol,
    ProviderSearchService,
    SearchHit,
    compute_availability,
)

__all__ = [
    "BookingFormService",
    "ProfileEditor",
    "ProviderRepositoryProtocol",
    "ProviderSearchService",
    "SearchHit",
    "WeekdayState",
    "WeekdayStatus",
    "compute_availability",
]
