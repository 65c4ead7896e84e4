"""
Provider search over computed availability.

The service pulls providers from a repository, runs the availability
calculator on each one and filters by worked weekdays and by open capacity
at a requested start date. The repository is described by a protocol so
the YAML store or a test stub can be plugged in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Protocol

from ..domain.availability import AvailabilityCalculator
from ..domain.models import AvailabilityResult, Provider, WeekDay

logger = logging.getLogger(__name__)


class ProviderRepositoryProtocol(Protocol):
    """Protocol describing the provider source needed by the services."""

    def list_providers(self) -> List[Provider]:
        """Return all providers."""

    def get_provider(self, provider_id: str) -> Provider:
        """Return one provider or raise ProviderNotFoundError."""


@dataclass(frozen=True)
class SearchHit:
    """A provider together with its computed availability."""
    provider: Provider
    availability: AvailabilityResult


def compute_availability(provider: Provider, today: date) -> AvailabilityResult:
    """Run the availability calculator on a provider's confirmed bookings."""
    calculator = AvailabilityCalculator(schedule=provider.schedule, capacity=provider.capacity)
    return calculator.calculate(provider.confirmed_bookings(), today)


class ProviderSearchService:
    """Lists providers matching weekday and availability criteria."""

    def __init__(self, repository: ProviderRepositoryProtocol) -> None:
        self._repository = repository

    def search(
        self,
        *,
        today: date,
        weekdays: Optional[Iterable[WeekDay]] = None,
        start_date: Optional[date] = None,
        only_available: bool = False,
        only_fully_available_now: bool = False,
    ) -> List[SearchHit]:
        """
        Search providers.

        Args:
            today: Reference date for availability
            weekdays: Weekdays the provider must all work
            start_date: Requested start date for `only_available`
            only_available: Keep providers with an open weekday at start_date,
                or, without a start_date, providers that are not fully booked
            only_fully_available_now: Keep providers open today on every working weekday

        Returns:
            Matching hits, earliest availability first
        """
        wanted = sorted(set(weekdays or []))
        hits: List[SearchHit] = []

        for provider in self._repository.list_providers():
            if wanted and not self.works_all(provider, wanted):
                continue

            availability = compute_availability(provider, today)

            if only_available and not self.is_available(availability, start_date):
                continue
            if only_fully_available_now and not availability.fully_available_now:
                continue

            hits.append(SearchHit(provider=provider, availability=availability))

        logger.info("Search matched %d provider(s)", len(hits))
        return sorted(hits, key=self._sort_key)

    @staticmethod
    def works_all(provider: Provider, weekdays: Iterable[WeekDay]) -> bool:
        """Check the provider works every requested weekday."""
        worked = set(provider.working_weekdays)
        return all(weekday in worked for weekday in weekdays)

    @staticmethod
    def is_available(availability: AvailabilityResult, start_date: Optional[date]) -> bool:
        """
        Check a provider can take a new booking.

        With a start date at least one weekday must be open on that date;
        without one the provider must have a schedule and not be fully booked.
        """
        if not availability.has_schedule:
            return False
        if start_date is None:
            return availability.earliest_date is not None
        return availability.is_available_on(start_date)

    @staticmethod
    def _sort_key(hit: SearchHit):
        earliest = hit.availability.earliest_date
        return (earliest is None, earliest or date.max, hit.provider.name.lower())
