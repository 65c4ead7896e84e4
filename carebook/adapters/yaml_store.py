"""
Provider repository backed by the YAML configuration file.
"""

import logging
from typing import List

from ..config import AppConfig
from ..domain.exceptions import ProviderNotFoundError, SchedulingError
from ..domain.models import Booking, Provider
from ..records import ProviderRecord, booking_from_row, provider_from_record

logger = logging.getLogger(__name__)


class YamlProviderStore:
    """
    Serves providers declared in the `providers` section of the config.

    Each call rebuilds the domain objects from the records, so callers get a
    consistent snapshot of the loaded file.
    """

    def __init__(self, config: AppConfig):
        self.config = config

    def list_providers(self) -> List[Provider]:
        """Return every configured provider."""
        return [self._to_provider(record) for record in self.config.providers]

    def get_provider(self, provider_id: str) -> Provider:
        """
        Look up a provider by id or name.

        Raises:
            ProviderNotFoundError: If no provider matches
        """
        record = self.config.find_provider(provider_id)
        if record is None:
            raise ProviderNotFoundError(f"Unknown provider: '{provider_id}'")
        return self._to_provider(record)

    def _to_provider(self, record: ProviderRecord) -> Provider:
        bookings: List[Booking] = []

        for row in record.bookings:
            try:
                bookings.append(booking_from_row(row))
            except SchedulingError as exc:
                # Skip invalid bookings
                logger.warning("Skipping booking %s of provider %s: %s", row.id, record.id, exc)

        return provider_from_record(
            record,
            bookings=bookings,
            default_capacity=self.config.defaults.capacity,
            default_vacation_weeks=self.config.defaults.vacation_weeks,
        )
