"""Abstract repository for shop-wide settings stored with the catalog."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.store_hours import StoreHours


class SettingsRepository(ABC):

    @abstractmethod
    def get_store_hours(self) -> StoreHours | None:
        """Return saved opening hours, or None if never saved.

        Raises RemoteUnavailableError if the backend cannot be read.
        """

    @abstractmethod
    def save_store_hours(self, hours: StoreHours) -> None:
        """Persist opening hours."""
