"""Abstract source of the shopper's current position."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.shipping import LocationFix


class LocationProvider(ABC):

    @abstractmethod
    def current_position(self, timeout_s: float) -> LocationFix:
        """Return a high-accuracy fix within *timeout_s* seconds.

        Raises LocationUnavailableError (denied, unavailable, timeout,
        unsupported).
        """


class LocationFixCache(ABC):
    """Keeps the most recent fix between separate runs."""

    @abstractmethod
    def get_last_fix(self) -> LocationFix | None: ...

    @abstractmethod
    def save_last_fix(self, fix: LocationFix) -> None: ...
