"""Location providers usable outside a browser."""

from __future__ import annotations

from datetime import datetime, timezone

from storefront.domain.exceptions import LocationUnavailableError
from storefront.domain.model.shipping import Coordinates, LocationFix
from storefront.domain.repository.location_provider import LocationProvider


class StaticLocationProvider(LocationProvider):
    """Answers with coordinates the shopper typed in."""

    def __init__(self, coordinates: Coordinates) -> None:
        self._coordinates = coordinates

    def current_position(self, timeout_s: float) -> LocationFix:
        lat, lng = self._coordinates.latitude, self._coordinates.longitude
        if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
            raise LocationUnavailableError(
                LocationUnavailableError.POSITION_UNAVAILABLE,
                f"Coordinates out of range: {lat}, {lng}",
            )
        return LocationFix(coordinates=self._coordinates, taken_at=datetime.now(timezone.utc))


class UnsupportedLocationProvider(LocationProvider):
    """Used when no position source is available at all."""

    def current_position(self, timeout_s: float) -> LocationFix:
        raise LocationUnavailableError(LocationUnavailableError.UNSUPPORTED)
