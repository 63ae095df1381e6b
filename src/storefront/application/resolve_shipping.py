"""Application service: turn the shopper's location into a shipping quote.

A failed lookup yields an ERROR quote rather than an exception, so checkout
stays blocked until the shopper retries (calls ``handle()`` again).  A fix
younger than ``max_age_s`` is reused without asking the provider.  The fix
lives on the handler; pass a ``LocationFixCache`` to reuse it across
handlers (the CLI builds a new one per command).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

import structlog

from storefront.domain.exceptions import LocationUnavailableError
from storefront.domain.model.shipping import (
    Coordinates,
    LocationFix,
    ShippingPolicy,
    ShippingQuote,
    haversine_km,
)
from storefront.domain.repository.location_provider import (
    LocationFixCache,
    LocationProvider,
)

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ResolveShippingHandler:

    def __init__(
        self,
        provider: LocationProvider,
        store_location: Coordinates,
        policy: ShippingPolicy,
        timeout_s: float = 10.0,
        max_age_s: float = 300.0,
        clock: Callable[[], datetime] = _utcnow,
        cache: LocationFixCache | None = None,
    ) -> None:
        self._provider = provider
        self._store_location = store_location
        self._policy = policy
        self._timeout_s = timeout_s
        self._max_age_s = max_age_s
        self._clock = clock
        self._cache = cache
        self._last_fix: LocationFix | None = cache.get_last_fix() if cache is not None else None

    def handle(self, refresh: bool = False) -> ShippingQuote:
        """Quote shipping; *refresh* skips any remembered fix."""
        try:
            fix = self._current_fix(refresh)
        except LocationUnavailableError as exc:
            logger.info("location_unavailable", reason=exc.reason)
            return ShippingQuote.failed(str(exc))

        distance = haversine_km(fix.coordinates, self._store_location)
        quote = ShippingQuote.for_distance(distance, self._policy)
        logger.debug("shipping_quoted", distance_km=round(distance, 2), fee=quote.fee.amount)
        return quote

    def _current_fix(self, refresh: bool) -> LocationFix:
        if self._last_fix is not None and not refresh:
            age = (self._clock() - self._last_fix.taken_at).total_seconds()
            if age <= self._max_age_s:
                return self._last_fix
        fix = self._provider.current_position(self._timeout_s)
        self._last_fix = fix
        if self._cache is not None:
            self._cache.save_last_fix(fix)
        return fix
