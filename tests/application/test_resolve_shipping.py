"""Tests for turning the shopper's position into a shipping quote."""

from datetime import datetime, timedelta, timezone

from storefront.application.resolve_shipping import ResolveShippingHandler
from storefront.domain.exceptions import LocationUnavailableError
from storefront.domain.model.shipping import Coordinates, QuoteStatus, ShippingPolicy
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeLocationFixCache, FakeLocationProvider

STORE = Coordinates(latitude=-7.612214173928771, longitude=110.1691279294347)
T0 = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)


def _setup(provider: FakeLocationProvider, now: list[datetime]) -> ResolveShippingHandler:
    return ResolveShippingHandler(
        provider=provider,
        store_location=STORE,
        policy=ShippingPolicy(),
        clock=lambda: now[0],
    )


class TestResolveShipping:

    def test_at_the_store_is_cheapest_tier(self):
        handler = _setup(FakeLocationProvider(STORE, taken_at=T0), [T0])
        quote = handler.handle()
        assert quote.is_resolved
        assert quote.fee == Money(2000)
        assert quote.label == "Very close"
        assert quote.distance_km == 0.0

    def test_about_two_km_away(self):
        # ~0.018 degrees of latitude is ~2 km.
        near = Coordinates(STORE.latitude + 0.018, STORE.longitude)
        quote = _setup(FakeLocationProvider(near, taken_at=T0), [T0]).handle()
        assert quote.fee == Money(3000)
        assert 1.9 < quote.distance_km < 2.1

    def test_permission_denied_gives_error_quote(self):
        provider = FakeLocationProvider(error_reason=LocationUnavailableError.PERMISSION_DENIED)
        quote = _setup(provider, [T0]).handle()
        assert quote.status == QuoteStatus.ERROR
        assert "permission denied" in quote.error
        assert quote.fee is None

    def test_retry_after_error_asks_again(self):
        provider = FakeLocationProvider(STORE, error_reason=LocationUnavailableError.TIMEOUT, taken_at=T0)
        handler = _setup(provider, [T0])
        assert not handler.handle().is_resolved

        provider.error_reason = None
        assert handler.handle().is_resolved
        assert provider.calls == 2


class TestFixCache:

    def test_recent_fix_is_reused(self):
        now = [T0]
        provider = FakeLocationProvider(STORE, taken_at=T0)
        handler = _setup(provider, now)
        handler.handle()
        now[0] = T0 + timedelta(seconds=300)
        handler.handle()
        assert provider.calls == 1

    def test_stale_fix_is_refreshed(self):
        now = [T0]
        provider = FakeLocationProvider(STORE, taken_at=T0)
        handler = _setup(provider, now)
        handler.handle()
        now[0] = T0 + timedelta(seconds=301)
        handler.handle()
        assert provider.calls == 2

    def test_fix_is_shared_through_cache(self):
        now = [T0]
        provider = FakeLocationProvider(STORE, taken_at=T0)
        cache = FakeLocationFixCache()
        ResolveShippingHandler(
            provider=provider, store_location=STORE, policy=ShippingPolicy(),
            clock=lambda: now[0], cache=cache,
        ).handle()
        now[0] = T0 + timedelta(seconds=120)
        quote = ResolveShippingHandler(
            provider=provider, store_location=STORE, policy=ShippingPolicy(),
            clock=lambda: now[0], cache=cache,
        ).handle()
        assert quote.is_resolved
        assert provider.calls == 1
        assert cache.fix.taken_at == T0

    def test_refresh_ignores_recent_fix(self):
        provider = FakeLocationProvider(STORE, taken_at=T0)
        handler = _setup(provider, [T0])
        handler.handle()
        handler.handle(refresh=True)
        assert provider.calls == 2
