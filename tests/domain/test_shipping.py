"""Unit tests for distance and the shipping tiers."""

import pytest

from storefront.domain.model.shipping import (
    Coordinates,
    QuoteStatus,
    ShippingPolicy,
    ShippingQuote,
    haversine_km,
)
from storefront.domain.model.value_objects import Money

STORE = Coordinates(latitude=-7.612214173928771, longitude=110.1691279294347)


class TestHaversine:

    def test_same_point_is_zero(self):
        assert haversine_km(STORE, STORE) == pytest.approx(0.0)

    def test_one_degree_of_latitude(self):
        a = Coordinates(0.0, 110.0)
        b = Coordinates(1.0, 110.0)
        assert haversine_km(a, b) == pytest.approx(111.195, abs=0.01)

    def test_symmetric(self):
        other = Coordinates(-7.60, 110.20)
        assert haversine_km(STORE, other) == pytest.approx(haversine_km(other, STORE))


class TestShippingTiers:

    @pytest.mark.parametrize(
        "distance, fee",
        [
            (0.0, 2000),
            (0.99, 2000),
            (1.0, 3000),
            (3.0, 3000),
            (3.01, 4000),
            (5.0, 4000),
            (5.01, 5000),
            (40.0, 5000),
        ],
    )
    def test_fee_for_distance(self, distance, fee):
        assert ShippingPolicy().fee_for(distance) == Money(fee)

    def test_labels(self):
        policy = ShippingPolicy()
        assert policy.label_for(0.5) == "Very close"
        assert policy.label_for(2.0) == "In town"
        assert policy.label_for(4.0) == "Outskirts"
        assert policy.label_for(9.0) == "Out of town"


class TestShippingQuote:

    def test_for_distance_is_resolved(self):
        quote = ShippingQuote.for_distance(2.0, ShippingPolicy())
        assert quote.is_resolved
        assert quote.fee == Money(3000)
        assert quote.distance_km == 2.0
        assert quote.label == "In town"

    def test_pending_is_not_resolved(self):
        quote = ShippingQuote.pending()
        assert quote.status == QuoteStatus.PENDING
        assert not quote.is_resolved

    def test_failed_keeps_message(self):
        quote = ShippingQuote.failed("Location permission denied")
        assert quote.status == QuoteStatus.ERROR
        assert quote.error == "Location permission denied"
        assert quote.fee is None
