"""Shipping fee: distance from the store mapped onto four flat tiers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from storefront.domain.model.value_objects import Money

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class LocationFix:
    """A position reported by a location provider at ``taken_at``."""

    coordinates: Coordinates
    taken_at: datetime


def haversine_km(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance between two points in kilometres."""
    d_lat = math.radians(b.latitude - a.latitude)
    d_lng = math.radians(b.longitude - a.longitude)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.latitude))
        * math.cos(math.radians(b.latitude))
        * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


@dataclass(frozen=True)
class ShippingPolicy:
    """Four-tier step function.

    ``< near_km`` is tier A; ``near_km..town_km`` (both inclusive) is B;
    ``(town_km, outskirts_km]`` is C; anything farther is D.
    """

    near_km: float = 1.0
    town_km: float = 3.0
    outskirts_km: float = 5.0
    near_fee: Money = Money(2000)
    town_fee: Money = Money(3000)
    outskirts_fee: Money = Money(4000)
    far_fee: Money = Money(5000)

    def fee_for(self, distance_km: float) -> Money:
        if distance_km < self.near_km:
            return self.near_fee
        if distance_km <= self.town_km:
            return self.town_fee
        if distance_km <= self.outskirts_km:
            return self.outskirts_fee
        return self.far_fee

    def label_for(self, distance_km: float) -> str:
        if distance_km < self.near_km:
            return "Very close"
        if distance_km <= self.town_km:
            return "In town"
        if distance_km <= self.outskirts_km:
            return "Outskirts"
        return "Out of town"


class QuoteStatus(Enum):
    PENDING = "PENDING"
    RESOLVED = "RESOLVED"
    ERROR = "ERROR"


@dataclass(frozen=True)
class ShippingQuote:
    status: QuoteStatus
    fee: Money | None = None
    distance_km: float | None = None
    label: str = ""
    error: str = ""

    @property
    def is_resolved(self) -> bool:
        return self.status == QuoteStatus.RESOLVED

    @staticmethod
    def pending() -> ShippingQuote:
        return ShippingQuote(status=QuoteStatus.PENDING)

    @staticmethod
    def failed(message: str) -> ShippingQuote:
        return ShippingQuote(status=QuoteStatus.ERROR, error=message)

    @staticmethod
    def for_distance(distance_km: float, policy: ShippingPolicy) -> ShippingQuote:
        return ShippingQuote(
            status=QuoteStatus.RESOLVED,
            fee=policy.fee_for(distance_km),
            distance_km=distance_km,
            label=policy.label_for(distance_km),
        )
