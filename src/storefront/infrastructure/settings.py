"""Runtime configuration.

Defaults are module constants; a handful can be overridden through
``STOREFRONT_*`` environment variables so the same install can point at a
different data directory, recipient number or catalog backend.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from storefront.domain.model.shipping import Coordinates, ShippingPolicy

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

DEFAULT_NAMESPACE = "sayur-yunur"
DEFAULT_WHATSAPP_NUMBER = "6287833415425"
WHATSAPP_BASE_URL = "https://wa.me"
STORE_LOCATION = Coordinates(latitude=-7.612214173928771, longitude=110.1691279294347)

LOCATION_TIMEOUT_S = 10.0
LOCATION_MAX_AGE_S = 300.0
ORDER_RETENTION_DAYS = 30
LOW_STOCK_THRESHOLD = 5
MEDIA_URL_PREFIX = "/media/"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    namespace: str = DEFAULT_NAMESPACE
    whatsapp_number: str = DEFAULT_WHATSAPP_NUMBER
    whatsapp_base_url: str = WHATSAPP_BASE_URL
    store_location: Coordinates = STORE_LOCATION
    shipping_policy: ShippingPolicy = field(default_factory=ShippingPolicy)
    location_timeout_s: float = LOCATION_TIMEOUT_S
    location_max_age_s: float = LOCATION_MAX_AGE_S
    order_retention_days: int = ORDER_RETENTION_DAYS
    low_stock_threshold: int = LOW_STOCK_THRESHOLD
    media_url_prefix: str = MEDIA_URL_PREFIX
    mongo_url: str | None = None
    mongo_db: str = "storefront"
    debug: bool = False

    # --- Local storage keys ---------------------------------------------------

    @property
    def cart_key(self) -> str:
        return f"{self.namespace}-cart"

    @property
    def orders_key(self) -> str:
        return f"{self.namespace}-orders"

    @property
    def customer_key(self) -> str:
        return f"{self.namespace}-customer"

    @property
    def page_key(self) -> str:
        return f"{self.namespace}-current-page"

    @property
    def location_key(self) -> str:
        return f"{self.namespace}-last-location"


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if env is None else env

    store_location = STORE_LOCATION
    if env.get("STOREFRONT_STORE_LAT") and env.get("STOREFRONT_STORE_LNG"):
        store_location = Coordinates(
            latitude=float(env["STOREFRONT_STORE_LAT"]),
            longitude=float(env["STOREFRONT_STORE_LNG"]),
        )

    return Settings(
        data_dir=Path(env.get("STOREFRONT_DATA_DIR") or DEFAULT_DATA_DIR),
        namespace=env.get("STOREFRONT_NAMESPACE") or DEFAULT_NAMESPACE,
        whatsapp_number=env.get("STOREFRONT_WHATSAPP_NUMBER") or DEFAULT_WHATSAPP_NUMBER,
        store_location=store_location,
        mongo_url=env.get("STOREFRONT_MONGO_URL") or None,
        mongo_db=env.get("STOREFRONT_MONGO_DB") or "storefront",
        debug=_flag(env.get("STOREFRONT_DEBUG")),
    )
