"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from pymongo import MongoClient
from pymongo.database import Database

from storefront.application.cart_store import CartStore
from storefront.application.checkout import MessagingTarget
from storefront.application.reconcile_stock import StockReconciler
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.repository.settings_repository import SettingsRepository
from storefront.infrastructure.media import LocalImageStore
from storefront.infrastructure.persistence.json_catalog_repository import (
    JsonCatalogRepository,
    JsonSettingsRepository,
)
from storefront.infrastructure.persistence.local_repositories import (
    LocalCartRepository,
    LocalCustomerRepository,
    LocalLocationFixCache,
    LocalOrderRepository,
    LocalSessionRepository,
)
from storefront.infrastructure.persistence.local_store import JsonFileLocalStore
from storefront.infrastructure.persistence.mongo_catalog_repository import (
    MongoCatalogRepository,
    MongoSettingsRepository,
)
from storefront.infrastructure.settings import Settings, load_settings


@lru_cache(maxsize=1)
def settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def _mongo_database() -> Database:
    cfg = settings()
    return MongoClient(cfg.mongo_url)[cfg.mongo_db]


# --- Remote catalog -----------------------------------------------------------


def catalog_repository() -> CatalogRepository:
    cfg = settings()
    if cfg.mongo_url:
        return MongoCatalogRepository(_mongo_database()["products"])
    return JsonCatalogRepository(cfg.data_dir / "catalog.json")


def settings_repository() -> SettingsRepository:
    cfg = settings()
    if cfg.mongo_url:
        return MongoSettingsRepository(_mongo_database()["settings"])
    return JsonSettingsRepository(cfg.data_dir / "settings.json")


def image_store() -> LocalImageStore:
    cfg = settings()
    return LocalImageStore(cfg.data_dir / "media", cfg.media_url_prefix)


# --- Device-local state -------------------------------------------------------


def local_store() -> JsonFileLocalStore:
    return JsonFileLocalStore(settings().data_dir / "local_storage.json")


def cart_store() -> CartStore:
    return CartStore(LocalCartRepository(local_store(), settings().cart_key))


def order_repository() -> LocalOrderRepository:
    return LocalOrderRepository(local_store(), settings().orders_key)


def customer_repository() -> LocalCustomerRepository:
    return LocalCustomerRepository(local_store(), settings().customer_key)


def session_repository() -> LocalSessionRepository:
    return LocalSessionRepository(local_store(), settings().page_key)


def location_cache() -> LocalLocationFixCache:
    return LocalLocationFixCache(local_store(), settings().location_key)


def messaging_target() -> MessagingTarget:
    cfg = settings()
    return MessagingTarget(base_url=cfg.whatsapp_base_url, recipient=cfg.whatsapp_number)


def shop_session() -> tuple[CatalogRepository, CartStore, StockReconciler]:
    """Catalog, cart and a reconciler already listening to the catalog."""
    catalog = catalog_repository()
    store = cart_store()
    reconciler = StockReconciler(store)
    reconciler.attach(catalog)
    return catalog, store, reconciler
