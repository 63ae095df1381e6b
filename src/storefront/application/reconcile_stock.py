"""Application service: Stock Reconciler.

Listens to catalog snapshots and lowers cart quantities that exceed live
stock.  Snapshots are handled strictly in arrival order, so the clamp from
a later snapshot always wins.  It also remembers the latest stock levels it
has seen, which checkout falls back on when the catalog cannot be reached.
"""

from __future__ import annotations

from typing import Callable

import structlog

from storefront.application.cart_store import CartStore
from storefront.domain.exceptions import RemoteUnavailableError
from storefront.domain.model.product import CatalogProduct
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.service.stock_reconciler import (
    StockAdjustment,
    find_overstocked,
    stock_by_id,
)

logger = structlog.get_logger(__name__)


class StockReconciler:

    def __init__(self, cart_store: CartStore) -> None:
        self._cart_store = cart_store
        self._known_stock: dict[str, int] | None = None

    @property
    def known_stock(self) -> dict[str, int] | None:
        """Stock per product ID from the latest snapshot, None before the first."""
        return None if self._known_stock is None else dict(self._known_stock)

    def attach(self, catalog: CatalogRepository) -> Callable[[], None]:
        """Reconcile on every snapshot *catalog* pushes; returns the unsubscribe."""
        return catalog.subscribe(self.on_snapshot)

    def on_snapshot(self, products: list[CatalogProduct]) -> list[StockAdjustment]:
        self._known_stock = stock_by_id(products)
        return self.apply(find_overstocked(self._cart_store.lines, self._known_stock))

    def refresh(self, catalog: CatalogRepository) -> list[StockAdjustment]:
        """Pull a snapshot and reconcile; does nothing if the catalog is down."""
        try:
            products = catalog.list_all()
        except RemoteUnavailableError as exc:
            logger.warning("catalog_unavailable", error=str(exc))
            return []
        return self.on_snapshot(products)

    def latest_stock(self, catalog: CatalogRepository) -> dict[str, int] | None:
        """Fresh stock levels if reachable, else the last known ones."""
        try:
            products = catalog.list_all()
        except RemoteUnavailableError as exc:
            logger.warning("catalog_unavailable", error=str(exc), fallback="last_snapshot")
            return self.known_stock
        self._known_stock = stock_by_id(products)
        return self.known_stock

    def apply(self, adjustments: list[StockAdjustment]) -> list[StockAdjustment]:
        for adj in adjustments:
            self._cart_store.set_quantity(adj.product_id, adj.new_quantity)
            logger.info(
                "cart_line_clamped",
                product_id=adj.product_id,
                previous=adj.previous_quantity,
                quantity=adj.new_quantity,
            )
        return adjustments
