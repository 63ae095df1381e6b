"""Application service: shopper-facing cart changes.

The Cart Store itself never looks at stock.  These handlers apply the
shop's policy in front of it: out-of-stock products cannot be added and a
typed quantity is capped at the stock currently shown.
"""

from __future__ import annotations

import structlog

from storefront.application.cart_store import CartStore
from storefront.application.dto import CartDTO, cart_to_dto
from storefront.domain.exceptions import (
    EntityNotFoundError,
    RemoteUnavailableError,
    ValidationError,
)
from storefront.domain.repository.catalog_repository import CatalogRepository

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(self, catalog: CatalogRepository, cart_store: CartStore) -> None:
        self._catalog = catalog
        self._cart_store = cart_store

    def handle(self, product_id: str) -> CartDTO:
        product = self._catalog.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        if not product.in_stock:
            raise ValidationError(f"{product.name} is out of stock")
        return cart_to_dto(self._cart_store.add(product))


class ChangeQuantityHandler:

    def __init__(self, catalog: CatalogRepository, cart_store: CartStore) -> None:
        self._catalog = catalog
        self._cart_store = cart_store

    def handle(self, product_id: str, quantity: int) -> CartDTO:
        """Set a line's quantity; 0 or less removes it."""
        if self._cart_store.find(product_id) is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' is not in the cart")

        try:
            product = self._catalog.get_by_id(product_id)
        except RemoteUnavailableError as exc:
            # Cap skipped; the reconciler corrects it on the next snapshot.
            logger.warning("catalog_unavailable", error=str(exc))
            product = None
        if product is not None and quantity > product.stock:
            quantity = product.stock

        return cart_to_dto(self._cart_store.set_quantity(product_id, quantity))
