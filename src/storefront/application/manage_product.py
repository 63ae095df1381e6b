"""Application services: admin catalog maintenance.

Writes go straight to the catalog with no conflict detection; two admins
editing the same product race and the backend keeps whichever write lands
last.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import CatalogProduct, ProductDraft
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.repository.image_store import ImageStore

logger = structlog.get_logger(__name__)


def _draft(name: str, price: str, stock: int, category: str, image_url: str) -> ProductDraft:
    draft = ProductDraft(
        name=name,
        price=Money.of(price),
        stock=stock,
        category=category,
        image_url=image_url,
    )
    draft.validate()
    return draft.normalized()


class AddProductHandler:

    def __init__(self, catalog: CatalogRepository) -> None:
        self._catalog = catalog

    def handle(
        self,
        name: str,
        price: str,
        stock: int,
        category: str,
        image_url: str = "",
    ) -> CatalogProduct:
        """Add a new product to the catalog."""
        return self._catalog.insert(_draft(name, price, stock, category, image_url))


class UpdateProductHandler:

    def __init__(self, catalog: CatalogRepository) -> None:
        self._catalog = catalog

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        price: str | None = None,
        stock: int | None = None,
        category: str | None = None,
        image_url: str | None = None,
    ) -> CatalogProduct:
        """Edit a product; omitted fields keep their current values."""
        current = self._catalog.get_by_id(product_id)
        if current is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        draft = _draft(
            name=current.name if name is None else name,
            price=str(current.price.amount) if price is None else price,
            stock=current.stock if stock is None else stock,
            category=current.category if category is None else category,
            image_url=current.image_url if image_url is None else image_url,
        )
        return self._catalog.update(product_id, draft)


class AdjustStockHandler:

    def __init__(self, catalog: CatalogRepository) -> None:
        self._catalog = catalog

    def handle(self, product_id: str, change: int) -> int:
        """Add *change* (may be negative) to stock, never going below 0."""
        product = self._catalog.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        new_stock = max(0, product.stock + change)
        self._catalog.update_stock(product_id, new_stock)
        return new_stock


class DeleteProductHandler:

    def __init__(self, catalog: CatalogRepository, images: ImageStore) -> None:
        self._catalog = catalog
        self._images = images

    def handle(self, product_id: str) -> CatalogProduct:
        product = self._catalog.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        self._discard_image_best_effort(product.image_url)
        self._catalog.delete(product_id)
        return product

    def _discard_image_best_effort(self, image_url: str) -> None:
        """Non-critical: a leftover image must not block the delete."""
        if not image_url or not self._images.owns(image_url):
            return
        try:
            self._images.delete(image_url)
        except OSError as exc:
            logger.warning("image_delete_failed", image_url=image_url, error=str(exc))
