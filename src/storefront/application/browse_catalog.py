"""Application service: Browse Catalog use case (query).

The catalog is fetched whole and filtered here; nothing is pushed down to
the remote source.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.exceptions import RemoteUnavailableError
from storefront.domain.model.product import CatalogProduct
from storefront.domain.repository.catalog_repository import CatalogRepository

logger = structlog.get_logger(__name__)

ALL_CATEGORIES = "all"


@dataclass(frozen=True)
class CatalogViewDTO:
    products: list[ProductDTO]
    categories: list[str]
    total_products: int
    available_products: int


def filter_products(
    products: list[CatalogProduct],
    search: str = "",
    category: str = ALL_CATEGORIES,
) -> list[CatalogProduct]:
    needle = search.strip().lower()
    wanted = category.strip().lower()
    return [
        p
        for p in products
        if needle in p.name.lower()
        and (wanted == ALL_CATEGORIES or p.category.lower() == wanted)
    ]


def distinct_categories(products: list[CatalogProduct]) -> list[str]:
    seen: dict[str, None] = {}
    for p in products:
        if p.category:
            seen.setdefault(p.category, None)
    return list(seen)


class BrowseCatalogHandler:

    def __init__(self, catalog: CatalogRepository) -> None:
        self._catalog = catalog

    def handle(self, search: str = "", category: str = ALL_CATEGORIES) -> CatalogViewDTO:
        try:
            products = self._catalog.list_all()
        except RemoteUnavailableError as exc:
            logger.warning("catalog_unavailable", error=str(exc))
            products = []

        return CatalogViewDTO(
            products=[product_to_dto(p) for p in filter_products(products, search, category)],
            categories=distinct_categories(products),
            total_products=len(products),
            available_products=sum(1 for p in products if p.in_stock),
        )
