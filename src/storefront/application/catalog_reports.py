"""Application services: admin catalog reports (queries)."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.catalog_repository import CatalogRepository


@dataclass(frozen=True)
class CategoryStatDTO:
    category: str
    count: int
    total_stock: int
    total_value: str


@dataclass(frozen=True)
class CatalogStatsDTO:
    categories: list[CategoryStatDTO]
    total_products: int
    total_value: str


class LowStockHandler:

    def __init__(self, catalog: CatalogRepository, threshold: int = 5) -> None:
        self._catalog = catalog
        self._threshold = threshold

    def handle(self) -> list[ProductDTO]:
        return [
            product_to_dto(p)
            for p in self._catalog.list_all()
            if p.stock <= self._threshold
        ]


class CategoryStatsHandler:

    def __init__(self, catalog: CatalogRepository) -> None:
        self._catalog = catalog

    def handle(self) -> CatalogStatsDTO:
        counts: dict[str, int] = {}
        stock: dict[str, int] = {}
        value: dict[str, Money] = {}
        grand_total = Money.zero()

        products = self._catalog.list_all()
        for p in products:
            counts[p.category] = counts.get(p.category, 0) + 1
            stock[p.category] = stock.get(p.category, 0) + p.stock
            worth = p.price * p.stock
            value[p.category] = value.get(p.category, Money.zero()) + worth
            grand_total = grand_total + worth

        return CatalogStatsDTO(
            categories=[
                CategoryStatDTO(
                    category=name,
                    count=counts[name],
                    total_stock=stock[name],
                    total_value=str(value[name]),
                )
                for name in counts
            ],
            total_products=len(products),
            total_value=str(grand_total),
        )
