"""Domain service: clamp cart quantities to live stock.

The rule is one-way: a quantity above available stock is lowered to the
stock level (removing the line when stock is 0), and nothing is ever
raised.  A product missing from the catalog counts as stock 0.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.cart import CartLine
from storefront.domain.model.product import CatalogProduct


@dataclass(frozen=True)
class StockAdjustment:
    """A cart line whose quantity was lowered to match stock."""

    product_id: str
    product_name: str
    previous_quantity: int
    new_quantity: int

    @property
    def removed(self) -> bool:
        return self.new_quantity == 0

    def describe(self) -> str:
        if self.removed:
            return f"{self.product_name} is out of stock and was removed from your cart"
        return (
            f"{self.product_name}: quantity reduced from "
            f"{self.previous_quantity} to {self.new_quantity} (stock left)"
        )


def stock_by_id(products: list[CatalogProduct]) -> dict[str, int]:
    return {p.id: p.stock for p in products}


def find_overstocked(
    lines: list[CartLine],
    stock: dict[str, int],
) -> list[StockAdjustment]:
    """Return one adjustment per line whose quantity exceeds *stock*.

    Pure: the caller applies the adjustments.
    """
    adjustments: list[StockAdjustment] = []
    for line in lines:
        available = max(0, stock.get(line.id, 0))
        if line.quantity > available:
            adjustments.append(
                StockAdjustment(
                    product_id=line.id,
                    product_name=line.name,
                    previous_quantity=line.quantity,
                    new_quantity=available,
                )
            )
    return adjustments
