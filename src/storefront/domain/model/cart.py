"""Cart lines and the cart reducer.

The cart is a plain list of immutable CartLines.  Every change goes through
``reduce_cart(lines, action)`` which returns a *new* list, so the owning
store can persist after each action and never leaks a half-applied change.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from storefront.domain.model.product import CatalogProduct
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class CartLine:
    """One product the shopper intends to buy.

    ``name``, ``price`` and ``image_url`` are a snapshot taken when the
    product was first added; only ``quantity`` is ever corrected from the
    live catalog.
    """

    id: str
    name: str
    price: Money
    quantity: int
    selected: bool = True
    image_url: str = ""

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity

    @staticmethod
    def from_product(product: CatalogProduct) -> CartLine:
        return CartLine(
            id=product.id,
            name=product.name,
            price=product.price,
            quantity=1,
            selected=True,
            image_url=product.image_url,
        )


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AddItem:
    product: CatalogProduct


@dataclass(frozen=True)
class RemoveItem:
    product_id: str


@dataclass(frozen=True)
class SetQuantity:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class ToggleSelected:
    product_id: str


@dataclass(frozen=True)
class ToggleSelectAll:
    pass


@dataclass(frozen=True)
class ClearSelected:
    pass


CartAction = AddItem | RemoveItem | SetQuantity | ToggleSelected | ToggleSelectAll | ClearSelected


def reduce_cart(lines: list[CartLine], action: CartAction) -> list[CartLine]:
    """Apply *action* to *lines* and return the resulting cart."""
    if isinstance(action, AddItem):
        product_id = action.product.id
        if any(line.id == product_id for line in lines):
            # No stock check here; the reconciler corrects overshoot.
            return [
                replace(line, quantity=line.quantity + 1) if line.id == product_id else line
                for line in lines
            ]
        return [*lines, CartLine.from_product(action.product)]

    if isinstance(action, RemoveItem):
        return [line for line in lines if line.id != action.product_id]

    if isinstance(action, SetQuantity):
        if action.quantity <= 0:
            return [line for line in lines if line.id != action.product_id]
        return [
            replace(line, quantity=action.quantity) if line.id == action.product_id else line
            for line in lines
        ]

    if isinstance(action, ToggleSelected):
        return [
            replace(line, selected=not line.selected) if line.id == action.product_id else line
            for line in lines
        ]

    if isinstance(action, ToggleSelectAll):
        target = not all(line.selected for line in lines)
        return [replace(line, selected=target) for line in lines]

    if isinstance(action, ClearSelected):
        return [line for line in lines if not line.selected]

    raise TypeError(f"Unknown cart action: {action!r}")


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def selected_lines(lines: list[CartLine]) -> list[CartLine]:
    return [line for line in lines if line.selected]


def selected_subtotal(lines: list[CartLine]) -> Money:
    result = Money.zero()
    for line in selected_lines(lines):
        result = result + line.line_total
    return result
