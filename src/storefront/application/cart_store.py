"""Cart Store — the single owner of the shopper's cart.

All mutations go through ``dispatch()``, which applies one action with the
cart reducer and writes the result through to the cart repository before
returning.  There is no batching: each dispatched action is persisted on
its own, in dispatch order.
"""

from __future__ import annotations

from storefront.domain.model.cart import (
    AddItem,
    CartAction,
    CartLine,
    ClearSelected,
    RemoveItem,
    SetQuantity,
    ToggleSelectAll,
    ToggleSelected,
    reduce_cart,
    selected_lines,
    selected_subtotal,
)
from storefront.domain.model.product import CatalogProduct
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository


class CartStore:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo
        self._lines: list[CartLine] = cart_repo.load()

    def dispatch(self, action: CartAction) -> list[CartLine]:
        self._lines = reduce_cart(self._lines, action)
        self._cart_repo.save(self._lines)
        return self.lines

    # --- Named mutations ------------------------------------------------------

    def add(self, product: CatalogProduct) -> list[CartLine]:
        return self.dispatch(AddItem(product))

    def remove(self, product_id: str) -> list[CartLine]:
        return self.dispatch(RemoveItem(product_id))

    def set_quantity(self, product_id: str, quantity: int) -> list[CartLine]:
        return self.dispatch(SetQuantity(product_id, quantity))

    def toggle_selected(self, product_id: str) -> list[CartLine]:
        return self.dispatch(ToggleSelected(product_id))

    def toggle_select_all(self) -> list[CartLine]:
        return self.dispatch(ToggleSelectAll())

    def clear_selected(self) -> list[CartLine]:
        return self.dispatch(ClearSelected())

    # --- Queries --------------------------------------------------------------

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines)

    def find(self, product_id: str) -> CartLine | None:
        for line in self._lines:
            if line.id == product_id:
                return line
        return None

    def selected(self) -> list[CartLine]:
        return selected_lines(self._lines)

    def subtotal(self) -> Money:
        return selected_subtotal(self._lines)
