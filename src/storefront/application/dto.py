"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Money is pre-formatted
(e.g. "Rp 15.000").
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.cart import CartLine, selected_lines, selected_subtotal
from storefront.domain.model.order import Order
from storefront.domain.model.product import CatalogProduct


@dataclass(frozen=True)
class CheckoutRequest:
    """Input: the checkout form as typed by the shopper."""

    name: str
    address: str
    phone: str
    notes: str = ""


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    name: str
    quantity: int
    selected: bool
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    lines: list[CartLineDTO]
    selected_count: int
    selected_subtotal: str

    @property
    def all_selected(self) -> bool:
        return bool(self.lines) and all(line.selected for line in self.lines)


@dataclass(frozen=True)
class OrderLineDTO:
    name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    id: int
    short_id: str
    status: str
    items: list[OrderLineDTO]
    subtotal: str
    shipping: str
    total: str
    customer_name: str
    customer_address: str
    customer_phone: str
    notes: str
    created_at: str


@dataclass(frozen=True)
class CheckoutResultDTO:
    order: OrderDTO
    message: str
    deep_link: str


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    category: str
    price: str
    stock: int


# --- Mapping ------------------------------------------------------------------


def cart_to_dto(lines: list[CartLine]) -> CartDTO:
    return CartDTO(
        lines=[
            CartLineDTO(
                product_id=line.id,
                name=line.name,
                quantity=line.quantity,
                selected=line.selected,
                unit_price=str(line.price),
                line_total=str(line.line_total),
            )
            for line in lines
        ],
        selected_count=len(selected_lines(lines)),
        selected_subtotal=str(selected_subtotal(lines)),
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        short_id=order.short_id,
        status=order.status.value,
        items=[
            OrderLineDTO(
                name=item.name,
                quantity=item.quantity,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        subtotal=str(order.subtotal),
        shipping=str(order.shipping),
        total=str(order.total),
        customer_name=order.customer.name,
        customer_address=order.customer.address,
        customer_phone=order.customer.phone,
        notes=order.notes,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )


def product_to_dto(product: CatalogProduct) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        category=product.category,
        price=str(product.price),
        stock=product.stock,
    )
