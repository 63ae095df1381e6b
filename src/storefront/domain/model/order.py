"""Order — an immutable record of a completed checkout.

Orders never leave the shopper's device: they are appended to the local
order history and handed to the messaging channel as text.  The remote
catalog is not told about them and stock is not decremented.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.value_objects import Money


class OrderStatus(Enum):
    # Set once at creation; nothing in the system moves an order past it.
    WAITING = "WAITING"


@dataclass(frozen=True)
class Customer:
    name: str
    address: str
    phone: str


@dataclass(frozen=True)
class OrderLine:
    """Snapshot of a selected cart line at checkout time."""

    product_id: str
    name: str
    unit_price: Money
    quantity: int
    image_url: str = ""

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity

    @staticmethod
    def from_cart_line(line: CartLine) -> OrderLine:
        return OrderLine(
            product_id=line.id,
            name=line.name,
            unit_price=line.price,
            quantity=line.quantity,
            image_url=line.image_url,
        )


@dataclass(frozen=True)
class Order:
    """Aggregate root for checkout records.

    Use ``Order.create()`` for new orders; it computes subtotal and total
    once.  The plain constructor is kept for reconstituting history, where
    stored figures are trusted as-is and never recomputed.
    """

    id: int
    items: tuple[OrderLine, ...]
    subtotal: Money
    shipping: Money
    total: Money
    customer: Customer
    notes: str = ""
    status: OrderStatus = OrderStatus.WAITING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    distance_km: float | None = None

    @staticmethod
    def create(
        order_id: int,
        lines: list[CartLine],
        shipping: Money,
        customer: Customer,
        notes: str = "",
        distance_km: float | None = None,
        created_at: datetime | None = None,
    ) -> Order:
        if not lines:
            raise ValidationError("Order must contain at least one item")

        items = tuple(OrderLine.from_cart_line(line) for line in lines)
        subtotal = Money.zero()
        for item in items:
            subtotal = subtotal + item.line_total

        return Order(
            id=order_id,
            items=items,
            subtotal=subtotal,
            shipping=shipping,
            total=subtotal + shipping,
            customer=customer,
            notes=notes.strip(),
            created_at=created_at or datetime.now(timezone.utc),
            distance_km=distance_km,
        )

    @property
    def short_id(self) -> str:
        return str(self.id)[-6:]
