"""Application service: Checkout.

Turns the selected cart lines into an Order, stores it in the local order
history and produces the messaging deep link.  Three things can stop a
submission, and in each case nothing is recorded:

- ``ValidationError`` with per-field messages (form, location, selection);
- ``StockConflictError`` after the offending lines were clamped;
- ``PersistenceFailedError`` when the order history cannot be written.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

import structlog

from storefront.application.cart_store import CartStore
from storefront.application.dto import CheckoutRequest, CheckoutResultDTO, order_to_dto
from storefront.application.reconcile_stock import StockReconciler
from storefront.domain.exceptions import StockConflictError, ValidationError
from storefront.domain.model.order import Customer, Order
from storefront.domain.model.shipping import ShippingQuote
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.repository.customer_repository import CustomerRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.order_message import build_deep_link, compose_order_message
from storefront.domain.service.stock_reconciler import find_overstocked

logger = structlog.get_logger(__name__)

PHONE_PATTERN = re.compile(r"^[0-9+\-\s()]+$")


@dataclass(frozen=True)
class MessagingTarget:
    base_url: str
    recipient: str


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_checkout(
    request: CheckoutRequest,
    quote: ShippingQuote,
    selected_count: int,
) -> dict[str, str]:
    """Return field -> message for every problem; empty when submittable."""
    errors: dict[str, str] = {}
    if not request.name.strip():
        errors["name"] = "Name is required"
    if not request.address.strip():
        errors["address"] = "Address is required"
    if not request.phone.strip():
        errors["phone"] = "Phone number is required"
    elif not PHONE_PATTERN.match(request.phone):
        errors["phone"] = "Phone number format is invalid"
    if not quote.is_resolved:
        errors["location"] = quote.error or "Location is required to calculate shipping"
    if selected_count == 0:
        errors["items"] = "No items selected"
    return errors


class CheckoutHandler:

    def __init__(
        self,
        cart_store: CartStore,
        reconciler: StockReconciler,
        catalog: CatalogRepository,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
        target: MessagingTarget,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._cart_store = cart_store
        self._reconciler = reconciler
        self._catalog = catalog
        self._order_repo = order_repo
        self._customer_repo = customer_repo
        self._target = target
        self._clock = clock

    def handle(self, request: CheckoutRequest, quote: ShippingQuote) -> CheckoutResultDTO:
        selected = [line for line in self._cart_store.selected() if line.quantity > 0]
        errors = validate_checkout(request, quote, len(selected))
        if errors:
            raise ValidationError("; ".join(errors.values()), fields=errors)

        self._recheck_stock()

        now = self._clock()
        order = Order.create(
            order_id=self._order_repo.next_id(now),
            lines=self._cart_store.selected(),
            shipping=quote.fee,
            customer=Customer(
                name=request.name.strip(),
                address=request.address.strip(),
                phone=request.phone.strip(),
            ),
            notes=request.notes,
            distance_km=quote.distance_km,
            created_at=now,
        )

        # Raises PersistenceFailedError; cart is untouched in that case.
        self._order_repo.add(order)
        self._customer_repo.save(order.customer)
        self._cart_store.clear_selected()
        logger.info("order_placed", order_id=order.id, total=order.total.amount, items=len(order.items))

        message = compose_order_message(order)
        return CheckoutResultDTO(
            order=order_to_dto(order),
            message=message,
            deep_link=build_deep_link(self._target.base_url, self._target.recipient, message),
        )

    def prefill(self, request: CheckoutRequest) -> CheckoutRequest:
        """Fill blank contact fields from the last successful checkout."""
        last = self._customer_repo.get_last()
        if last is None:
            return request
        return CheckoutRequest(
            name=request.name or last.name,
            address=request.address or last.address,
            phone=request.phone or last.phone,
            notes=request.notes,
        )

    def _recheck_stock(self) -> None:
        stock = self._reconciler.latest_stock(self._catalog)
        if stock is None:
            logger.warning("stock_recheck_skipped", reason="no_snapshot")
            return
        adjustments = find_overstocked(self._cart_store.selected(), stock)
        if adjustments:
            self._reconciler.apply(adjustments)
            raise StockConflictError(adjustments)
