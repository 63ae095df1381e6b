"""LocalStore-backed implementations of the per-device repositories.

Each repository owns one key.  Reads never fail: missing or corrupt values
fall back to an empty/default value and are logged as persistence
warnings.  There is no schema version in the stored JSON.
"""

from __future__ import annotations

import json
from datetime import datetime

import structlog

from storefront.domain.exceptions import DomainException, PersistenceFailedError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import Customer, Order
from storefront.domain.model.shipping import LocationFix
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.customer_repository import CustomerRepository
from storefront.domain.repository.location_provider import LocationFixCache
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.session_repository import SessionRepository
from storefront.infrastructure.persistence.documents import (
    cart_line_from_document,
    cart_line_to_document,
    customer_from_document,
    customer_to_document,
    location_fix_from_document,
    location_fix_to_document,
    order_from_document,
    order_to_document,
)
from storefront.infrastructure.persistence.local_store import LocalStore

logger = structlog.get_logger(__name__)

# What a hand-edited or truncated value can throw while being decoded.
_DECODE_ERRORS = (ValueError, TypeError, KeyError, AttributeError, DomainException)


class _JsonKey:

    def __init__(self, store: LocalStore, key: str) -> None:
        self._store = store
        self._key = key

    def _read(self, decode, default):
        raw = self._store.get(self._key)
        if raw is None:
            return default
        try:
            return decode(json.loads(raw))
        except _DECODE_ERRORS as exc:
            logger.warning("persistence_warning", key=self._key, op="read", error=str(exc))
            return default

    def _write(self, value) -> None:
        self._store.set(self._key, json.dumps(value))


class LocalCartRepository(_JsonKey, CartRepository):

    def load(self) -> list[CartLine]:
        return self._read(lambda raw: [cart_line_from_document(d) for d in raw], [])

    def save(self, lines: list[CartLine]) -> None:
        try:
            self._write([cart_line_to_document(line) for line in lines])
        except OSError as exc:
            # The in-memory cart stays authoritative until the next write.
            logger.warning("persistence_warning", key=self._key, op="write", error=str(exc))


class LocalOrderRepository(_JsonKey, OrderRepository):

    def next_id(self, now: datetime) -> int:
        candidate = int(now.timestamp() * 1000)
        existing = [o.id for o in self.list_all()]
        if existing and max(existing) >= candidate:
            return max(existing) + 1
        return candidate

    def list_all(self) -> list[Order]:
        return self._read(lambda raw: [order_from_document(d) for d in raw], [])

    def get_by_id(self, order_id: int) -> Order | None:
        for order in self.list_all():
            if order.id == order_id:
                return order
        return None

    def add(self, order: Order) -> None:
        orders = self.list_all()
        orders.append(order)
        self._save_all(orders)

    def delete(self, order_id: int) -> None:
        orders = self.list_all()
        remaining = [o for o in orders if o.id != order_id]
        if len(remaining) != len(orders):
            self._save_all(remaining)

    def _save_all(self, orders: list[Order]) -> None:
        try:
            self._write([order_to_document(o) for o in orders])
        except OSError as exc:
            logger.error("order_history_write_failed", key=self._key, error=str(exc))
            raise PersistenceFailedError(
                "Could not save your order. Please try again."
            ) from exc


class LocalCustomerRepository(_JsonKey, CustomerRepository):

    def get_last(self) -> Customer | None:
        return self._read(customer_from_document, None)

    def save(self, customer: Customer) -> None:
        try:
            self._write(customer_to_document(customer))
        except OSError as exc:
            logger.warning("persistence_warning", key=self._key, op="write", error=str(exc))


class LocalLocationFixCache(_JsonKey, LocationFixCache):

    def get_last_fix(self) -> LocationFix | None:
        return self._read(location_fix_from_document, None)

    def save_last_fix(self, fix: LocationFix) -> None:
        try:
            self._write(location_fix_to_document(fix))
        except OSError as exc:
            logger.warning("persistence_warning", key=self._key, op="write", error=str(exc))


class LocalSessionRepository(SessionRepository):

    def __init__(self, store: LocalStore, key: str) -> None:
        self._store = store
        self._key = key

    def get_last_page(self) -> str | None:
        return self._store.get(self._key)

    def save_last_page(self, page: str) -> None:
        try:
            self._store.set(self._key, page)
        except OSError as exc:
            logger.warning("persistence_warning", key=self._key, op="write", error=str(exc))
