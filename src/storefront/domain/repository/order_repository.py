"""Abstract repository for the local order history."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from storefront.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self, now: datetime) -> int:
        """Generate a time-based order ID, greater than any stored one."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every stored order."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Append a new order. Raises PersistenceFailedError on write failure."""

    @abstractmethod
    def delete(self, order_id: int) -> None:
        """Remove an order; no-op if it does not exist."""
