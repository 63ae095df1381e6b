"""Application services: the shopper's local order history (queries + delete)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.order_repository import OrderRepository


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ListOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        retention_days: int = 30,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._order_repo = order_repo
        self._retention = timedelta(days=retention_days)
        self._clock = clock

    def handle(self) -> list[OrderDTO]:
        """Orders newer than the retention window, newest first."""
        cutoff = self._clock() - self._retention
        orders = [o for o in self._order_repo.list_all() if o.created_at > cutoff]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return [order_to_dto(o) for o in orders]


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order_to_dto(order)


class DeleteOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> None:
        if self._order_repo.get_by_id(order_id) is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        self._order_repo.delete(order_id)
