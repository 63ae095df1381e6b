"""Abstract repository for the remote catalog.

The catalog is an eventually consistent document store with realtime push:
every write is followed by a full snapshot delivered to subscribers in the
order the writes happened.  Concrete adapters (JSON file, MongoDB) live in
the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from storefront.domain.model.product import CatalogProduct, ProductDraft

SnapshotListener = Callable[[list[CatalogProduct]], None]


class CatalogRepository(ABC):

    def __init__(self) -> None:
        self._listeners: list[SnapshotListener] = []

    @abstractmethod
    def list_all(self) -> list[CatalogProduct]:
        """Return every product. Raises RemoteUnavailableError on failure."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> CatalogProduct | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def insert(self, draft: ProductDraft) -> CatalogProduct:
        """Store a new product and return it with its assigned ID."""

    @abstractmethod
    def update(self, product_id: str, draft: ProductDraft) -> CatalogProduct:
        """Overwrite an existing product's fields (last write wins)."""

    @abstractmethod
    def update_stock(self, product_id: str, stock: int) -> None:
        """Set the stock level of an existing product."""

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product; no-op if it does not exist."""

    # --- Realtime push --------------------------------------------------------

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register *listener* for snapshots; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self) -> None:
        """Push the current full snapshot to every subscriber."""
        if not self._listeners:
            return
        snapshot = self.list_all()
        for listener in list(self._listeners):
            listener(snapshot)
