"""Abstract repository for the shopper's cart snapshot."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import CartLine


class CartRepository(ABC):

    @abstractmethod
    def load(self) -> list[CartLine]:
        """Return the saved cart; an empty list if missing or unreadable."""

    @abstractmethod
    def save(self, lines: list[CartLine]) -> None:
        """Overwrite the saved cart with *lines*."""
