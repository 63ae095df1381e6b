"""Abstract repository for the last-used customer contact block."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def get_last(self) -> Customer | None:
        """Return the contact block of the last checkout, if any."""

    @abstractmethod
    def save(self, customer: Customer) -> None:
        """Remember *customer* for the next checkout."""
