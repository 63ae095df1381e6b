"""Abstract repository for small per-device UI state."""

from __future__ import annotations

from abc import ABC, abstractmethod


class SessionRepository(ABC):

    @abstractmethod
    def get_last_page(self) -> str | None:
        """Return the last section the shopper viewed."""

    @abstractmethod
    def save_last_page(self, page: str) -> None:
        """Remember the section the shopper is viewing."""
