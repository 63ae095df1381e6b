"""Abstract store for product images referenced by URL."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ImageStore(ABC):

    @abstractmethod
    def owns(self, image_url: str) -> bool:
        """True if *image_url* points into this store."""

    @abstractmethod
    def delete(self, image_url: str) -> None:
        """Delete the image behind *image_url*. May raise on failure."""
