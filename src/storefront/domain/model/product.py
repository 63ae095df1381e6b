"""CatalogProduct — the remote, authoritative record of a sellable item.

Products live in the remote catalog and are read-only from the shopper's
side.  The admin surface is the only writer; its form rules live here so
every catalog backend enforces the same ones.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class CatalogProduct:
    """One document of the remote catalog.

    ``stock`` is the live availability the Stock Reconciler compares cart
    quantities against.
    """

    id: str
    name: str
    price: Money
    stock: int
    category: str = ""
    image_url: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def in_stock(self) -> bool:
        return self.stock > 0


@dataclass(frozen=True)
class ProductDraft:
    """Admin form input for a new or edited product, not yet persisted."""

    name: str
    price: Money
    stock: int
    category: str
    image_url: str = ""

    def validate(self) -> None:
        """Raise ValidationError listing every invalid field."""
        errors: dict[str, str] = {}
        if not self.name or not self.name.strip():
            errors["name"] = "Product name is required"
        if not self.category or not self.category.strip():
            errors["category"] = "Category is required"
        if self.price.amount <= 0:
            errors["price"] = "Price must be greater than zero"
        if self.stock < 0:
            errors["stock"] = "Stock cannot be negative"
        if errors:
            raise ValidationError("; ".join(errors.values()), fields=errors)

    def normalized(self) -> ProductDraft:
        return replace(self, name=self.name.strip(), category=self.category.strip())
