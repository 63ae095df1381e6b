"""Money: prices, line totals and shipping fees in rupiah.

Every amount the shop shows or stores is a Money; negative and fractional
amounts cannot be constructed.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Money:
    """Monetary amount in whole currency units.

    Rupiah has no minor unit in everyday use, so amounts are plain ints.
    """

    amount: int
    currency: str = "IDR"

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValidationError(
                f"Money amount must be an int, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        # id-ID grouping: 15000 -> "15.000"
        return "Rp " + f"{self.amount:,}".replace(",", ".")

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(0)

    @staticmethod
    def of(amount: str | float | int) -> Money:
        """Convenient factory that coerces form input to a whole amount."""
        try:
            value = float(str(amount).strip())
            whole = int(value)
        except (ValueError, OverflowError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        if value != whole:
            raise ValidationError(f"Money amount must be whole, got {amount!r}")
        return Money(whole)
