"""Unit tests for the Money value object."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


class TestMoney:

    def test_creation(self):
        m = Money(15000)
        assert m.amount == 15000
        assert m.currency == "IDR"

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(-1)

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be an int"):
            Money(1.5)

    def test_bool_amount_rejected(self):
        with pytest.raises(ValidationError):
            Money(True)

    def test_addition(self):
        assert Money(15000) + Money(3000) == Money(18000)

    def test_multiplication_by_int(self):
        assert Money(5000) * 3 == Money(15000)

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money(5000) * 1.5

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(10, "IDR") + Money(10, "USD")


class TestMoneyFormatting:

    def test_thousands_use_dots(self):
        assert str(Money(15000)) == "Rp 15.000"

    def test_millions(self):
        assert str(Money(1234567)) == "Rp 1.234.567"

    def test_small_amounts_have_no_separator(self):
        assert str(Money(500)) == "Rp 500"

    def test_zero(self):
        assert str(Money.zero()) == "Rp 0"


class TestMoneyOf:

    def test_from_string(self):
        assert Money.of("15000") == Money(15000)

    def test_from_padded_string(self):
        assert Money.of("  2500 ") == Money(2500)

    def test_from_whole_float(self):
        assert Money.of(3000.0) == Money(3000)

    def test_fraction_rejected(self):
        with pytest.raises(ValidationError, match="must be whole"):
            Money.of("1500.5")

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_infinity_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("inf")

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money.of("-100")
