"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import InvalidQuantity, ValidationError
from storefront.domain.model.value_objects import Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation_defaults_to_rupees(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "INR"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_int(self):
        assert Money.of(10).amount == Decimal("10")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)  # type: ignore[arg-type]

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("7.50") * 1.5  # type: ignore[operator]

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money.of("10", "INR") + Money.of("5", "USD")

    def test_str_formatting(self):
        assert str(Money.of("15")) == "INR 15.00"
        assert str(Money.of("9.5", "USD")) == "USD 9.50"

    def test_comparison_operators(self):
        assert Money.of("5") < Money.of("10")
        assert Money.of("10") > Money.of("5")
        assert Money.of("10") >= Money.of("10")
        assert Money.of("10") <= Money.of("10")

    def test_zero(self):
        assert Money.zero().is_zero
        assert not Money.of("0.01").is_zero


class TestMinorUnits:

    def test_rupees_to_paise(self):
        assert Money.of("499.00").minor_units == 49900

    def test_rounds_half_up(self):
        assert Money.of("0.005").minor_units == 1

    def test_from_minor_units(self):
        assert Money.from_minor_units(1550) == Money.of("15.50")


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(InvalidQuantity, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(InvalidQuantity):
            Quantity(-3)

    def test_non_integer_rejected(self):
        with pytest.raises(InvalidQuantity, match="must be an integer"):
            Quantity(1.5)  # type: ignore[arg-type]

    def test_bool_rejected(self):
        with pytest.raises(InvalidQuantity):
            Quantity(True)

    def test_add_int(self):
        assert (Quantity(2) + 3).value == 5

    def test_invalid_quantity_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            Quantity(0)
