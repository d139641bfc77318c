"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.value_objects import Money, Quantity, ShippingAddress


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_int(self):
        assert Money.of(10).amount == Decimal("10")

    def test_zero_is_allowed(self):
        assert Money.of("0") == Money.zero()

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(1.5)  # type: ignore[arg-type]

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("twelve")

    def test_infinity_rejected(self):
        with pytest.raises(ValidationError, match="finite"):
            Money.of("Infinity")

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("1") * 1.5  # type: ignore[operator]

    def test_display_rounds_to_cents(self):
        assert str(Money.of("15")) == "$15.00"

    def test_raw_keeps_exact_value(self):
        assert Money.of("19.999").to_raw() == "19.999"

    def test_amounts_are_compared_through_amount_not_ordering(self):
        assert Money.of("1.50") == Money(Decimal("1.50"))
        with pytest.raises(TypeError):
            Money.of("1") < Money.of("2")


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_positive(self):
        assert Quantity(3).value == 3

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="at least 1"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="at least 1"):
            Quantity(-2)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(1.5)  # type: ignore[arg-type]

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)


# ── ShippingAddress ──────────────────────────────────────────────────────────


class TestShippingAddress:

    def test_complete_address(self):
        addr = ShippingAddress("1 Main St", "Springfield", "12345", "US")
        assert addr.city == "Springfield"

    @pytest.mark.parametrize(
        "field, label",
        [
            ("address", "Address"),
            ("city", "City"),
            ("postal_code", "Postal code"),
            ("country", "Country"),
        ],
    )
    def test_each_part_required(self, field, label):
        parts = {
            "address": "1 Main St",
            "city": "Springfield",
            "postal_code": "12345",
            "country": "US",
        }
        parts[field] = "  "
        with pytest.raises(ValidationError, match=f"{label} is required"):
            ShippingAddress(**parts)
