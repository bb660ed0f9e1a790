"""Unit tests for domain value objects."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import (
    DeliveryAddress,
    FulfillmentMethod,
    Money,
    OrderTotals,
    Quantity,
    format_currency,
)


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(1050)
        assert m.cents == 1050
        assert m.currency == "USD"

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(-1)

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="integer cents"):
            Money(10.5)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="integer cents"):
            Money(True)

    def test_str_formatting(self):
        assert str(Money(1500)) == "$15.00"
        assert str(Money(123456)) == "$1,234.56"


class TestFormatCurrency:

    def test_other_currency_suffixed(self):
        assert format_currency(1234, "eur") == "12.34 EUR"

    def test_single_digit_cents_padded(self):
        assert format_currency(905) == "$9.05"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(-3)

    def test_string_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity("2")


# ── Fulfillment / address / totals ───────────────────────────────────────────


class TestFulfillmentMethod:

    def test_parse_is_case_insensitive(self):
        assert FulfillmentMethod.parse(" Pickup ") is FulfillmentMethod.PICKUP

    def test_unknown_method_rejected(self):
        with pytest.raises(ValidationError, match="fulfillment_method"):
            FulfillmentMethod.parse("drone")


class TestDeliveryAddress:

    def test_blank_address_rejected(self):
        with pytest.raises(ValidationError, match="Delivery address is required"):
            DeliveryAddress(address="  ")

    def test_dict_round_trip(self):
        addr = DeliveryAddress("1 Main St", "Springfield", "IL", "62701")
        assert DeliveryAddress.from_dict(addr.to_dict()) == addr


class TestOrderTotals:

    def test_total_formula(self):
        assert OrderTotals(base=6400, pickup_discount=640, delivery_fee=0).total == 5760

    def test_discount_above_base_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed"):
            OrderTotals(base=100, pickup_discount=101, delivery_fee=0)

    def test_negative_fee_rejected(self):
        with pytest.raises(ValidationError, match="non-negative"):
            OrderTotals(base=100, pickup_discount=0, delivery_fee=-1)
