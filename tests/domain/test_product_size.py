"""Unit tests for the ProductSize aggregate's admin update allowlist."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product_size import ProductSize
from tests.fakes import make_size


class TestProductSizeInvariants:

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError, match="price_cents cannot be negative"):
            make_size(price_cents=-1)


class TestApplyUpdates:

    def test_only_allowlisted_fields_applied(self):
        size = make_size()
        applied = size.apply_updates({"price_cents": 3500, "id": "hijack", "created_at": "x"})
        assert applied == {"price_cents": 3500}
        assert size.price_cents == 3500
        assert size.id == "half"

    def test_nothing_allowlisted_rejected(self):
        with pytest.raises(ValidationError, match="No valid fields to update"):
            make_size().apply_updates({"id": "other"})

    def test_name_trimmed(self):
        size = make_size()
        size.apply_updates({"name": "  Full tray "})
        assert size.name == "Full tray"

    @pytest.mark.parametrize(
        "updates, message",
        [
            ({"price_cents": "12"}, "price_cents must be an integer"),
            ({"available_qty": -1}, "available_qty cannot be negative"),
            ({"is_active": "yes"}, "is_active must be a boolean"),
            ({"name": ""}, "name must be a non-empty string"),
            ({"sort_order": 1.5}, "sort_order"),
        ],
    )
    def test_bad_values_rejected(self, updates, message):
        size = make_size()
        with pytest.raises(ValidationError, match=message):
            size.apply_updates(updates)
        assert size == make_size()

    def test_sort_order_may_be_cleared(self):
        size = ProductSize("s", "Small", "tray", 100, 1, sort_order=3)
        size.apply_updates({"sort_order": None})
        assert size.sort_order is None
