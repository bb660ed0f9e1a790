"""Tests for size listing and the admin size update."""

import pytest

from storefront.application.list_sizes import ListSizesHandler
from storefront.application.update_size import UpdateSizeHandler
from storefront.domain.exceptions import AuthorizationError, NotFoundError, ValidationError
from tests.fakes import (
    ADMIN_EMAIL,
    FakeAdminRepository,
    FakeProductSizeRepository,
    make_admin,
    make_size,
)


class TestListSizes:

    def test_sorted_by_sort_order_then_name(self):
        repo = FakeProductSizeRepository(
            [
                make_size("c", "Zeta"),
                make_size("b", "Beta", sort_order=2),
                make_size("a", "Alpha"),
                make_size("d", "Delta", sort_order=1),
            ]
        )
        names = [s.name for s in ListSizesHandler(repo).handle()]
        assert names == ["Delta", "Beta", "Alpha", "Zeta"]

    def test_active_only(self):
        repo = FakeProductSizeRepository(
            [make_size("a", "Alpha"), make_size("b", "Beta", is_active=False)]
        )
        assert [s.id for s in ListSizesHandler(repo).handle(active_only=True)] == ["a"]


class TestUpdateSize:

    def _setup(self):
        sizes = FakeProductSizeRepository([make_size(available_qty=10)])
        handler = UpdateSizeHandler(sizes, FakeAdminRepository([make_admin()]))
        return handler, sizes

    def test_updates_allowlisted_fields(self):
        handler, sizes = self._setup()
        dto = handler.handle(
            ADMIN_EMAIL, "half", {"price_cents": 3500, "is_active": False, "id": "evil"}
        )
        assert dto.id == "half"
        assert dto.price_cents == 3500
        assert dto.is_active is False
        assert sizes.get_by_id("evil") is None

    def test_price_edit_keeps_concurrent_stock_change(self):
        handler, sizes = self._setup()
        sizes.try_decrement("half", 4)
        dto = handler.handle(ADMIN_EMAIL, "half", {"price_cents": 3500})
        assert dto.available_qty == 6

    def test_no_valid_fields(self):
        handler, _ = self._setup()
        with pytest.raises(ValidationError, match="No valid fields"):
            handler.handle(ADMIN_EMAIL, "half", {"created_at": "now"})

    def test_invalid_value_leaves_size_untouched(self):
        handler, sizes = self._setup()
        with pytest.raises(ValidationError):
            handler.handle(ADMIN_EMAIL, "half", {"price_cents": 100, "available_qty": -5})
        assert sizes.get_by_id("half").price_cents == 3200

    def test_unknown_size(self):
        handler, _ = self._setup()
        with pytest.raises(NotFoundError):
            handler.handle(ADMIN_EMAIL, "nope", {"price_cents": 1})

    def test_requires_admin(self):
        handler, _ = self._setup()
        with pytest.raises(AuthorizationError):
            handler.handle("someone@example.com", "half", {"price_cents": 1})
