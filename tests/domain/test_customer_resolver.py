"""Unit tests for the CustomerIdentityResolver domain service."""

import pytest

from storefront.domain.exceptions import CustomerPersistenceError, ValidationError
from storefront.domain.model.customer import Customer, normalize_email, normalize_phone
from storefront.domain.service.customer_resolver import CustomerIdentityResolver
from tests.fakes import FakeCustomerRepository


class TestNormalisation:

    def test_email_trimmed_and_lowercased(self):
        assert normalize_email("  Sam@Example.COM ") == "sam@example.com"

    def test_phone_digits_only(self):
        assert normalize_phone("(555) 123-4567") == "5551234567"
        assert normalize_phone("555.123.4567") == "5551234567"


class TestResolve:

    def test_creates_new_customer(self):
        repo = FakeCustomerRepository()
        customer = CustomerIdentityResolver(repo).resolve("sam@example.com", "5551234567", "Sam")
        assert customer.id is not None
        assert repo.count() == 1

    def test_same_contact_different_name_formatting_reuses_customer(self):
        repo = FakeCustomerRepository()
        resolver = CustomerIdentityResolver(repo)
        first = resolver.resolve("sam@example.com", "555-123-4567", "Sam Smith")
        second = resolver.resolve(" SAM@example.com ", "(555) 123 4567", "  sam smith ")
        assert first.id == second.id
        assert repo.count() == 1

    def test_country_code_is_not_inferred(self):
        repo = FakeCustomerRepository()
        resolver = CustomerIdentityResolver(repo)
        first = resolver.resolve("sam@example.com", "+1 555 123 4567", "Sam")
        second = resolver.resolve("sam@example.com", "555 123 4567", "Sam")
        assert first.id != second.id

    @pytest.mark.parametrize(
        "email, phone, name, message",
        [
            ("", "5551234567", "Sam", "email"),
            ("sam@example.com", "--", "Sam", "phone"),
            ("sam@example.com", "5551234567", "  ", "name"),
        ],
    )
    def test_required_fields(self, email, phone, name, message):
        with pytest.raises(ValidationError, match=message):
            CustomerIdentityResolver(FakeCustomerRepository()).resolve(email, phone, name)

    def test_lost_insert_race_returns_winner(self):
        winner = Customer(id="c-winner", name="Sam", email="sam@example.com", phone="5551234567")

        class RacingRepo(FakeCustomerRepository):
            """Another checkout inserts the same contact between lookup and insert."""

            def find_by_contact(self, email, phone):
                if not getattr(self, "raced", False):
                    return None
                return super().find_by_contact(email, phone)

            def add(self, customer):
                self.raced = True
                self._store[winner.id] = winner
                raise CustomerPersistenceError("duplicate")

        resolved = CustomerIdentityResolver(RacingRepo()).resolve(
            "sam@example.com", "5551234567", "Sam"
        )
        assert resolved.id == "c-winner"

    def test_persistence_failure_propagates(self):
        class BrokenRepo(FakeCustomerRepository):
            def add(self, customer):
                raise CustomerPersistenceError("disk full")

        with pytest.raises(CustomerPersistenceError):
            CustomerIdentityResolver(BrokenRepo()).resolve("a@b.c", "1", "A")
