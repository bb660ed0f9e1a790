"""Domain service: Customer Identity Resolver.

Customers are de-duplicated on the normalised (email, phone) pair. An
insert that loses a race against a concurrent checkout for the same
contact is retried as a lookup once before giving up.
"""

from __future__ import annotations

from storefront.domain.exceptions import CustomerPersistenceError, ValidationError
from storefront.domain.model.customer import Customer, normalize_email, normalize_phone
from storefront.domain.repository.customer_repository import CustomerRepository


class CustomerIdentityResolver:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def resolve(self, email: str, phone: str, name: str) -> Customer:
        if not normalize_email(email):
            raise ValidationError("Customer email is required")
        if not normalize_phone(phone):
            raise ValidationError("Customer phone is required")
        if not name or not name.strip():
            raise ValidationError("Customer name is required")

        existing = self._customer_repo.find_by_contact(email, phone)
        if existing is not None:
            return existing

        customer = Customer(
            id=None,
            name=name.strip(),
            email=email.strip(),
            phone=phone.strip(),
        )
        try:
            return self._customer_repo.add(customer)
        except CustomerPersistenceError:
            winner = self._customer_repo.find_by_contact(email, phone)
            if winner is None:
                raise
            return winner
