"""Abstract repository for Customer entities."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_id(self, customer_id: str) -> Customer | None:
        """Return a customer by ID, or None."""

    @abstractmethod
    def find_by_contact(self, email: str, phone: str) -> Customer | None:
        """Return the customer whose normalised (email, phone) match, or None."""

    @abstractmethod
    def add(self, customer: Customer) -> Customer:
        """Insert a new customer, assigning its ID.

        Raises CustomerPersistenceError if a customer with the same contact
        key already exists or the write fails.
        """
