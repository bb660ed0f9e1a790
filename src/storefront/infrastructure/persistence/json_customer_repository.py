"""JSON-file-backed implementation of CustomerRepository."""

from __future__ import annotations

import uuid
from pathlib import Path

from storefront.domain.exceptions import CustomerPersistenceError
from storefront.domain.model.customer import Customer, normalize_email, normalize_phone
from storefront.domain.repository.customer_repository import CustomerRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonCustomerRepository(CustomerRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    def get_by_id(self, customer_id: str) -> Customer | None:
        for raw in self._file.load():
            if raw["id"] == customer_id:
                return self._to_domain(raw)
        return None

    def find_by_contact(self, email: str, phone: str) -> Customer | None:
        key = (normalize_email(email), normalize_phone(phone))
        for raw in self._file.load():
            customer = self._to_domain(raw)
            if customer.contact_key == key:
                return customer
        return None

    def add(self, customer: Customer) -> Customer:
        with self._file.lock:
            records = self._file.load()
            for raw in records:
                if self._to_domain(raw).contact_key == customer.contact_key:
                    raise CustomerPersistenceError("Failed to create customer")
            customer.id = customer.id or str(uuid.uuid4())
            records.append(
                {
                    "id": customer.id,
                    "name": customer.name,
                    "email": customer.email,
                    "phone": customer.phone,
                }
            )
            try:
                self._file.persist(records)
            except OSError as exc:
                raise CustomerPersistenceError("Failed to create customer") from exc
        return customer

    @staticmethod
    def _to_domain(raw: dict) -> Customer:
        return Customer(
            id=raw["id"],
            name=raw.get("name", ""),
            email=raw.get("email", ""),
            phone=raw.get("phone", ""),
        )
