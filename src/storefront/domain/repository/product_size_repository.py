"""Abstract repository for ProductSize aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from storefront.domain.model.product_size import ProductSize


class ProductSizeRepository(ABC):

    @abstractmethod
    def get_by_id(self, size_id: str) -> ProductSize | None:
        """Return a size by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[ProductSize]:
        """Return every size, active or not."""

    @abstractmethod
    def save(self, size: ProductSize) -> None:
        """Persist a new or updated size."""

    @abstractmethod
    def update_fields(self, size_id: str, fields: dict[str, Any]) -> ProductSize | None:
        """Atomically overwrite only ``fields`` on a stored size.

        Returns the updated size, or None if it does not exist. Fields not
        named are left as currently stored, so a concurrent stock decrement
        is never overwritten by a price edit.
        """

    @abstractmethod
    def try_decrement(self, size_id: str, quantity: int) -> bool:
        """Atomically subtract ``quantity`` iff at least that much is available.

        Equivalent to ``UPDATE ... SET qty = qty - :n WHERE qty >= :n``.
        Returns False (and changes nothing) when stock is short or the size
        is missing.
        """

    @abstractmethod
    def decrement_floor(self, size_id: str, quantity: int) -> int:
        """Atomically subtract ``quantity`` clamping at zero.

        Returns how many units were actually taken.
        """

    @abstractmethod
    def increment(self, size_id: str, quantity: int) -> None:
        """Atomically add ``quantity`` back (compensation only)."""
