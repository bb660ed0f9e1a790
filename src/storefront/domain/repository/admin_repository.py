"""Abstract repository for admin accounts."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.admin import AdminUser


class AdminRepository(ABC):

    @abstractmethod
    def get_by_email(self, email: str) -> AdminUser | None:
        """Case-insensitive lookup by login email."""

    @abstractmethod
    def list_all(self) -> list[AdminUser]:
        """Return every admin account."""
