"""Abstract repository for the singleton StoreSettings record."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.store_settings import StoreSettings


class SettingsRepository(ABC):

    @abstractmethod
    def get(self) -> StoreSettings | None:
        """Return the authoritative settings row, or None if none exists."""

    @abstractmethod
    def save(self, settings: StoreSettings) -> None:
        """Replace the settings row."""
