"""JSON-file-backed implementation of SettingsRepository.

The file holds a list of rows; the first one is authoritative.
"""

from __future__ import annotations

from pathlib import Path

from storefront.domain.model.store_settings import DiscountType, StoreSettings
from storefront.domain.model.value_objects import DEFAULT_CURRENCY
from storefront.domain.repository.settings_repository import SettingsRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonSettingsRepository(SettingsRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    def get(self) -> StoreSettings | None:
        rows = self._file.load()
        if not rows:
            return None
        return self._to_domain(rows[0])

    def save(self, settings: StoreSettings) -> None:
        with self._file.lock:
            rows = self._file.load()
            raw = self._to_raw(settings)
            if rows:
                rows[0] = raw
            else:
                rows.append(raw)
            self._file.persist(rows)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(settings: StoreSettings) -> dict:
        return {
            "id": settings.id,
            "pickup_discount_enabled": settings.pickup_discount_enabled,
            "pickup_discount_type": settings.pickup_discount_type.value,
            "pickup_discount_value": settings.pickup_discount_value,
            "delivery_fee_cents": settings.delivery_fee_cents,
            "currency": settings.currency,
            "venmo_address": settings.venmo_address,
        }

    @staticmethod
    def _to_domain(raw: dict) -> StoreSettings:
        return StoreSettings(
            id=raw.get("id", 1),
            pickup_discount_enabled=bool(raw.get("pickup_discount_enabled", False)),
            pickup_discount_type=DiscountType(raw.get("pickup_discount_type") or "fixed"),
            pickup_discount_value=raw.get("pickup_discount_value") or 0,
            delivery_fee_cents=raw.get("delivery_fee_cents") or 0,
            currency=raw.get("currency") or DEFAULT_CURRENCY,
            venmo_address=raw.get("venmo_address"),
        )
