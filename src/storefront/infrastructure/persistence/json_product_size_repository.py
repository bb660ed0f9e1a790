"""JSON-file-backed implementation of ProductSizeRepository."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from storefront.domain.model.product_size import ProductSize
from storefront.domain.repository.product_size_repository import ProductSizeRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonProductSizeRepository(ProductSizeRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    # --- ProductSizeRepository interface --------------------------------------

    def get_by_id(self, size_id: str) -> ProductSize | None:
        for raw in self._file.load():
            if raw["id"] == size_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[ProductSize]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, size: ProductSize) -> None:
        with self._file.lock:
            records = self._file.load()
            for i, raw in enumerate(records):
                if raw["id"] == size.id:
                    records[i] = self._to_raw(size)
                    break
            else:
                records.append(self._to_raw(size))
            self._file.persist(records)

    def update_fields(self, size_id: str, fields: dict[str, Any]) -> ProductSize | None:
        with self._file.lock:
            records = self._file.load()
            for raw in records:
                if raw["id"] == size_id:
                    raw.update(fields)
                    self._file.persist(records)
                    return self._to_domain(raw)
            return None

    def try_decrement(self, size_id: str, quantity: int) -> bool:
        with self._file.lock:
            records = self._file.load()
            for raw in records:
                if raw["id"] == size_id:
                    if raw["available_qty"] < quantity:
                        return False
                    raw["available_qty"] -= quantity
                    self._file.persist(records)
                    return True
            return False

    def decrement_floor(self, size_id: str, quantity: int) -> int:
        with self._file.lock:
            records = self._file.load()
            for raw in records:
                if raw["id"] == size_id:
                    taken = min(quantity, raw["available_qty"])
                    raw["available_qty"] -= taken
                    self._file.persist(records)
                    return taken
            return 0

    def increment(self, size_id: str, quantity: int) -> None:
        with self._file.lock:
            records = self._file.load()
            for raw in records:
                if raw["id"] == size_id:
                    raw["available_qty"] += quantity
                    self._file.persist(records)
                    return

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(size: ProductSize) -> dict:
        return {
            "id": size.id,
            "name": size.name,
            "unit_label": size.unit_label,
            "price_cents": size.price_cents,
            "available_qty": size.available_qty,
            "is_active": size.is_active,
            "sort_order": size.sort_order,
        }

    @staticmethod
    def _to_domain(raw: dict) -> ProductSize:
        return ProductSize(
            id=raw["id"],
            name=raw["name"],
            unit_label=raw.get("unit_label", ""),
            price_cents=raw.get("price_cents") or 0,
            available_qty=max(0, raw.get("available_qty") or 0),
            is_active=raw.get("is_active", True),
            sort_order=raw.get("sort_order"),
        )
