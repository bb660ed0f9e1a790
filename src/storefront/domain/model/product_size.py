"""ProductSize aggregate.

Sizes live independently of orders. They have their own lifecycle:
admins change prices, toggle availability and restock. Orders only ever
copy a snapshot of a size at checkout time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from storefront.domain.exceptions import ValidationError

# Fields an admin may change through the size update operation.
EDITABLE_FIELDS = (
    "name",
    "price_cents",
    "available_qty",
    "is_active",
    "unit_label",
    "sort_order",
)


def _require_non_negative_int(field_name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} must be an integer")
    if value < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return value


@dataclass
class ProductSize:
    """A purchasable unit (e.g. "Half tray").

    Invariants:
    - ``price_cents`` >= 0
    - ``available_qty`` >= 0 after any mutation
    """

    id: str
    name: str
    unit_label: str
    price_cents: int
    available_qty: int
    is_active: bool = True
    sort_order: int | None = None

    def __post_init__(self) -> None:
        _require_non_negative_int("price_cents", self.price_cents)
        _require_non_negative_int("available_qty", self.available_qty)

    def apply_updates(self, updates: dict[str, Any]) -> dict[str, Any]:
        """Apply the allowlisted subset of ``updates``; returns what was applied.

        Keys outside ``EDITABLE_FIELDS`` are ignored. Raises ValidationError
        when nothing allowlisted is present or a value has the wrong type.
        """
        allowed = {key: updates[key] for key in EDITABLE_FIELDS if key in updates}
        if not allowed:
            raise ValidationError("No valid fields to update")

        if "name" in allowed:
            if not isinstance(allowed["name"], str) or not allowed["name"].strip():
                raise ValidationError("name must be a non-empty string")
            allowed["name"] = allowed["name"].strip()
        if "unit_label" in allowed and not isinstance(allowed["unit_label"], str):
            raise ValidationError("unit_label must be a string")
        if "price_cents" in allowed:
            _require_non_negative_int("price_cents", allowed["price_cents"])
        if "available_qty" in allowed:
            _require_non_negative_int("available_qty", allowed["available_qty"])
        if "is_active" in allowed and not isinstance(allowed["is_active"], bool):
            raise ValidationError("is_active must be a boolean")
        if "sort_order" in allowed and allowed["sort_order"] is not None:
            if isinstance(allowed["sort_order"], bool) or not isinstance(
                allowed["sort_order"], int
            ):
                raise ValidationError("sort_order must be an integer or null")

        for key, value in allowed.items():
            setattr(self, key, value)
        return allowed
