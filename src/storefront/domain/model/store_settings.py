"""Store-wide settings: one authoritative row for the whole storefront."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.model.value_objects import DEFAULT_CURRENCY


class DiscountType(Enum):
    FIXED = "fixed"
    PERCENT = "percent"


@dataclass
class StoreSettings:
    id: int = 1
    pickup_discount_enabled: bool = False
    pickup_discount_type: DiscountType = DiscountType.FIXED
    pickup_discount_value: int = 0  # cents if fixed, whole percent if percent
    delivery_fee_cents: int = 0
    currency: str = DEFAULT_CURRENCY
    venmo_address: str | None = None

    @property
    def payment_handle(self) -> str | None:
        handle = (self.venmo_address or "").strip()
        return handle or None
