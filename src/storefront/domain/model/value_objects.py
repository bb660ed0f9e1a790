"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "USD"


def format_currency(cents: int, currency: str = DEFAULT_CURRENCY) -> str:
    """Render minor units for humans, e.g. ``$12.34`` or ``12.34 EUR``."""
    sign = "-" if cents < 0 else ""
    whole, frac = divmod(abs(cents), 100)
    if currency.upper() == "USD":
        return f"{sign}${whole:,}.{frac:02d}"
    return f"{sign}{whole:,}.{frac:02d} {currency.upper()}"


@dataclass(frozen=True)
class Money:
    """Monetary amount in integer minor units (cents).

    Integer cents keep every total exact; nothing in the storefront ever
    needs fractions of a cent.
    """

    cents: int
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if isinstance(self.cents, bool) or not isinstance(self.cents, int):
            raise ValidationError(
                f"Money amount must be integer cents, got {type(self.cents).__name__}"
            )
        if self.cents < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.cents}")

    def __str__(self) -> str:
        return format_currency(self.cents, self.currency)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


class FulfillmentMethod(Enum):
    DELIVERY = "delivery"
    PICKUP = "pickup"

    @classmethod
    def parse(cls, raw: str | FulfillmentMethod) -> FulfillmentMethod:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            raise ValidationError(
                f"fulfillment_method must be 'delivery' or 'pickup', got {raw!r}"
            ) from None


@dataclass(frozen=True)
class DeliveryAddress:
    address: str
    city: str = ""
    state: str = ""
    postal_code: str = ""

    def __post_init__(self) -> None:
        if not self.address or not self.address.strip():
            raise ValidationError("Delivery address is required for delivery orders")

    def to_dict(self) -> dict[str, str]:
        return {
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
        }

    @staticmethod
    def from_dict(raw: dict) -> DeliveryAddress:
        return DeliveryAddress(
            address=raw.get("address") or "",
            city=raw.get("city") or "",
            state=raw.get("state") or "",
            postal_code=raw.get("postal_code") or "",
        )


@dataclass(frozen=True)
class OrderTotals:
    """Priced breakdown of a cart, all in integer cents.

    ``total == base - pickup_discount + delivery_fee`` holds by construction.
    """

    base: int
    pickup_discount: int
    delivery_fee: int

    def __post_init__(self) -> None:
        for name in ("base", "pickup_discount", "delivery_fee"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValidationError(f"{name} must be a non-negative integer")
        if self.pickup_discount > self.base:
            raise ValidationError("Pickup discount cannot exceed the order subtotal")

    @property
    def total(self) -> int:
        return self.base - self.pickup_discount + self.delivery_fee
