"""Hosted payment gateway contract and the checkout-session metadata.

Gateways only carry string key/value metadata on a session, so every
field of a pending order is written out as a string when the session is
created and parsed back, strictly, when the confirmation webhook arrives.
The parsed metadata is the source of truth for the order: it is never
re-priced against live sizes or settings.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import MISSING, dataclass, fields

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import (
    DeliveryAddress,
    FulfillmentMethod,
    OrderTotals,
)

_INT_FIELDS = (
    "quantity",
    "unit_price_cents",
    "subtotal_cents",
    "pickup_discount_cents",
    "delivery_fee_cents",
    "total_cents",
)


@dataclass(frozen=True)
class CheckoutSessionMetadata:
    size_id: str
    size_name: str
    unit_label: str
    unit_price_cents: int
    quantity: int
    fulfillment_method: FulfillmentMethod
    subtotal_cents: int
    pickup_discount_cents: int
    delivery_fee_cents: int
    total_cents: int
    currency: str
    customer_name: str
    customer_email: str
    customer_phone: str
    address: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    notes: str = ""

    @property
    def totals(self) -> OrderTotals:
        totals = OrderTotals(
            base=self.subtotal_cents,
            pickup_discount=self.pickup_discount_cents,
            delivery_fee=self.delivery_fee_cents,
        )
        if totals.total != self.total_cents:
            raise ValidationError("Session metadata totals are inconsistent")
        return totals

    def delivery_address(self) -> DeliveryAddress | None:
        if self.fulfillment_method is not FulfillmentMethod.DELIVERY:
            return None
        return DeliveryAddress(
            address=self.address,
            city=self.city,
            state=self.state,
            postal_code=self.postal_code,
        )

    def to_metadata(self) -> dict[str, str]:
        out: dict[str, str] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, FulfillmentMethod):
                value = value.value
            out[f.name] = str(value)
        return out

    @classmethod
    def from_metadata(cls, raw: dict[str, str]) -> CheckoutSessionMetadata:
        values: dict[str, object] = {}
        for f in fields(cls):
            if f.name not in raw:
                if f.default is not MISSING:
                    values[f.name] = f.default
                    continue
                raise ValidationError(f"Session metadata is missing '{f.name}'")
            values[f.name] = raw[f.name]

        for name in _INT_FIELDS:
            text = str(values[name]).strip()
            if not (text.isascii() and text.isdigit()):
                raise ValidationError(f"Session metadata '{name}' is not a whole number")
            values[name] = int(text)
        values["fulfillment_method"] = FulfillmentMethod.parse(str(values["fulfillment_method"]))
        return cls(**values)  # type: ignore[arg-type]


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    url: str


class PaymentGateway(ABC):

    @abstractmethod
    def create_session(
        self,
        metadata: CheckoutSessionMetadata,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """Open a hosted checkout session for one priced line.

        Raises GatewayError when the gateway rejects or cannot be reached.
        """
