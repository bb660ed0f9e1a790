"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the HTTP/CLI layers and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import Order
from storefront.domain.model.product_size import ProductSize
from storefront.domain.model.value_objects import DeliveryAddress


@dataclass(frozen=True)
class CartLine:
    """Input: one (size, quantity) pair the customer asked for."""

    size_id: str
    quantity: int


@dataclass(frozen=True)
class CustomerDetails:
    """Input: who is buying and, for delivery, where to."""

    name: str
    email: str
    phone: str
    address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None

    def delivery_address(self) -> DeliveryAddress:
        if not self.address or not self.address.strip():
            raise ValidationError("Delivery address is required for delivery orders")
        return DeliveryAddress(
            address=self.address.strip(),
            city=(self.city or "").strip(),
            state=(self.state or "").strip(),
            postal_code=(self.postal_code or "").strip(),
        )


@dataclass(frozen=True)
class PlacedOrderDTO:
    """Output of the pay-later checkout."""

    order_id: str
    order_number: str
    total_cents: int
    currency: str
    payment_handle: str


@dataclass(frozen=True)
class CheckoutSessionDTO:
    session_id: str
    url: str


@dataclass(frozen=True)
class OrderLineDTO:
    name: str
    unit_label: str
    quantity: int
    price_cents: int


@dataclass(frozen=True)
class HistoryEntryDTO:
    status: str
    note: str
    timestamp: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the customer or admin."""

    id: str
    order_number: str
    status: str
    payment_status: str
    fulfillment_method: str
    subtotal_cents: int
    pickup_discount_cents: int
    delivery_fee_cents: int
    total_cents: int
    currency: str
    items: list[OrderLineDTO]
    created_at: str
    history: list[HistoryEntryDTO] = field(default_factory=list)


@dataclass(frozen=True)
class PaymentStatusDTO:
    id: str
    payment_status: str


@dataclass(frozen=True)
class SizeDTO:
    id: str
    name: str
    unit_label: str
    price_cents: int
    available_qty: int
    is_active: bool
    sort_order: int | None


# --- Mapping ------------------------------------------------------------------


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        order_number=order.order_number,
        status=order.status.value,
        payment_status=order.payment_status.value,
        fulfillment_method=order.fulfillment_method.value,
        subtotal_cents=order.subtotal_cents,
        pickup_discount_cents=order.pickup_discount_cents,
        delivery_fee_cents=order.delivery_fee_cents,
        total_cents=order.total_cents,
        currency=order.currency,
        items=[
            OrderLineDTO(
                name=item.size_name,
                unit_label=item.unit_label,
                quantity=item.quantity.value,
                price_cents=item.price_cents,
            )
            for item in order.items
        ],
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        history=[
            HistoryEntryDTO(
                status=entry.status.value,
                note=entry.note,
                timestamp=entry.timestamp.isoformat(),
            )
            for entry in order.history
        ],
    )


def to_size_dto(size: ProductSize) -> SizeDTO:
    return SizeDTO(
        id=size.id,
        name=size.name,
        unit_label=size.unit_label,
        price_cents=size.price_cents,
        available_qty=size.available_qty,
        is_active=size.is_active,
        sort_order=size.sort_order,
    )
