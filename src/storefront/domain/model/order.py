"""Order aggregate: the core of the domain.

The Order is an aggregate root that owns its line items and its status
history. All business invariants are enforced here; the store persists the
whole aggregate in one write so an item never exists without its order.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import (
    DEFAULT_CURRENCY,
    DeliveryAddress,
    FulfillmentMethod,
    Money,
    OrderTotals,
    Quantity,
)


class OrderStatus(Enum):
    OUTSTANDING = "Outstanding"
    IN_PROGRESS = "In Progress"
    READY = "Ready"
    DELIVERED = "Delivered"
    PICKED_UP = "Picked Up"
    CANCELED = "Canceled"

    @classmethod
    def parse(cls, raw: str | OrderStatus) -> OrderStatus:
        if isinstance(raw, cls):
            return raw
        label = str(raw).strip().lower()
        if label == "shipped":
            return cls.DELIVERED
        for status in cls:
            if status.value.lower() == label or status.name.lower() == label:
                return status
        raise ValidationError(f"Unknown order status: {raw!r}")


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"

    @classmethod
    def parse(cls, raw: str | PaymentStatus) -> PaymentStatus:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            raise ValidationError(
                f"payment_status must be 'pending' or 'paid', got {raw!r}"
            ) from None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OrderItem:
    """Snapshot of a size at checkout time.

    Frozen: name, label and price never drift after creation, even when the
    underlying size is edited later.
    """

    size_id: str
    size_name: str
    unit_label: str
    quantity: Quantity
    price_cents: int  # locked at order-creation time

    @property
    def line_total_cents(self) -> int:
        return self.price_cents * self.quantity.value


@dataclass(frozen=True)
class StatusHistoryEntry:
    status: OrderStatus
    note: str
    timestamp: datetime = field(default_factory=_utcnow)


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_LINE_ITEMS = 50


@dataclass
class Order:
    """Aggregate root for checkout orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules and writes the first history entry. The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    orders without re-validating.
    """

    id: str
    customer_id: str
    fulfillment_method: FulfillmentMethod
    items: list[OrderItem]
    subtotal_cents: int
    pickup_discount_cents: int
    delivery_fee_cents: int
    total_cents: int
    currency: str = DEFAULT_CURRENCY
    status: OrderStatus = OrderStatus.OUTSTANDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    notes: str | None = None
    delivery_address: DeliveryAddress | None = None
    payment_session_id: str | None = None
    payment_intent_id: str | None = None
    history: list[StatusHistoryEntry] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_id: str,
        fulfillment_method: FulfillmentMethod,
        items: list[OrderItem],
        totals: OrderTotals,
        currency: str = DEFAULT_CURRENCY,
        notes: str | None = None,
        delivery_address: DeliveryAddress | None = None,
        payment_status: PaymentStatus = PaymentStatus.PENDING,
        payment_session_id: str | None = None,
        payment_intent_id: str | None = None,
        history_note: str = "Order created",
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        if not customer_id:
            raise ValidationError("Order must belong to a customer")

        if not items:
            raise ValidationError("Order must contain at least one item")

        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        if totals.base != sum(item.line_total_cents for item in items):
            raise ValidationError("Order subtotal does not match its line items")

        if fulfillment_method is FulfillmentMethod.DELIVERY:
            if delivery_address is None:
                raise ValidationError("Delivery address is required for delivery orders")
            if totals.pickup_discount:
                raise ValidationError("Pickup discount only applies to pickup orders")
        else:
            delivery_address = None
            if totals.delivery_fee:
                raise ValidationError("Delivery fee only applies to delivery orders")

        order = Order(
            id=str(uuid.uuid4()),
            customer_id=customer_id,
            fulfillment_method=fulfillment_method,
            items=list(items),
            subtotal_cents=totals.base,
            pickup_discount_cents=totals.pickup_discount,
            delivery_fee_cents=totals.delivery_fee,
            total_cents=totals.total,
            currency=currency or DEFAULT_CURRENCY,
            payment_status=payment_status,
            notes=(notes or "").strip() or None,
            delivery_address=delivery_address,
            payment_session_id=payment_session_id,
            payment_intent_id=payment_intent_id,
        )
        order._record(history_note)
        return order

    # --- State transitions ----------------------------------------------------

    def update_status(self, new_status: OrderStatus, note: str | None = None) -> bool:
        """Move to any status; there is no transition table.

        Returns False (and records nothing) when the order is already in
        ``new_status``.
        """
        if new_status == self.status:
            return False
        previous = self.status
        self.status = new_status
        self._record(note or f"Status changed from {previous.value} to {new_status.value}")
        return True

    def set_payment_status(self, payment_status: PaymentStatus, note: str | None = None) -> bool:
        if payment_status == self.payment_status:
            return False
        self.payment_status = payment_status
        self._record(note or f"Payment marked {payment_status.value}")
        return True

    def mark_paid(self, note: str = "Payment confirmed") -> bool:
        """pending -> paid; a second call is a no-op and returns False."""
        return self.set_payment_status(PaymentStatus.PAID, note)

    def annotate(self, note: str) -> None:
        """Append a history note without changing status."""
        self._record(note)

    # --- Computed properties --------------------------------------------------

    @property
    def order_number(self) -> str:
        return self.id[:8].upper()

    @property
    def total(self) -> Money:
        return Money(self.total_cents, self.currency)

    @property
    def is_paid(self) -> bool:
        return self.payment_status is PaymentStatus.PAID

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)

    # --- Internal helpers -----------------------------------------------------

    def _record(self, note: str) -> None:
        self.history.append(StatusHistoryEntry(status=self.status, note=note))
