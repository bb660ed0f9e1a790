"""Plain-text rendering of customer and admin notifications."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.customer import Customer
from storefront.domain.model.order import Order
from storefront.domain.model.store_settings import StoreSettings


@dataclass(frozen=True)
class Message:
    subject: str
    body: str


def _lines(order: Order) -> str:
    return "\n".join(
        f"- {item.size_name} ({item.unit_label}) x {item.quantity}" for item in order.items
    )


def _payment_line(order: Order, settings: StoreSettings | None) -> str:
    if order.is_paid:
        return "Payment: received, thank you."
    handle = settings.payment_handle if settings else None
    if handle:
        return f"Payment: please send {order.total} via Venmo to {handle} (note #{order.order_number})."
    return f"Payment: {order.total} due."


def order_confirmation_email(
    store_name: str, order: Order, customer: Customer, settings: StoreSettings | None
) -> Message:
    body = "\n".join(
        [
            f"Thank you, {customer.name}.",
            "",
            f"Order #{order.order_number} ({order.fulfillment_method.value})",
            _lines(order),
            "",
            f"Total: {order.total}",
            _payment_line(order, settings),
        ]
    )
    return Message(subject=f"Your {store_name} order is confirmed", body=body)


def order_confirmation_sms(store_name: str, order: Order) -> Message:
    summary = ", ".join(f"{item.size_name} x{item.quantity}" for item in order.items)
    return Message(
        subject="",
        body=f"{store_name} order #{order.order_number} confirmed. {summary}. "
        f"Status: {order.status.value}.",
    )


def admin_new_order_alert(store_name: str, order: Order, customer: Customer) -> Message:
    body = "\n".join(
        [
            f"New {order.fulfillment_method.value} order #{order.order_number}",
            f"Customer: {customer.name} <{customer.email}> {customer.phone}",
            _lines(order),
            f"Total: {order.total} ({order.payment_status.value})",
        ]
    )
    if order.notes:
        body += f"\nNotes: {order.notes}"
    return Message(subject=f"[{store_name}] New order #{order.order_number}", body=body)


def payment_reminder(
    store_name: str, order: Order, customer: Customer, settings: StoreSettings | None
) -> Message:
    body = "\n".join(
        [
            f"Hi {customer.name},",
            "",
            f"This is a reminder that order #{order.order_number} is awaiting payment.",
            _payment_line(order, settings),
        ]
    )
    return Message(subject=f"{store_name}: payment reminder for #{order.order_number}", body=body)
