"""Application service: Confirm Payment use case (gateway webhook).

Materialises a paid order from the session metadata written at checkout.
Gateways redeliver webhooks, so the handler is idempotent on the session
id: a second delivery finds the existing order and does nothing else, and
two racing deliveries are resolved by the store's session-keyed insert.
Stock is taken only by the delivery that created the order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from storefront.application.notifications import (
    NotificationDispatcher,
    NotificationEvent,
    notify_quietly,
)
from storefront.application.payment_gateway import CheckoutSessionMetadata
from storefront.domain.exceptions import DuplicatePaymentSessionError, ValidationError
from storefront.domain.model.order import Order, OrderItem, PaymentStatus
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.customer_repository import CustomerRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_size_repository import ProductSizeRepository
from storefront.domain.repository.settings_repository import SettingsRepository
from storefront.domain.service.customer_resolver import CustomerIdentityResolver
from storefront.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)

CONFIRMED_NOTE = "Payment confirmed via gateway"


@dataclass(frozen=True)
class PaymentConfirmation:
    order_id: str
    created: bool


class ConfirmPaymentHandler:

    def __init__(
        self,
        size_repo: ProductSizeRepository,
        settings_repo: SettingsRepository,
        customer_repo: CustomerRepository,
        order_repo: OrderRepository,
        dispatcher: NotificationDispatcher,
    ) -> None:
        self._settings_repo = settings_repo
        self._order_repo = order_repo
        self._dispatcher = dispatcher
        self._ledger = InventoryLedger(size_repo)
        self._resolver = CustomerIdentityResolver(customer_repo)

    def handle(
        self,
        session_id: str,
        metadata: CheckoutSessionMetadata,
        payment_intent_id: str | None = None,
    ) -> PaymentConfirmation:
        if not session_id:
            raise ValidationError("Payment session id is required")

        existing = self._order_repo.get_by_payment_session(session_id)
        if existing is not None:
            logger.info("Session %s already confirmed as order %s", session_id, existing.id)
            return PaymentConfirmation(order_id=existing.id, created=False)

        buyer = self._resolver.resolve(
            metadata.customer_email, metadata.customer_phone, metadata.customer_name
        )
        item = OrderItem(
            size_id=metadata.size_id,
            size_name=metadata.size_name,
            unit_label=metadata.unit_label,
            quantity=Quantity(metadata.quantity),
            price_cents=metadata.unit_price_cents,
        )
        order = Order.create(
            customer_id=buyer.id,  # type: ignore[arg-type]
            fulfillment_method=metadata.fulfillment_method,
            items=[item],
            totals=metadata.totals,
            currency=metadata.currency,
            notes=metadata.notes,
            delivery_address=metadata.delivery_address(),
            payment_status=PaymentStatus.PAID,
            payment_session_id=session_id,
            payment_intent_id=payment_intent_id,
            history_note=CONFIRMED_NOTE,
        )

        try:
            self._order_repo.add(order)
        except DuplicatePaymentSessionError:
            winner = self._order_repo.get_by_payment_session(session_id)
            logger.info("Concurrent delivery for session %s lost the insert race", session_id)
            return PaymentConfirmation(order_id=winner.id if winner else order.id, created=False)

        # Payment is already captured, so a shortfall cannot reject the order.
        short = self._ledger.take_floor(metadata.size_id, metadata.quantity)
        if short:
            logger.warning(
                "Paid order %s oversold %s by %d unit(s); stock floored at zero",
                order.order_number,
                metadata.size_name,
                short,
            )
            order = self._note_shortfall(order, short)

        logger.info("Order %s materialised from session %s", order.order_number, session_id)
        notify_quietly(
            self._dispatcher,
            NotificationEvent.ORDER_CREATED,
            order,
            buyer,
            self._settings_repo.get(),
        )
        return PaymentConfirmation(order_id=order.id, created=True)

    def _note_shortfall(self, order: Order, short: int) -> Order:
        """Append the shortfall note on top of whatever the order holds now."""

        def _annotate(stored: Order) -> bool:
            stored.annotate(f"Stock short by {short} at payment confirmation")
            return True

        result = self._order_repo.update(order.id, _annotate)
        return result[0] if result else order
