"""Notification Dispatcher contract.

The lifecycle handlers depend only on this interface. Implementations may
retry, fan out and log, but ``notify`` must never fail an order: delivery of
a confirmation is always secondary to the order being recorded.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum

from storefront.domain.model.customer import Customer
from storefront.domain.model.order import Order
from storefront.domain.model.store_settings import StoreSettings

logger = logging.getLogger(__name__)


class NotificationEvent(Enum):
    ORDER_CREATED = "OrderCreated"
    PAYMENT_REMINDER = "PaymentReminder"


class NotificationDispatcher(ABC):

    @abstractmethod
    def notify(
        self,
        event: NotificationEvent,
        order: Order,
        customer: Customer,
        settings: StoreSettings | None,
    ) -> None:
        """Send messages for ``event``; must not raise."""

    def shutdown(self) -> None:
        """Wait for queued sends; nothing to do for synchronous dispatchers."""


def notify_quietly(
    dispatcher: NotificationDispatcher,
    event: NotificationEvent,
    order: Order,
    customer: Customer,
    settings: StoreSettings | None,
) -> None:
    """Call the dispatcher, logging anything it raises despite its contract."""
    try:
        dispatcher.notify(event, order, customer, settings)
    except Exception:
        logger.exception("Notification %s failed for order %s", event.value, order.id)
