"""Application service: Send Payment Reminder use case (admin).

Reminds a pay-later customer of the amount due and where to send it.
"""

from __future__ import annotations

import logging

from storefront.application.admin_guard import AdminGuard
from storefront.application.notifications import (
    NotificationDispatcher,
    NotificationEvent,
    notify_quietly,
)
from storefront.domain.exceptions import NotFoundError, ValidationError
from storefront.domain.repository.admin_repository import AdminRepository
from storefront.domain.repository.customer_repository import CustomerRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.settings_repository import SettingsRepository

logger = logging.getLogger(__name__)


class SendPaymentReminderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
        settings_repo: SettingsRepository,
        admin_repo: AdminRepository,
        dispatcher: NotificationDispatcher,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo
        self._settings_repo = settings_repo
        self._guard = AdminGuard(admin_repo)
        self._dispatcher = dispatcher

    def handle(self, admin_email: str, order_id: str) -> None:
        self._guard.require(admin_email)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")
        if order.is_paid:
            raise ValidationError(f"Order {order.order_number} is already paid")

        customer = self._customer_repo.get_by_id(order.customer_id)
        if customer is None:
            raise NotFoundError(f"Customer for order {order.order_number} not found")

        logger.info("Sending payment reminder for order %s", order.order_number)
        notify_quietly(
            self._dispatcher,
            NotificationEvent.PAYMENT_REMINDER,
            order,
            customer,
            self._settings_repo.get(),
        )
