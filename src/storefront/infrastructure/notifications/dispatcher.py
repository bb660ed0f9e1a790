"""Fan-out notification dispatcher.

Each (channel, recipient) pair is an independent job on a thread pool:
``notify`` returns as soon as the jobs are queued, and one recipient's
failure is logged without affecting the others or the caller.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor

from storefront.application.notifications import NotificationDispatcher, NotificationEvent
from storefront.domain.model.customer import Customer
from storefront.domain.model.order import Order
from storefront.domain.model.store_settings import StoreSettings
from storefront.domain.repository.admin_repository import AdminRepository
from storefront.infrastructure.notifications import messages
from storefront.infrastructure.notifications.channels import MessageChannel
from storefront.infrastructure.notifications.messages import Message

logger = logging.getLogger(__name__)

Job = tuple[MessageChannel, str, Message]


class FanOutNotificationDispatcher(NotificationDispatcher):

    def __init__(
        self,
        email_channel: MessageChannel | None,
        sms_channel: MessageChannel | None,
        admin_repo: AdminRepository,
        store_name: str,
        max_workers: int = 4,
    ) -> None:
        self._email = email_channel
        self._sms = sms_channel
        self._admin_repo = admin_repo
        self._store_name = store_name
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="notify"
        )

    def notify(
        self,
        event: NotificationEvent,
        order: Order,
        customer: Customer,
        settings: StoreSettings | None,
    ) -> None:
        try:
            jobs = self._build_jobs(event, order, customer, settings)
        except Exception:
            logger.exception("Could not prepare %s notifications for order %s", event.value, order.id)
            return

        for channel, recipient, message in jobs:
            future = self._executor.submit(channel.send, recipient, message)
            future.add_done_callback(self._log_outcome(event, order, recipient))

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)

    # --- Internal helpers -----------------------------------------------------

    def _build_jobs(
        self,
        event: NotificationEvent,
        order: Order,
        customer: Customer,
        settings: StoreSettings | None,
    ) -> list[Job]:
        jobs: list[Job] = []

        if event is NotificationEvent.PAYMENT_REMINDER:
            reminder = messages.payment_reminder(self._store_name, order, customer, settings)
            if self._email and customer.email:
                jobs.append((self._email, customer.email, reminder))
            if self._sms and customer.phone:
                jobs.append((self._sms, customer.phone, reminder))
            return jobs

        if self._email and customer.email:
            jobs.append(
                (
                    self._email,
                    customer.email,
                    messages.order_confirmation_email(self._store_name, order, customer, settings),
                )
            )
        if self._sms and customer.phone:
            jobs.append(
                (self._sms, customer.phone, messages.order_confirmation_sms(self._store_name, order))
            )

        alert = messages.admin_new_order_alert(self._store_name, order, customer)
        for admin in self._admin_repo.list_all():
            if self._email and admin.alert_email:
                jobs.append((self._email, admin.alert_email, alert))
            if self._sms and admin.alert_phone:
                jobs.append((self._sms, admin.alert_phone, alert))
        return jobs

    @staticmethod
    def _log_outcome(event: NotificationEvent, order: Order, recipient: str):
        def _done(future: Future) -> None:
            exc = future.exception()
            if exc is not None:
                logger.error(
                    "%s notification to %s for order %s failed: %s",
                    event.value,
                    recipient,
                    order.order_number,
                    exc,
                )
            else:
                logger.debug("%s notification sent to %s", event.value, recipient)

        return _done
