"""Application services: payment status changes.

``MarkOrderPaidHandler`` is the single-order, idempotent pending -> paid
flip used when a payment is confirmed. ``UpdatePaymentStatusHandler`` is
the admin bulk edit; unknown order ids are skipped.
"""

from __future__ import annotations

import logging

from storefront.application.admin_guard import AdminGuard
from storefront.application.dto import PaymentStatusDTO
from storefront.domain.exceptions import NotFoundError, ValidationError
from storefront.domain.model.order import PaymentStatus
from storefront.domain.repository.admin_repository import AdminRepository
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class MarkOrderPaidHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, note: str = "Payment confirmed") -> bool:
        """Returns True if this call flipped the order to paid."""
        result = self._order_repo.update(order_id, lambda order: order.mark_paid(note))
        if result is None:
            raise NotFoundError(f"Order {order_id} not found")
        order, flipped = result
        if flipped:
            logger.info("Order %s marked paid", order.order_number)
        return flipped


class UpdatePaymentStatusHandler:

    def __init__(self, order_repo: OrderRepository, admin_repo: AdminRepository) -> None:
        self._order_repo = order_repo
        self._guard = AdminGuard(admin_repo)

    def handle(
        self,
        admin_email: str,
        order_ids: list[str],
        payment_status: str,
    ) -> list[PaymentStatusDTO]:
        """Returns only the orders whose payment status actually changed."""
        if not order_ids:
            raise ValidationError("adminEmail, orderIds, and payment_status are required")
        target = PaymentStatus.parse(payment_status)
        admin = self._guard.require(admin_email)
        note = f"Payment marked {target.value} by admin"

        updated: list[PaymentStatusDTO] = []
        for order_id in dict.fromkeys(order_ids):
            result = self._order_repo.update(
                order_id, lambda order: order.set_payment_status(target, note)
            )
            if result is None:
                continue
            order, changed = result
            if changed:
                updated.append(
                    PaymentStatusDTO(id=order.id, payment_status=order.payment_status.value)
                )

        logger.info(
            "%s set payment_status=%s on %d order(s)", admin.email, target.value, len(updated)
        )
        return updated
