"""Application service: Update Order Status use case (admin).

Any status may follow any other. Every real change appends a history row,
so the trail covers admin edits as well as creation and payment.
"""

from __future__ import annotations

import logging

from storefront.application.admin_guard import AdminGuard
from storefront.application.dto import OrderDTO, to_order_dto
from storefront.domain.exceptions import NotFoundError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.admin_repository import AdminRepository
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository, admin_repo: AdminRepository) -> None:
        self._order_repo = order_repo
        self._guard = AdminGuard(admin_repo)

    def handle(
        self,
        admin_email: str,
        order_id: str,
        new_status: str,
        note: str | None = None,
    ) -> OrderDTO:
        admin = self._guard.require(admin_email)
        status = OrderStatus.parse(new_status)

        result = self._order_repo.update(order_id, lambda order: order.update_status(status, note))
        if result is None:
            raise NotFoundError(f"Order {order_id} not found")

        order, changed = result
        if changed:
            logger.info("Order %s set to %s by %s", order.order_number, status.value, admin.email)
        return to_order_dto(order)
