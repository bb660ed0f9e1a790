"""Application service: Show Order use case (query, no mutation)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, to_order_dto
from storefront.domain.exceptions import NotFoundError, ValidationError
from storefront.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError("Order not found")
        return to_order_dto(order)

    def handle_by_session(self, session_id: str | None) -> OrderDTO:
        if not session_id:
            raise ValidationError("Missing session_id")
        order = self._order_repo.get_by_payment_session(session_id)
        if order is None:
            raise NotFoundError("Order not found")
        return to_order_dto(order)
