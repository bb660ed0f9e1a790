"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from storefront.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_payment_session(self, session_id: str) -> Order | None:
        """Return the order created for a gateway session, or None."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new order aggregate (items and history included).

        Raises DuplicatePaymentSessionError when another order already holds
        the same ``payment_session_id``; the check and the insert are atomic.
        """

    @abstractmethod
    def update(
        self, order_id: str, mutate: Callable[[Order], bool]
    ) -> tuple[Order, bool] | None:
        """Apply ``mutate`` to the stored order; persist it if that returns True.

        Load, mutate and write form one atomic step, so two updates of the
        same order never overwrite each other. Returns the order as stored
        afterwards with the result of ``mutate``, or None for an unknown id.
        """

    @abstractmethod
    def delete(self, order_id: str) -> None:
        """Remove an order; used only to compensate a failed checkout."""
