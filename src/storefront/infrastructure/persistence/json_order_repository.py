"""JSON-file-backed implementation of OrderRepository.

Orders are stored whole: items and status history nest inside the order
record, so writing an order writes all three together.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable

from storefront.domain.exceptions import DuplicatePaymentSessionError, OrderPersistenceError
from storefront.domain.model.order import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    StatusHistoryEntry,
)
from storefront.domain.model.value_objects import (
    DEFAULT_CURRENCY,
    DeliveryAddress,
    FulfillmentMethod,
    Quantity,
)
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_payment_session(self, session_id: str) -> Order | None:
        for raw in self._file.load():
            if raw.get("payment_session_id") == session_id:
                return self._to_domain(raw)
        return None

    def add(self, order: Order) -> None:
        with self._file.lock:
            orders = self._file.load()
            for raw in orders:
                if raw["id"] == order.id:
                    raise OrderPersistenceError("Failed to create order")
                if (
                    order.payment_session_id is not None
                    and raw.get("payment_session_id") == order.payment_session_id
                ):
                    raise DuplicatePaymentSessionError(order.payment_session_id)
            orders.append(self._to_raw(order))
            self._write(orders)

    def update(
        self, order_id: str, mutate: Callable[[Order], bool]
    ) -> tuple[Order, bool] | None:
        with self._file.lock:
            orders = self._file.load()
            for i, raw in enumerate(orders):
                if raw["id"] != order_id:
                    continue
                order = self._to_domain(raw)
                changed = mutate(order)
                if changed:
                    orders[i] = self._to_raw(order)
                    self._write(orders)
                return order, changed
            return None

    def delete(self, order_id: str) -> None:
        with self._file.lock:
            orders = self._file.load()
            remaining = [raw for raw in orders if raw["id"] != order_id]
            if len(remaining) != len(orders):
                self._write(remaining)

    # --- Serialization --------------------------------------------------------

    def _write(self, orders: list[dict]) -> None:
        try:
            self._file.persist(orders)
        except OSError as exc:
            raise OrderPersistenceError("Failed to write orders") from exc

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "fulfillment_method": order.fulfillment_method.value,
            "status": order.status.value,
            "payment_status": order.payment_status.value,
            "subtotal_cents": order.subtotal_cents,
            "pickup_discount_cents": order.pickup_discount_cents,
            "delivery_fee_cents": order.delivery_fee_cents,
            "total_cents": order.total_cents,
            "currency": order.currency,
            "notes": order.notes,
            "delivery_address": (
                order.delivery_address.to_dict() if order.delivery_address else None
            ),
            "payment_session_id": order.payment_session_id,
            "payment_intent_id": order.payment_intent_id,
            "created_at": order.created_at.isoformat(),
            "items": [
                {
                    "size_id": item.size_id,
                    "size_name": item.size_name,
                    "unit_label": item.unit_label,
                    "quantity": item.quantity.value,
                    "price_cents": item.price_cents,
                }
                for item in order.items
            ],
            "history": [
                {
                    "status": entry.status.value,
                    "note": entry.note,
                    "timestamp": entry.timestamp.isoformat(),
                }
                for entry in order.history
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderItem(
                size_id=i["size_id"],
                size_name=i["size_name"],
                unit_label=i.get("unit_label", ""),
                quantity=Quantity(i["quantity"]),
                price_cents=i["price_cents"],
            )
            for i in raw["items"]
        ]
        history = [
            StatusHistoryEntry(
                status=OrderStatus.parse(h["status"]),
                note=h.get("note", ""),
                timestamp=datetime.fromisoformat(h["timestamp"]),
            )
            for h in raw.get("history", [])
        ]
        address = raw.get("delivery_address")
        return Order(
            id=raw["id"],
            customer_id=raw["customer_id"],
            fulfillment_method=FulfillmentMethod(raw["fulfillment_method"]),
            items=items,
            subtotal_cents=raw["subtotal_cents"],
            pickup_discount_cents=raw["pickup_discount_cents"],
            delivery_fee_cents=raw["delivery_fee_cents"],
            total_cents=raw["total_cents"],
            currency=raw.get("currency", DEFAULT_CURRENCY),
            status=OrderStatus.parse(raw["status"]),
            payment_status=PaymentStatus(raw["payment_status"]),
            notes=raw.get("notes"),
            delivery_address=DeliveryAddress.from_dict(address) if address else None,
            payment_session_id=raw.get("payment_session_id"),
            payment_intent_id=raw.get("payment_intent_id"),
            history=history,
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
