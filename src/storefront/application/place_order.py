"""Application service: Place Order use case (pay-later path).

The order is created immediately with payment pending; the customer pays
off-platform to the store's payment handle.

Sequence:
1. Validate the cart and request fields.
2. Check every line against stock (all-or-nothing).
3. Resolve or create the customer.
4. Price the cart from server-held sizes and settings.
5. Persist the order aggregate (items + first history row) in one write.
6. Take stock with atomic conditional decrements. If a concurrent checkout
   won the race, the order written in step 5 is deleted again.
7. Notify; failures are logged, never raised.
"""

from __future__ import annotations

import logging

from storefront.application.dto import CartLine, CustomerDetails, PlacedOrderDTO
from storefront.application.notifications import (
    NotificationDispatcher,
    NotificationEvent,
    notify_quietly,
)
from storefront.domain.exceptions import (
    AvailabilityError,
    MissingPaymentConfigError,
    NotFoundError,
    ValidationError,
)
from storefront.domain.model.order import Order, OrderItem
from storefront.domain.model.value_objects import FulfillmentMethod, Quantity
from storefront.domain.repository.customer_repository import CustomerRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_size_repository import ProductSizeRepository
from storefront.domain.repository.settings_repository import SettingsRepository
from storefront.domain.service.customer_resolver import CustomerIdentityResolver
from storefront.domain.service.inventory_ledger import InventoryLedger
from storefront.domain.service.pricing import PricedLine, compute_totals

logger = logging.getLogger(__name__)

CREATED_NOTE = "Order created, awaiting Venmo payment"


class PlaceOrderHandler:

    def __init__(
        self,
        size_repo: ProductSizeRepository,
        settings_repo: SettingsRepository,
        customer_repo: CustomerRepository,
        order_repo: OrderRepository,
        dispatcher: NotificationDispatcher,
    ) -> None:
        self._size_repo = size_repo
        self._settings_repo = settings_repo
        self._order_repo = order_repo
        self._dispatcher = dispatcher
        self._ledger = InventoryLedger(size_repo)
        self._resolver = CustomerIdentityResolver(customer_repo)

    def handle(
        self,
        items: list[CartLine],
        fulfillment_method: str,
        customer: CustomerDetails,
        notes: str | None = None,
    ) -> PlacedOrderDTO:
        if not items:
            raise ValidationError("Cart is empty")
        lines = [(line.size_id, Quantity(line.quantity).value) for line in items]
        method = FulfillmentMethod.parse(fulfillment_method)
        address = (
            customer.delivery_address() if method is FulfillmentMethod.DELIVERY else None
        )

        sizes = self._ledger.validate_lines(lines)

        settings = self._settings_repo.get()
        if settings is None or settings.payment_handle is None:
            raise MissingPaymentConfigError("Venmo address not configured")

        buyer = self._resolver.resolve(customer.email, customer.phone, customer.name)

        totals = compute_totals(
            [PricedLine(sizes[size_id], qty) for size_id, qty in lines],
            settings,
            method,
        )
        order_items = [
            OrderItem(
                size_id=size_id,
                size_name=sizes[size_id].name,
                unit_label=sizes[size_id].unit_label,
                quantity=Quantity(qty),
                price_cents=sizes[size_id].price_cents,  # <-- price snapshot
            )
            for size_id, qty in lines
        ]
        order = Order.create(
            customer_id=buyer.id,  # type: ignore[arg-type]
            fulfillment_method=method,
            items=order_items,
            totals=totals,
            currency=settings.currency,
            notes=notes,
            delivery_address=address,
            history_note=CREATED_NOTE,
        )
        self._order_repo.add(order)

        try:
            self._ledger.take(lines)
        except (AvailabilityError, NotFoundError):
            logger.warning("Stock ran out while placing order %s; removing it", order.id)
            self._order_repo.delete(order.id)
            raise

        logger.info(
            "Order %s placed: %d item(s), total %s, payment pending",
            order.order_number,
            order.item_count,
            order.total,
        )
        notify_quietly(self._dispatcher, NotificationEvent.ORDER_CREATED, order, buyer, settings)

        return PlacedOrderDTO(
            order_id=order.id,
            order_number=order.order_number,
            total_cents=order.total_cents,
            currency=order.currency,
            payment_handle=settings.payment_handle,
        )
