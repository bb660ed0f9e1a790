"""Application service: Start Checkout use case (gateway path).

Prices a single size from server-held records and opens a hosted payment
session carrying the full order as metadata. No order exists until the
gateway confirms payment; stock is therefore checked and taken only at
confirmation time, and a price edit made in between is not applied to
the session already opened.
"""

from __future__ import annotations

import logging

from storefront.application.dto import CheckoutSessionDTO, CustomerDetails
from storefront.application.payment_gateway import CheckoutSessionMetadata, PaymentGateway
from storefront.domain.exceptions import ConfigurationError, SizeUnavailableError, ValidationError
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, FulfillmentMethod, Quantity
from storefront.domain.repository.product_size_repository import ProductSizeRepository
from storefront.domain.repository.settings_repository import SettingsRepository
from storefront.domain.service.pricing import PricedLine, compute_totals

logger = logging.getLogger(__name__)


class StartCheckoutHandler:

    def __init__(
        self,
        size_repo: ProductSizeRepository,
        settings_repo: SettingsRepository,
        gateway: PaymentGateway | None,
        site_url: str,
    ) -> None:
        self._size_repo = size_repo
        self._settings_repo = settings_repo
        self._gateway = gateway
        self._site_url = site_url.rstrip("/")

    def handle(
        self,
        size_id: str,
        quantity: int,
        fulfillment_method: str,
        customer: CustomerDetails,
        notes: str | None = None,
    ) -> CheckoutSessionDTO:
        if self._gateway is None:
            raise ConfigurationError("Payment gateway is not configured")

        qty = Quantity(quantity).value
        method = FulfillmentMethod.parse(fulfillment_method)
        for label, value in (
            ("name", customer.name),
            ("email", customer.email),
            ("phone", customer.phone),
        ):
            if not value or not value.strip():
                raise ValidationError(f"Customer {label} is required")
        address = (
            customer.delivery_address() if method is FulfillmentMethod.DELIVERY else None
        )

        size = self._size_repo.get_by_id(size_id)
        if size is None or not size.is_active:
            raise SizeUnavailableError(size_id)

        settings = self._settings_repo.get()
        totals = compute_totals([PricedLine(size, qty)], settings, method)

        metadata = CheckoutSessionMetadata(
            size_id=size.id,
            size_name=size.name,
            unit_label=size.unit_label,
            unit_price_cents=size.price_cents,
            quantity=qty,
            fulfillment_method=method,
            subtotal_cents=totals.base,
            pickup_discount_cents=totals.pickup_discount,
            delivery_fee_cents=totals.delivery_fee,
            total_cents=totals.total,
            currency=settings.currency if settings else DEFAULT_CURRENCY,
            customer_name=customer.name.strip(),
            customer_email=customer.email.strip(),
            customer_phone=customer.phone.strip(),
            address=address.address if address else "",
            city=address.city if address else "",
            state=address.state if address else "",
            postal_code=address.postal_code if address else "",
            notes=(notes or "").strip(),
        )
        session = self._gateway.create_session(
            metadata,
            success_url=f"{self._site_url}/order-confirmation?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{self._site_url}/",
        )
        logger.info("Opened checkout session %s for %d x %s", session.id, qty, size.name)
        return CheckoutSessionDTO(session_id=session.id, url=session.url)
