"""HTTP client for a Stripe-compatible hosted checkout API, with retry logic."""

from __future__ import annotations

import logging
import uuid

import httpx
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from storefront.application.payment_gateway import (
    CheckoutSession,
    CheckoutSessionMetadata,
    PaymentGateway,
)
from storefront.domain.exceptions import GatewayError
from storefront.domain.model.value_objects import FulfillmentMethod

logger = logging.getLogger(__name__)

_TRANSIENT = (httpx.TimeoutException, httpx.ConnectError)


class StripeGateway(PaymentGateway):
    """Client for the hosted checkout REST API (form-encoded, bearer auth)."""

    def __init__(
        self,
        secret_key: str,
        store_name: str,
        api_base: str = "https://api.stripe.com",
        timeout: float = 10.0,
        max_retries: int = 3,
        retry_delay: int = 1,
        client: httpx.Client | None = None,
    ) -> None:
        self._store_name = store_name
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._client = client or httpx.Client(
            base_url=api_base,
            timeout=timeout,
            headers={"Authorization": f"Bearer {secret_key}"},
        )

    # --- PaymentGateway interface ---------------------------------------------

    def create_session(
        self,
        metadata: CheckoutSessionMetadata,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        currency = metadata.currency.lower()
        form: dict[str, str] = {
            "mode": "payment",
            "payment_method_types[0]": "card",
            "phone_number_collection[enabled]": "true",
            "success_url": success_url,
            "cancel_url": cancel_url,
            "line_items[0][quantity]": str(metadata.quantity),
            "line_items[0][price_data][currency]": currency,
            "line_items[0][price_data][unit_amount]": str(metadata.unit_price_cents),
            "line_items[0][price_data][product_data][name]": (
                f"{metadata.size_name} - {self._store_name}"
            ),
            "line_items[0][price_data][product_data][description]": (
                f"{metadata.unit_label} • {metadata.fulfillment_method.value}"
            ),
        }
        for key, value in metadata.to_metadata().items():
            form[f"metadata[{key}]"] = value

        if metadata.fulfillment_method is FulfillmentMethod.DELIVERY and metadata.delivery_fee_cents:
            prefix = "shipping_options[0][shipping_rate_data]"
            form[f"{prefix}[display_name]"] = "Flat delivery"
            form[f"{prefix}[type]"] = "fixed_amount"
            form[f"{prefix}[fixed_amount][amount]"] = str(metadata.delivery_fee_cents)
            form[f"{prefix}[fixed_amount][currency]"] = currency

        if metadata.pickup_discount_cents > 0:
            form["discounts[0][coupon]"] = self._ensure_pickup_coupon(
                metadata.pickup_discount_cents, currency
            )

        body = self._request(
            "POST",
            "/v1/checkout/sessions",
            data=form,
            headers={"Idempotency-Key": str(uuid.uuid4())},
        )
        return CheckoutSession(id=body["id"], url=body["url"])

    # --- Internal helpers -----------------------------------------------------

    def _ensure_pickup_coupon(self, amount_off: int, currency: str) -> str:
        """Reuse a coupon with the same amount and currency, else create one."""
        listing = self._request("GET", "/v1/coupons", params={"limit": "100"})
        for coupon in listing.get("data", []):
            if coupon.get("amount_off") == amount_off and coupon.get("currency") == currency:
                return coupon["id"]
        created = self._request(
            "POST",
            "/v1/coupons",
            data={"amount_off": str(amount_off), "currency": currency, "name": "Pickup discount"},
        )
        return created["id"]

    def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self._max_retries),
                wait=wait_exponential(multiplier=self._retry_delay, max=10),
                retry=retry_if_exception_type(_TRANSIENT),
                reraise=True,
            ):
                with attempt:
                    response = self._client.request(method, path, **kwargs)
        except _TRANSIENT as exc:
            logger.error("Payment gateway unreachable: %s", exc)
            raise GatewayError("Payment gateway unavailable") from exc

        if response.status_code >= 400:
            try:
                message = response.json().get("error", {}).get("message", "")
            except ValueError:
                message = ""
            logger.error("Gateway %s %s failed (%d): %s", method, path, response.status_code, message)
            raise GatewayError(message or f"Payment gateway error ({response.status_code})")
        return response.json()
