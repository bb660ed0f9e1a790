"""Tests for the StartCheckout use case (gateway path)."""

import pytest

from storefront.application.dto import CustomerDetails
from storefront.application.payment_gateway import CheckoutSessionMetadata
from storefront.application.start_checkout import StartCheckoutHandler
from storefront.domain.exceptions import (
    ConfigurationError,
    GatewayError,
    SizeUnavailableError,
    ValidationError,
)
from storefront.domain.model.store_settings import DiscountType
from storefront.domain.model.value_objects import FulfillmentMethod
from tests.fakes import (
    FakeGateway,
    FakeProductSizeRepository,
    FakeSettingsRepository,
    make_settings,
    make_size,
)

CUSTOMER = CustomerDetails(
    name=" Sam ", email="sam@example.com", phone="5551234567", address="1 Main St"
)


def _setup(gateway=None, settings=None, sizes=None):
    gateway = FakeGateway() if gateway is None else gateway
    handler = StartCheckoutHandler(
        FakeProductSizeRepository(sizes or [make_size(available_qty=0)]),
        FakeSettingsRepository(settings or make_settings()),
        gateway,
        "https://shop.example/",
    )
    return handler, gateway


class TestStartCheckout:

    def test_opens_session_with_priced_metadata(self):
        handler, gateway = _setup()
        dto = handler.handle("half", 2, "delivery", CUSTOMER, notes=" ring bell ")

        assert dto.session_id == "cs_test_1"
        assert dto.url == "https://pay.example/cs_test_1"
        metadata, success_url, cancel_url = gateway.sessions[0]
        assert metadata.subtotal_cents == 6400
        assert metadata.delivery_fee_cents == 800
        assert metadata.total_cents == 7200
        assert metadata.customer_name == "Sam"
        assert metadata.notes == "ring bell"
        assert success_url == (
            "https://shop.example/order-confirmation?session_id={CHECKOUT_SESSION_ID}"
        )
        assert cancel_url == "https://shop.example/"

    def test_stock_not_checked_until_payment(self):
        handler, gateway = _setup()
        handler.handle("half", 5, "pickup", CUSTOMER)
        assert len(gateway.sessions) == 1

    def test_pickup_discount_in_metadata(self):
        settings = make_settings(
            pickup_discount_enabled=True,
            pickup_discount_type=DiscountType.FIXED,
            pickup_discount_value=500,
        )
        handler, gateway = _setup(settings=settings)
        handler.handle("half", 1, "pickup", CUSTOMER)
        metadata = gateway.sessions[0][0]
        assert metadata.fulfillment_method is FulfillmentMethod.PICKUP
        assert metadata.pickup_discount_cents == 500
        assert metadata.address == ""

    def test_metadata_survives_string_round_trip(self):
        handler, gateway = _setup()
        handler.handle("half", 2, "delivery", CUSTOMER)
        metadata = gateway.sessions[0][0]
        assert CheckoutSessionMetadata.from_metadata(metadata.to_metadata()) == metadata

    def test_no_gateway_configured(self):
        handler = StartCheckoutHandler(
            FakeProductSizeRepository([make_size()]),
            FakeSettingsRepository(make_settings()),
            None,
            "https://shop.example",
        )
        with pytest.raises(ConfigurationError):
            handler.handle("half", 1, "pickup", CUSTOMER)

    def test_inactive_size(self):
        handler, gateway = _setup(sizes=[make_size(is_active=False)])
        with pytest.raises(SizeUnavailableError):
            handler.handle("half", 1, "pickup", CUSTOMER)
        assert gateway.sessions == []

    def test_missing_customer_email(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="email"):
            handler.handle(
                "half", 1, "pickup", CustomerDetails(name="Sam", email=" ", phone="1")
            )

    def test_gateway_failure_propagates(self):
        handler, _ = _setup(gateway=FakeGateway(fail=True))
        with pytest.raises(GatewayError):
            handler.handle("half", 1, "pickup", CUSTOMER)
