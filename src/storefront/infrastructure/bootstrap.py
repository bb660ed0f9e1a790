"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. ``build_container`` is
called once per process with the loaded configuration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from storefront.application.confirm_payment import ConfirmPaymentHandler
from storefront.application.list_sizes import ListSizesHandler
from storefront.application.notifications import NotificationDispatcher
from storefront.application.payment_gateway import PaymentGateway
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.send_payment_reminder import SendPaymentReminderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.start_checkout import StartCheckoutHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_payment_status import (
    MarkOrderPaidHandler,
    UpdatePaymentStatusHandler,
)
from storefront.application.update_size import UpdateSizeHandler
from storefront.domain.repository.admin_repository import AdminRepository
from storefront.domain.repository.customer_repository import CustomerRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_size_repository import ProductSizeRepository
from storefront.domain.repository.settings_repository import SettingsRepository
from storefront.infrastructure.config import AppConfig
from storefront.infrastructure.gateway.stripe_gateway import StripeGateway
from storefront.infrastructure.gateway.webhook import GatewayWebhookProcessor
from storefront.infrastructure.notifications.channels import (
    LogChannel,
    MessageChannel,
    ResendEmailChannel,
    TwilioSmsChannel,
)
from storefront.infrastructure.notifications.dispatcher import FanOutNotificationDispatcher
from storefront.infrastructure.persistence.json_admin_repository import JsonAdminRepository
from storefront.infrastructure.persistence.json_customer_repository import JsonCustomerRepository
from storefront.infrastructure.persistence.json_order_repository import JsonOrderRepository
from storefront.infrastructure.persistence.json_product_size_repository import (
    JsonProductSizeRepository,
)
from storefront.infrastructure.persistence.json_settings_repository import JsonSettingsRepository

logger = logging.getLogger(__name__)


def product_size_repository(data_dir: Path) -> JsonProductSizeRepository:
    return JsonProductSizeRepository(data_dir / "sizes.json")


def settings_repository(data_dir: Path) -> JsonSettingsRepository:
    return JsonSettingsRepository(data_dir / "settings.json")


def customer_repository(data_dir: Path) -> JsonCustomerRepository:
    return JsonCustomerRepository(data_dir / "customers.json")


def order_repository(data_dir: Path) -> JsonOrderRepository:
    return JsonOrderRepository(data_dir / "orders.json")


def admin_repository(data_dir: Path) -> JsonAdminRepository:
    return JsonAdminRepository(data_dir / "admins.json")


def payment_gateway(config: AppConfig) -> PaymentGateway | None:
    if not config.STRIPE_SECRET_KEY:
        logger.warning("STRIPE_SECRET_KEY not set; card checkout disabled")
        return None
    return StripeGateway(
        secret_key=config.STRIPE_SECRET_KEY,
        store_name=config.STORE_NAME,
        api_base=config.STRIPE_API_BASE,
        timeout=config.GATEWAY_TIMEOUT_SECONDS,
        max_retries=config.MAX_RETRIES,
        retry_delay=config.RETRY_DELAY,
    )


def notification_dispatcher(
    config: AppConfig, admin_repo: AdminRepository
) -> FanOutNotificationDispatcher:
    email: MessageChannel = LogChannel("email")
    if config.RESEND_API_KEY:
        email = ResendEmailChannel(config.RESEND_API_KEY, config.NOTIFICATION_FROM_EMAIL)

    sms: MessageChannel = LogChannel("sms")
    if config.TWILIO_ACCOUNT_SID and config.TWILIO_AUTH_TOKEN and config.TWILIO_FROM_NUMBER:
        sms = TwilioSmsChannel(
            config.TWILIO_ACCOUNT_SID, config.TWILIO_AUTH_TOKEN, config.TWILIO_FROM_NUMBER
        )

    return FanOutNotificationDispatcher(
        email_channel=email,
        sms_channel=sms,
        admin_repo=admin_repo,
        store_name=config.STORE_NAME,
        max_workers=config.NOTIFICATION_WORKERS,
    )


@dataclass
class Container:
    """Everything a request handler needs, built once per process."""

    config: AppConfig
    sizes: ProductSizeRepository
    settings: SettingsRepository
    customers: CustomerRepository
    orders: OrderRepository
    admins: AdminRepository
    dispatcher: NotificationDispatcher
    gateway: PaymentGateway | None

    # --- Use cases ------------------------------------------------------------

    def place_order(self) -> PlaceOrderHandler:
        return PlaceOrderHandler(
            self.sizes, self.settings, self.customers, self.orders, self.dispatcher
        )

    def start_checkout(self) -> StartCheckoutHandler:
        return StartCheckoutHandler(self.sizes, self.settings, self.gateway, self.config.SITE_URL)

    def confirm_payment(self) -> ConfirmPaymentHandler:
        return ConfirmPaymentHandler(
            self.sizes, self.settings, self.customers, self.orders, self.dispatcher
        )

    def webhook_processor(self) -> GatewayWebhookProcessor:
        return GatewayWebhookProcessor(
            self.confirm_payment(),
            self.config.STRIPE_WEBHOOK_SECRET,
            self.config.WEBHOOK_TOLERANCE_SECONDS,
        )

    def show_order(self) -> ShowOrderHandler:
        return ShowOrderHandler(self.orders)

    def list_sizes(self) -> ListSizesHandler:
        return ListSizesHandler(self.sizes)

    def update_order_status(self) -> UpdateOrderStatusHandler:
        return UpdateOrderStatusHandler(self.orders, self.admins)

    def update_payment_status(self) -> UpdatePaymentStatusHandler:
        return UpdatePaymentStatusHandler(self.orders, self.admins)

    def mark_paid(self) -> MarkOrderPaidHandler:
        return MarkOrderPaidHandler(self.orders)

    def update_size(self) -> UpdateSizeHandler:
        return UpdateSizeHandler(self.sizes, self.admins)

    def send_payment_reminder(self) -> SendPaymentReminderHandler:
        return SendPaymentReminderHandler(
            self.orders, self.customers, self.settings, self.admins, self.dispatcher
        )

    def close(self) -> None:
        self.dispatcher.shutdown()


def build_container(config: AppConfig) -> Container:
    data_dir = Path(config.DATA_DIR)
    admins = admin_repository(data_dir)
    return Container(
        config=config,
        sizes=product_size_repository(data_dir),
        settings=settings_repository(data_dir),
        customers=customer_repository(data_dir),
        orders=order_repository(data_dir),
        admins=admins,
        dispatcher=notification_dispatcher(config, admins),
        gateway=payment_gateway(config),
    )
