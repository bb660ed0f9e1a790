"""Tests for the admin use cases on orders: status, payment, reminders."""

import threading
import time

import pytest

from storefront.application.admin_guard import AdminGuard
from storefront.application.confirm_payment import ConfirmPaymentHandler
from storefront.application.dto import CartLine, CustomerDetails
from storefront.application.notifications import NotificationEvent
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.send_payment_reminder import SendPaymentReminderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_payment_status import (
    MarkOrderPaidHandler,
    UpdatePaymentStatusHandler,
)
from storefront.domain.exceptions import AuthorizationError, NotFoundError, ValidationError
from storefront.domain.model.order import OrderStatus, PaymentStatus
from tests.fakes import (
    ADMIN_EMAIL,
    FakeAdminRepository,
    FakeCustomerRepository,
    FakeOrderRepository,
    FakeProductSizeRepository,
    FakeSettingsRepository,
    RecordingDispatcher,
    make_admin,
    make_metadata,
    make_settings,
    make_size,
)


class _Env:
    """A store with one placed pay-later order."""

    def __init__(self, orders=None):
        self.sizes = FakeProductSizeRepository([make_size()])
        self.settings = FakeSettingsRepository(make_settings())
        self.customers = FakeCustomerRepository()
        self.orders = FakeOrderRepository() if orders is None else orders
        self.admins = FakeAdminRepository([make_admin()])
        self.dispatcher = RecordingDispatcher()
        placed = PlaceOrderHandler(
            self.sizes, self.settings, self.customers, self.orders, self.dispatcher
        ).handle(
            [CartLine("half", 1)],
            "pickup",
            CustomerDetails(name="Sam", email="sam@example.com", phone="5551234567"),
        )
        self.order_id = placed.order_id
        self.dispatcher.calls.clear()


class TestAdminGuard:

    def test_known_admin_case_insensitive(self):
        guard = AdminGuard(FakeAdminRepository([make_admin()]))
        assert guard.require("  OWNER@example.com").id == "a1"

    def test_unknown_admin(self):
        guard = AdminGuard(FakeAdminRepository([make_admin()]))
        with pytest.raises(AuthorizationError, match="admin required"):
            guard.require("mallory@example.com")

    def test_missing_admin_email(self):
        with pytest.raises(ValidationError, match="adminEmail is required"):
            AdminGuard(FakeAdminRepository()).require(None)


class TestUpdateOrderStatus:

    def test_history_traces_lifecycle(self):
        env = _Env()
        handler = UpdateOrderStatusHandler(env.orders, env.admins)
        for status in ("In Progress", "Ready", "Picked Up"):
            dto = handler.handle(ADMIN_EMAIL, env.order_id, status)

        assert dto.status == "Picked Up"
        assert [h.status for h in dto.history] == [
            "Outstanding",
            "In Progress",
            "Ready",
            "Picked Up",
        ]
        assert dto.history[0].note == "Order created, awaiting Venmo payment"

    def test_shipped_alias(self):
        env = _Env()
        dto = UpdateOrderStatusHandler(env.orders, env.admins).handle(
            ADMIN_EMAIL, env.order_id, "shipped"
        )
        assert dto.status == "Delivered"

    def test_same_status_is_not_recorded(self):
        env = _Env()
        dto = UpdateOrderStatusHandler(env.orders, env.admins).handle(
            ADMIN_EMAIL, env.order_id, "Outstanding"
        )
        assert len(dto.history) == 1

    def test_non_admin_cannot_change_status(self):
        env = _Env()
        with pytest.raises(AuthorizationError):
            UpdateOrderStatusHandler(env.orders, env.admins).handle(
                "sam@example.com", env.order_id, "Ready"
            )
        assert env.orders.get_by_id(env.order_id).status is OrderStatus.OUTSTANDING

    def test_unknown_order(self):
        env = _Env()
        with pytest.raises(NotFoundError):
            UpdateOrderStatusHandler(env.orders, env.admins).handle(ADMIN_EMAIL, "nope", "Ready")


class TestUpdatePaymentStatus:

    def test_bulk_update_skips_unknown_ids(self):
        env = _Env()
        updated = UpdatePaymentStatusHandler(env.orders, env.admins).handle(
            ADMIN_EMAIL, [env.order_id, "missing"], "paid"
        )
        assert [(u.id, u.payment_status) for u in updated] == [(env.order_id, "paid")]
        order = env.orders.get_by_id(env.order_id)
        assert order.payment_status is PaymentStatus.PAID
        assert order.history[-1].note == "Payment marked paid by admin"

    def test_empty_ids_rejected(self):
        env = _Env()
        with pytest.raises(ValidationError):
            UpdatePaymentStatusHandler(env.orders, env.admins).handle(ADMIN_EMAIL, [], "paid")

    def test_bad_status_rejected(self):
        env = _Env()
        with pytest.raises(ValidationError, match="payment_status"):
            UpdatePaymentStatusHandler(env.orders, env.admins).handle(
                ADMIN_EMAIL, [env.order_id], "refunded"
            )

    def test_requires_admin(self):
        env = _Env()
        with pytest.raises(AuthorizationError):
            UpdatePaymentStatusHandler(env.orders, env.admins).handle(
                "nobody@example.com", [env.order_id], "paid"
            )

    def test_only_changed_orders_reported(self):
        env = _Env()
        MarkOrderPaidHandler(env.orders).handle(env.order_id)
        updated = UpdatePaymentStatusHandler(env.orders, env.admins).handle(
            ADMIN_EMAIL, [env.order_id], "paid"
        )
        assert updated == []
        assert len(env.orders.get_by_id(env.order_id).history) == 2


class TestMarkOrderPaid:

    def test_idempotent(self):
        env = _Env()
        handler = MarkOrderPaidHandler(env.orders)
        assert handler.handle(env.order_id)
        assert not handler.handle(env.order_id)
        order = env.orders.get_by_id(env.order_id)
        assert [h.note for h in order.history].count("Payment confirmed") == 1

    def test_unknown_order(self):
        with pytest.raises(NotFoundError):
            MarkOrderPaidHandler(FakeOrderRepository()).handle("nope")


class TestSendPaymentReminder:

    def _handler(self, env):
        return SendPaymentReminderHandler(
            env.orders, env.customers, env.settings, env.admins, env.dispatcher
        )

    def test_dispatches_reminder(self):
        env = _Env()
        self._handler(env).handle(ADMIN_EMAIL, env.order_id)
        assert env.dispatcher.calls == [
            (NotificationEvent.PAYMENT_REMINDER, env.order_id, "sam@example.com")
        ]

    def test_paid_order_rejected(self):
        env = _Env()
        MarkOrderPaidHandler(env.orders).handle(env.order_id)
        with pytest.raises(ValidationError, match="already paid"):
            self._handler(env).handle(ADMIN_EMAIL, env.order_id)
        assert env.dispatcher.calls == []


# ── Concurrent edits of one order ────────────────────────────────────────────


class _SlowOrderRepository(FakeOrderRepository):
    """Holds each mutation open for a moment so concurrent updates overlap."""

    def update(self, order_id, mutate):
        def slow(order):
            changed = mutate(order)
            time.sleep(0.05)
            return changed

        return super().update(order_id, slow)


class _StallingSizeRepository(FakeProductSizeRepository):
    """Pauses the paid-order stock decrement until the other thread arrives."""

    def __init__(self, sizes, barrier):
        super().__init__(sizes)
        self._barrier = barrier

    def decrement_floor(self, size_id, quantity):
        self._barrier.wait(timeout=5)
        return super().decrement_floor(size_id, quantity)


def _run_together(*calls):
    barrier = threading.Barrier(len(calls))
    errors = []

    def run(call):
        barrier.wait(timeout=5)
        try:
            call()
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=run, args=(call,)) for call in calls]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []


class TestConcurrentOrderEdits:

    def test_status_edit_and_mark_paid_both_survive(self):
        env = _Env(orders=_SlowOrderRepository())
        status = UpdateOrderStatusHandler(env.orders, env.admins)
        paid = MarkOrderPaidHandler(env.orders)

        _run_together(
            lambda: status.handle(ADMIN_EMAIL, env.order_id, "In Progress"),
            lambda: paid.handle(env.order_id),
        )

        order = env.orders.get_by_id(env.order_id)
        assert order.status is OrderStatus.IN_PROGRESS
        assert order.payment_status is PaymentStatus.PAID
        notes = [h.note for h in order.history]
        assert len(notes) == 3
        assert "Payment confirmed" in notes
        assert "Status changed from Outstanding to In Progress" in notes

    def test_admin_edit_survives_stock_short_note(self):
        barrier = threading.Barrier(2)
        sizes = _StallingSizeRepository([make_size(available_qty=1)], barrier)
        orders = _SlowOrderRepository()
        admins = FakeAdminRepository([make_admin()])
        confirm = ConfirmPaymentHandler(
            sizes,
            FakeSettingsRepository(make_settings()),
            FakeCustomerRepository(),
            orders,
            RecordingDispatcher(),
        )
        status = UpdateOrderStatusHandler(orders, admins)
        errors = []

        def webhook():
            try:
                confirm.handle("cs_1", make_metadata(quantity=3))
            except Exception as exc:
                errors.append(exc)

        def admin():
            # The order exists once the webhook reaches the stock decrement.
            barrier.wait(timeout=5)
            try:
                status.handle(ADMIN_EMAIL, orders.all()[0].id, "In Progress")
            except Exception as exc:
                errors.append(exc)

        threads = [threading.Thread(target=webhook), threading.Thread(target=admin)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        order = orders.get_by_payment_session("cs_1")
        assert order.status is OrderStatus.IN_PROGRESS
        assert order.is_paid
        notes = [h.note for h in order.history]
        assert len(notes) == 3
        assert "Stock short by 2 at payment confirmation" in notes
        assert "Status changed from Outstanding to In Progress" in notes
        assert sizes.available("half") == 0
