"""Storefront API endpoints."""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.concurrency import run_in_threadpool

from storefront.application.dto import CartLine, CustomerDetails
from storefront.infrastructure.api.schemas import (
    AdminIn,
    CheckoutIn,
    CustomerIn,
    OrderStatusUpdateIn,
    PaymentStatusUpdateIn,
    SizeUpdateIn,
    VenmoOrderIn,
)
from storefront.infrastructure.bootstrap import Container

router = APIRouter(prefix="/api")


def get_container(request: Request) -> Container:
    """Dependency to get the process-wide Container"""
    return request.app.state.container


def _customer(payload: CustomerIn) -> CustomerDetails:
    return CustomerDetails(**payload.model_dump())


# --- Customer-facing ------------------------------------------------------------


@router.post("/orders/venmo", summary="Place a pay-later order")
def create_venmo_order(payload: VenmoOrderIn, container: Container = Depends(get_container)):
    """
    Create the order now with payment pending; the response carries the
    payment handle to show the customer.
    """
    placed = container.place_order().handle(
        items=[CartLine(size_id=i.size_id, quantity=i.quantity) for i in payload.items],
        fulfillment_method=payload.fulfillment_method,
        customer=_customer(payload.customer),
        notes=payload.notes,
    )
    return {
        "order_id": placed.order_id,
        "total_cents": placed.total_cents,
        "currency": placed.currency,
        "payment_handle": placed.payment_handle,
        "order_number": placed.order_number,
    }


@router.post("/checkout", summary="Open a hosted card checkout session")
def create_checkout(payload: CheckoutIn, container: Container = Depends(get_container)):
    session = container.start_checkout().handle(
        size_id=payload.size_id,
        quantity=payload.quantity,
        fulfillment_method=payload.fulfillment_method,
        customer=_customer(payload.customer),
        notes=payload.notes,
    )
    return {"url": session.url, "session_id": session.session_id}


@router.post("/webhooks/stripe", summary="Gateway webhook")
async def gateway_webhook(request: Request, container: Container = Depends(get_container)):
    payload = await request.body()
    signature = request.headers.get("stripe-signature")
    await run_in_threadpool(container.webhook_processor().process, payload, signature)
    return {"received": True}


@router.get("/orders/status", summary="Order status by checkout session")
def order_status(
    session_id: str = Query("", description="Gateway checkout session id"),
    container: Container = Depends(get_container),
):
    return {"order": container.show_order().handle_by_session(session_id)}


@router.get("/orders/{order_id}", summary="Order by id")
def get_order(order_id: str, container: Container = Depends(get_container)):
    return {"order": container.show_order().handle(order_id)}


@router.get("/sizes", summary="List sizes")
def list_sizes(
    active_only: bool = Query(False, description="Hide inactive sizes"),
    container: Container = Depends(get_container),
):
    return {"sizes": container.list_sizes().handle(active_only=active_only)}


# --- Admin ----------------------------------------------------------------------


@router.post("/admin/orders/payment-status", summary="Bulk set payment status")
def update_payment_status(
    payload: PaymentStatusUpdateIn, container: Container = Depends(get_container)
):
    updated = container.update_payment_status().handle(
        admin_email=payload.admin_email,
        order_ids=payload.order_ids,
        payment_status=payload.payment_status,
    )
    return {"orders": updated}


@router.post("/admin/orders/{order_id}/status", summary="Set order status")
def update_order_status(
    order_id: str,
    payload: OrderStatusUpdateIn,
    container: Container = Depends(get_container),
):
    order = container.update_order_status().handle(
        admin_email=payload.admin_email,
        order_id=order_id,
        new_status=payload.status,
        note=payload.note,
    )
    return {"order": order}


@router.post("/admin/orders/{order_id}/reminder", summary="Send a payment reminder")
def send_reminder(order_id: str, payload: AdminIn, container: Container = Depends(get_container)):
    container.send_payment_reminder().handle(admin_email=payload.admin_email, order_id=order_id)
    return {"sent": True}


@router.post("/admin/sizes/update", summary="Update allowlisted size fields")
def update_size(payload: SizeUpdateIn, container: Container = Depends(get_container)):
    size = container.update_size().handle(
        admin_email=payload.admin_email, size_id=payload.id, updates=payload.updates
    )
    return {"size": size}
