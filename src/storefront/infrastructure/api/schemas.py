"""Pydantic schemas for request validation.

These check shape only; business rules (positive quantities, known
statuses, delivery addresses) stay in the domain so every entry point
reports them the same way.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class CustomerIn(BaseModel):
    name: str
    email: str
    phone: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None


class CartItemIn(BaseModel):
    size_id: str
    quantity: int


class VenmoOrderIn(BaseModel):
    """Pay-later checkout: a multi-line cart."""

    items: list[CartItemIn]
    fulfillment_method: str
    customer: CustomerIn
    notes: Optional[str] = None


class CheckoutIn(BaseModel):
    """Gateway checkout: the single-size shape."""

    size_id: str
    quantity: int
    fulfillment_method: str
    customer: CustomerIn
    notes: Optional[str] = None


class PaymentStatusUpdateIn(BaseModel):
    order_ids: list[str] = Field(..., alias="orderIds")
    payment_status: str
    admin_email: str = Field(..., alias="adminEmail")


class OrderStatusUpdateIn(BaseModel):
    status: str
    admin_email: str = Field(..., alias="adminEmail")
    note: Optional[str] = None


class AdminIn(BaseModel):
    admin_email: str = Field(..., alias="adminEmail")


class SizeUpdateIn(BaseModel):
    id: str
    updates: dict[str, Any]
    admin_email: str = Field(..., alias="adminEmail")
