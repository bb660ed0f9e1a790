"""Domain service: Pricing Engine.

Pure and deterministic. It never raises on missing data: a line without a
size contributes nothing and absent settings mean no fee and no discount,
so checkout keeps working on partially-loaded configuration.

Rounding: percent discounts round half-up on whole cents.
Clamping: the pickup discount is held within ``[0, base]`` so a total can
never go negative, whatever an admin configures.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from storefront.domain.model.product_size import ProductSize
from storefront.domain.model.store_settings import DiscountType, StoreSettings
from storefront.domain.model.value_objects import FulfillmentMethod, OrderTotals


@dataclass(frozen=True)
class PricedLine:
    size: ProductSize | None
    quantity: int


def _unit_price(size: ProductSize | None) -> int:
    if size is None or size.price_cents is None:
        return 0
    return size.price_cents


def _percent_of(base: int, percent: int) -> int:
    amount = Decimal(base) * Decimal(percent) / Decimal(100)
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def pickup_discount(base: int, settings: StoreSettings | None) -> int:
    if settings is None or not settings.pickup_discount_enabled:
        return 0
    value = settings.pickup_discount_value or 0
    if settings.pickup_discount_type is DiscountType.PERCENT:
        discount = _percent_of(base, value)
    else:
        discount = value
    return max(0, min(discount, base))


def compute_totals(
    lines: Iterable[PricedLine],
    settings: StoreSettings | None,
    fulfillment_method: FulfillmentMethod,
) -> OrderTotals:
    base = sum(_unit_price(line.size) * line.quantity for line in lines)

    delivery_fee = 0
    if fulfillment_method is FulfillmentMethod.DELIVERY and settings is not None:
        delivery_fee = max(0, settings.delivery_fee_cents or 0)

    discount = 0
    if fulfillment_method is FulfillmentMethod.PICKUP:
        discount = pickup_discount(base, settings)

    return OrderTotals(base=base, pickup_discount=discount, delivery_fee=delivery_fee)
