from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from returns.result import Failure

from cart_pricing.core.domain.model.money import apply_rate
from cart_pricing.core.domain.model.policy import DEFAULT_POLICY, PricingPolicy
from cart_pricing.core.domain.model.pricing import (
    CartLineItem,
    CustomerProfile,
    LineItemResult,
    PricingInput,
    PricingResult,
    ShippingMethod,
)
from cart_pricing.core.domain.service.shipping import calculate_shipment
from cart_pricing.core.domain.service.validation import parse_pricing_input


@dataclass(frozen=True)
class Subtotals:
    original_total: int
    volume_discount_total: int
    subtotal_after_bulk: int


@dataclass(frozen=True)
class DiscountSummary:
    vip_discount: int
    total_discount: int
    is_capped: bool
    final_total: int


def calculate(
    items: Sequence[CartLineItem | dict[str, Any]],
    user: CustomerProfile | dict[str, Any],
    method: ShippingMethod | str = ShippingMethod.STANDARD,
    policy: PricingPolicy = DEFAULT_POLICY,
) -> PricingResult:
    """
    Price a cart.

    Raises ``InputValidationError`` before any arithmetic when an argument is
    malformed. Otherwise total: equal inputs always give equal results.
    """
    parsed = parse_pricing_input(items, user, method)
    if isinstance(parsed, Failure):
        raise parsed.failure()
    return price(parsed.unwrap(), policy)


def price(pricing_input: PricingInput, policy: PricingPolicy = DEFAULT_POLICY) -> PricingResult:
    line_items = tuple(price_line(it, policy) for it in pricing_input.items)
    subtotals = aggregate(line_items)
    discounts = apply_loyalty_and_cap(subtotals, pricing_input.user, policy)
    shipment = calculate_shipment(
        pricing_input.items,
        original_total=subtotals.original_total,
        final_total=discounts.final_total,
        method=pricing_input.method,
        policy=policy,
    )
    return PricingResult(
        original_total=subtotals.original_total,
        volume_discount_total=subtotals.volume_discount_total,
        subtotal_after_bulk=subtotals.subtotal_after_bulk,
        vip_discount=discounts.vip_discount,
        total_discount=discounts.total_discount,
        is_capped=discounts.is_capped,
        final_total=discounts.final_total,
        line_items=line_items,
        shipment=shipment,
        grand_total=discounts.final_total + shipment.total_shipping,
    )


# ---- stages ----------------------------------------------------------------


def price_line(item: CartLineItem, policy: PricingPolicy = DEFAULT_POLICY) -> LineItemResult:
    original = item.unit_price * item.quantity
    bulk = 0
    if item.quantity >= policy.bulk_threshold_qty:
        bulk = apply_rate(original, policy.bulk_rate)
    return LineItemResult(
        sku=item.sku,
        name=item.name,
        unit_price=item.unit_price,
        quantity=item.quantity,
        line_original_total=original,
        bulk_discount=bulk,
        line_total_after_bulk=original - bulk,
    )


def aggregate(line_items: Sequence[LineItemResult]) -> Subtotals:
    original = sum(li.line_original_total for li in line_items)
    volume = sum(li.bulk_discount for li in line_items)
    return Subtotals(
        original_total=original,
        volume_discount_total=volume,
        subtotal_after_bulk=original - volume,
    )


def apply_loyalty_and_cap(
    subtotals: Subtotals,
    user: CustomerProfile,
    policy: PricingPolicy = DEFAULT_POLICY,
) -> DiscountSummary:
    # compounds on the post-bulk subtotal; the cap is relative to the original
    vip = 0
    if user.tenure_years > policy.vip_tenure_years:
        vip = apply_rate(subtotals.subtotal_after_bulk, policy.vip_rate)

    total = subtotals.volume_discount_total + vip
    max_discount = apply_rate(subtotals.original_total, policy.max_discount_rate)
    is_capped = total > max_discount
    if is_capped:
        total = max_discount

    return DiscountSummary(
        vip_discount=vip,
        total_discount=total,
        is_capped=is_capped,
        final_total=subtotals.original_total - total,
    )
