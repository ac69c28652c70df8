from __future__ import annotations

from decimal import Decimal, localcontext
from typing import Sequence

from cart_pricing.core.domain.model.money import (
    PRICING_CONTEXT,
    apply_rate,
    round_cents,
    to_decimal,
)
from cart_pricing.core.domain.model.policy import DEFAULT_POLICY, PricingPolicy
from cart_pricing.core.domain.model.pricing import (
    CartLineItem,
    ShipmentResult,
    ShippingMethod,
)


def total_weight_kg(items: Sequence[CartLineItem]) -> Decimal:
    with localcontext(PRICING_CONTEXT):
        return sum(
            (to_decimal(it.weight_kg) * it.quantity for it in items), Decimal(0)
        )


def weight_surcharge(
    items: Sequence[CartLineItem], policy: PricingPolicy = DEFAULT_POLICY
) -> int:
    return round_cents(
        PRICING_CONTEXT.multiply(total_weight_kg(items), policy.weight_rate_per_kg)
    )


def calculate_shipment(
    items: Sequence[CartLineItem],
    original_total: int,
    final_total: int,
    method: ShippingMethod,
    policy: PricingPolicy = DEFAULT_POLICY,
) -> ShipmentResult:
    """
    Classify the cart into one of the shipment outcomes.

    EXPRESS is a flat fee that ignores every other rule. STANDARD and
    EXPEDITED ship free once the discounted total is strictly above the
    threshold; the weight surcharge is still reported on that path so callers
    can show what shipping would have cost. The expedited surcharge is the only
    rate computed on the pre-discount total.
    """
    match method:
        case ShippingMethod.EXPRESS:
            return ShipmentResult(
                method=method,
                base_shipping=0,
                weight_surcharge=0,
                expedited_surcharge=0,
                total_shipping=policy.express_shipping,
                is_free_shipping=False,
            )
        case ShippingMethod.STANDARD | ShippingMethod.EXPEDITED:
            surcharge = weight_surcharge(items, policy)
            if final_total > policy.free_shipping_threshold:
                return ShipmentResult(
                    method=method,
                    base_shipping=policy.base_shipping,
                    weight_surcharge=surcharge,
                    expedited_surcharge=0,
                    total_shipping=0,
                    is_free_shipping=True,
                )
            expedited = 0
            if method == ShippingMethod.EXPEDITED:
                expedited = apply_rate(original_total, policy.expedited_rate)
            return ShipmentResult(
                method=method,
                base_shipping=policy.base_shipping,
                weight_surcharge=surcharge,
                expedited_surcharge=expedited,
                total_shipping=policy.base_shipping + surcharge + expedited,
                is_free_shipping=False,
            )
        case _:
            raise ValueError(f"unknown shipping method: {method!r}")
