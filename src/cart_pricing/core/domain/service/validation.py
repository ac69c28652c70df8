from __future__ import annotations

import math
from decimal import Decimal
from functools import partial
from typing import Any, Mapping, Sequence

from returns.result import Failure, Result, Success

from cart_pricing.core.domain.model.errors import InputValidationError, PricingError
from cart_pricing.core.domain.model.pricing import (
    CartLineItem,
    CustomerProfile,
    PricingInput,
    ShippingMethod,
)

# attribute -> accepted keys; the last one is the wire name used in errors
_ITEM_KEYS: dict[str, tuple[str, ...]] = {
    "sku": ("sku",),
    "name": ("name",),
    "unit_price": ("unit_price", "unitPrice"),
    "quantity": ("quantity",),
    "weight_kg": ("weight_kg", "weightKg"),
}
_USER_KEYS: dict[str, tuple[str, ...]] = {
    "tenure_years": ("tenure_years", "tenureYears"),
}


def _invalid(field: str, constraint: str) -> Failure[InputValidationError]:
    return Failure(
        InputValidationError(
            message=f"{field} {constraint}", field=field, constraint=constraint
        )
    )


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_finite_real(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    return False


def _pick(raw: Mapping[str, Any], names: tuple[str, ...]) -> tuple[bool, Any]:
    for name in names:
        if name in raw:
            return True, raw[name]
    return False, None


def _from_mapping(
    raw: Mapping[str, Any], keys: dict[str, tuple[str, ...]], path: str
) -> Result[dict[str, Any], PricingError]:
    values: dict[str, Any] = {}
    for attr, names in keys.items():
        found, value = _pick(raw, names)
        if not found:
            return _invalid(f"{path}.{names[-1]}", "is required")
        values[attr] = value
    return Success(values)


# ---- line items ------------------------------------------------------------


def _coerce_item(index: int, raw: Any) -> Result[CartLineItem, PricingError]:
    if isinstance(raw, CartLineItem):
        return Success(raw)
    if isinstance(raw, Mapping):
        return _from_mapping(raw, _ITEM_KEYS, f"items[{index}]").map(
            lambda values: CartLineItem(**values)
        )
    return _invalid(f"items[{index}]", "must be a cart line item")


def _validate_sku(index: int, item: CartLineItem) -> Result[CartLineItem, PricingError]:
    if not isinstance(item.sku, str) or not item.sku.strip():
        return _invalid(f"items[{index}].sku", "must be a non-empty string")
    return Success(item)


def _validate_name(index: int, item: CartLineItem) -> Result[CartLineItem, PricingError]:
    if not isinstance(item.name, str):
        return _invalid(f"items[{index}].name", "must be a string")
    return Success(item)


def _validate_unit_price(
    index: int, item: CartLineItem
) -> Result[CartLineItem, PricingError]:
    if not _is_integer(item.unit_price):
        return _invalid(f"items[{index}].unitPrice", "must be an integer number of cents")
    if item.unit_price < 0:
        return _invalid(f"items[{index}].unitPrice", "must be >= 0")
    return Success(item)


def _validate_quantity(
    index: int, item: CartLineItem
) -> Result[CartLineItem, PricingError]:
    if not _is_integer(item.quantity):
        return _invalid(f"items[{index}].quantity", "must be an integer")
    if item.quantity <= 0:
        return _invalid(f"items[{index}].quantity", "must be > 0")
    return Success(item)


def _validate_weight(index: int, item: CartLineItem) -> Result[CartLineItem, PricingError]:
    if not _is_finite_real(item.weight_kg):
        return _invalid(f"items[{index}].weightKg", "must be a finite number")
    if item.weight_kg < 0:
        return _invalid(f"items[{index}].weightKg", "must be >= 0")
    return Success(item)


def validate_item(index: int, raw: Any) -> Result[CartLineItem, PricingError]:
    return (
        _coerce_item(index, raw)
        .bind(partial(_validate_sku, index))
        .bind(partial(_validate_name, index))
        .bind(partial(_validate_unit_price, index))
        .bind(partial(_validate_quantity, index))
        .bind(partial(_validate_weight, index))
    )


def validate_items(items: Any) -> Result[tuple[CartLineItem, ...], PricingError]:
    if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Sequence):
        return _invalid("items", "must be a list of cart line items")

    parsed: list[CartLineItem] = []
    for i, raw in enumerate(items):
        result = validate_item(i, raw)
        if isinstance(result, Failure):
            return result
        parsed.append(result.unwrap())
    return Success(tuple(parsed))


# ---- customer & method -----------------------------------------------------


def validate_user(user: Any) -> Result[CustomerProfile, PricingError]:
    if isinstance(user, Mapping):
        coerced = _from_mapping(user, _USER_KEYS, "user").map(
            lambda values: CustomerProfile(**values)
        )
        if isinstance(coerced, Failure):
            return coerced
        user = coerced.unwrap()
    if not isinstance(user, CustomerProfile):
        return _invalid("user", "must be a customer profile")

    if not _is_finite_real(user.tenure_years):
        return _invalid("user.tenureYears", "must be a finite number")
    if user.tenure_years < 0:
        return _invalid("user.tenureYears", "must be >= 0")
    return Success(user)


def validate_method(method: Any) -> Result[ShippingMethod, PricingError]:
    if isinstance(method, ShippingMethod):
        return Success(method)
    if isinstance(method, str):
        try:
            return Success(ShippingMethod(method))
        except ValueError:
            pass
    allowed = ", ".join(m.value for m in ShippingMethod)
    return _invalid("method", f"must be one of: {allowed}")


def parse_pricing_input(
    items: Any, user: Any, method: Any
) -> Result[PricingInput, PricingError]:
    """Parse raw or typed arguments into a ``PricingInput``; first violation wins."""
    return validate_items(items).bind(
        lambda parsed_items: validate_user(user).bind(
            lambda profile: validate_method(method).map(
                lambda shipping: PricingInput(parsed_items, profile, shipping)
            )
        )
    )
