from __future__ import annotations

import math
from decimal import Decimal

import pytest
from returns.result import Failure, Success

from builders import cart_item
from cart_pricing.core.domain.model.errors import InputValidationError
from cart_pricing.core.domain.model.pricing import (
    CartLineItem,
    CustomerProfile,
    PricingInput,
    ShippingMethod,
)
from cart_pricing.core.domain.service.pricing_engine import calculate
from cart_pricing.core.domain.service.validation import (
    parse_pricing_input,
    validate_items,
    validate_method,
    validate_user,
)


def _failure(result) -> InputValidationError:
    assert isinstance(result, Failure)
    err = result.failure()
    assert isinstance(err, InputValidationError)
    return err


def test_valid_input_is_returned_unchanged() -> None:
    items = [cart_item(), cart_item(sku="SKU-2", quantity=3)]
    result = parse_pricing_input(items, CustomerProfile(3), ShippingMethod.EXPRESS)

    assert result == Success(
        PricingInput(tuple(items), CustomerProfile(3), ShippingMethod.EXPRESS)
    )


def test_empty_cart_is_valid() -> None:
    result = validate_items([])
    assert result == Success(())


def test_mapping_items_accept_wire_and_python_names() -> None:
    raw = [
        {"sku": "A", "name": "a", "unitPrice": 100, "quantity": 2, "weightKg": 0.5},
        {"sku": "B", "name": "b", "unit_price": 200, "quantity": 1, "weight_kg": 1},
    ]
    parsed = validate_items(raw).unwrap()

    assert parsed == (
        CartLineItem("A", "a", 100, 2, 0.5),
        CartLineItem("B", "b", 200, 1, 1),
    )


def test_missing_mapping_key_is_reported() -> None:
    err = _failure(validate_items([{"sku": "A", "name": "a", "quantity": 1, "weightKg": 0}]))
    assert err.field == "items[0].unitPrice"
    assert err.constraint == "is required"


@pytest.mark.parametrize(
    "item, field",
    [
        (cart_item(sku=""), "items[0].sku"),
        (cart_item(sku="   "), "items[0].sku"),
        (cart_item(unit_price=-1), "items[0].unitPrice"),
        (cart_item(unit_price=10.5), "items[0].unitPrice"),  # type: ignore[arg-type]
        (cart_item(unit_price=True), "items[0].unitPrice"),
        (cart_item(quantity=0), "items[0].quantity"),
        (cart_item(quantity=-2), "items[0].quantity"),
        (cart_item(quantity=1.5), "items[0].quantity"),  # type: ignore[arg-type]
        (cart_item(weight_kg=-0.1), "items[0].weightKg"),
        (cart_item(weight_kg=math.nan), "items[0].weightKg"),
        (cart_item(weight_kg=math.inf), "items[0].weightKg"),
        (cart_item(weight_kg="1"), "items[0].weightKg"),  # type: ignore[arg-type]
        (cart_item(name=None), "items[0].name"),  # type: ignore[arg-type]
    ],
)
def test_malformed_line_item_is_rejected(item: CartLineItem, field: str) -> None:
    err = _failure(validate_items([item]))
    assert err.field == field


def test_first_bad_line_is_reported_with_its_index() -> None:
    err = _failure(validate_items([cart_item(), cart_item(), cart_item(quantity=0)]))
    assert err.field == "items[2].quantity"
    assert err.constraint == "must be > 0"


def test_zero_price_and_zero_weight_are_allowed() -> None:
    result = validate_items([cart_item(unit_price=0, weight_kg=0)])
    assert isinstance(result, Success)


@pytest.mark.parametrize("items", ["abc", {"sku": "A"}, None, 42])
def test_items_must_be_a_list(items) -> None:
    err = _failure(validate_items(items))
    assert err.field == "items"


def test_non_item_entry_is_rejected() -> None:
    err = _failure(validate_items([42]))
    assert err.field == "items[0]"


@pytest.mark.parametrize("tenure", [0, 2, 2.5, Decimal("10"), 10**400])
def test_non_negative_tenure_is_accepted(tenure) -> None:
    assert validate_user(CustomerProfile(tenure)) == Success(CustomerProfile(tenure))


@pytest.mark.parametrize("tenure", [-1, -0.01, math.nan, "3", None, False])
def test_bad_tenure_is_rejected(tenure) -> None:
    err = _failure(validate_user(CustomerProfile(tenure)))
    assert err.field == "user.tenureYears"


def test_user_mapping_is_accepted() -> None:
    assert validate_user({"tenureYears": 3}) == Success(CustomerProfile(3))


def test_user_must_be_a_profile() -> None:
    err = _failure(validate_user(3))
    assert err.field == "user"


@pytest.mark.parametrize(
    "method, expected",
    [
        (ShippingMethod.EXPRESS, ShippingMethod.EXPRESS),
        ("STANDARD", ShippingMethod.STANDARD),
        ("EXPEDITED", ShippingMethod.EXPEDITED),
    ],
)
def test_known_methods_are_accepted(method, expected: ShippingMethod) -> None:
    assert validate_method(method) == Success(expected)


@pytest.mark.parametrize("method", ["standard", "OVERNIGHT", "", None, 1])
def test_unknown_method_is_rejected(method) -> None:
    err = _failure(validate_method(method))
    assert err.field == "method"
    assert "STANDARD, EXPEDITED, EXPRESS" in err.constraint


def test_calculate_raises_before_any_arithmetic() -> None:
    with pytest.raises(InputValidationError) as exc_info:
        calculate([cart_item(unit_price=-5)], CustomerProfile(0))

    assert exc_info.value.field == "items[0].unitPrice"
    assert exc_info.value.constraint == "must be >= 0"
    assert "items[0].unitPrice" in str(exc_info.value)


def test_calculate_does_not_mutate_inputs() -> None:
    items = [{"sku": "A", "name": "a", "unitPrice": 100, "quantity": 3, "weightKg": 1.0}]
    snapshot = [dict(it) for it in items]

    calculate(items, {"tenureYears": 5}, "EXPEDITED")

    assert items == snapshot
