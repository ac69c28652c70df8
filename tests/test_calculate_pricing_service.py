from __future__ import annotations

from decimal import Decimal

from returns.result import Failure, Success

from builders import cart_item
from cart_pricing.adapters.outbound.in_memory_tracer import InMemoryPricingTracer
from cart_pricing.bootstrap import build_usecases
from cart_pricing.core.domain.model.errors import InputValidationError, TraceError
from cart_pricing.core.domain.model.policy import PricingPolicy
from cart_pricing.core.domain.model.pricing import CustomerProfile, ShippingMethod
from cart_pricing.core.domain.service.calculate_pricing_service import (
    CalculatePricingDeps,
    CalculatePricingService,
)
from cart_pricing.core.domain.service.pricing_engine import calculate
from cart_pricing.core.ports.inbound.calculate_pricing import CalculatePricingCommand


def test_success_matches_engine() -> None:
    svc = CalculatePricingService(CalculatePricingDeps())
    items = [cart_item(unit_price=10000, quantity=5)]

    result = svc.calculate_pricing(
        CalculatePricingCommand(items=items, user=CustomerProfile(3), method="EXPEDITED")
    )

    assert result == Success(calculate(items, CustomerProfile(3), ShippingMethod.EXPEDITED))


def test_command_defaults_to_new_customer_and_standard() -> None:
    svc = CalculatePricingService(CalculatePricingDeps())

    result = svc.calculate_pricing(CalculatePricingCommand(items=[cart_item(unit_price=10000)]))

    priced = result.unwrap()
    assert priced.vip_discount == 0
    assert priced.shipment.method is ShippingMethod.STANDARD


def test_validation_failure_is_returned_not_raised() -> None:
    tracer = InMemoryPricingTracer()
    svc = CalculatePricingService(CalculatePricingDeps(tracer=tracer))

    result = svc.calculate_pricing(
        CalculatePricingCommand(items=[cart_item(quantity=0)], method="EXPRESS")
    )

    assert isinstance(result, Failure)
    err = result.failure()
    assert isinstance(err, InputValidationError)
    assert err.field == "items[0].quantity"
    assert tracer.interactions == []


def test_tracer_receives_input_and_output() -> None:
    tracer = InMemoryPricingTracer()
    svc = CalculatePricingService(CalculatePricingDeps(tracer=tracer))

    result = svc.calculate_pricing(
        CalculatePricingCommand(items=[cart_item()], user={"tenureYears": 4})
    )

    assert len(tracer.interactions) == 1
    event = tracer.interactions[0]
    assert event.result == result.unwrap()
    assert event.input.user == CustomerProfile(4)
    assert event.input.method is ShippingMethod.STANDARD


def test_tracer_failure_propagates() -> None:
    svc = CalculatePricingService(CalculatePricingDeps(tracer=InMemoryPricingTracer(fail=True)))

    result = svc.calculate_pricing(CalculatePricingCommand(items=[cart_item()]))

    assert isinstance(result, Failure)
    assert isinstance(result.failure(), TraceError)


def test_injected_policy_is_used() -> None:
    usecases = build_usecases(policy=PricingPolicy(express_shipping=1000))

    result = usecases.calculate_pricing.calculate_pricing(
        CalculatePricingCommand(items=[cart_item()], method=ShippingMethod.EXPRESS)
    )

    assert result.unwrap().shipment.total_shipping == 1000


def test_custom_vip_rate() -> None:
    usecases = build_usecases(policy=PricingPolicy(vip_rate=Decimal("0.10")))

    result = usecases.calculate_pricing.calculate_pricing(
        CalculatePricingCommand(items=[cart_item(unit_price=10000)], user=CustomerProfile(3))
    )

    assert result.unwrap().vip_discount == 1000
