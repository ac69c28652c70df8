from __future__ import annotations

import logging

import pytest
from returns.result import Success

from builders import cart_item
from cart_pricing.adapters.outbound.in_memory_tracer import InMemoryPricingTracer
from cart_pricing.adapters.outbound.logging_tracer import LoggingPricingTracer
from cart_pricing.core.domain.model.pricing import (
    CustomerProfile,
    PricingInput,
    ShippingMethod,
)
from cart_pricing.core.domain.service.pricing_engine import price
from cart_pricing.core.ports.outbound.trace import PricingCalculated


def _event(unit_price: int = 1000) -> PricingCalculated:
    pricing_input = PricingInput(
        items=(cart_item(unit_price=unit_price),),
        user=CustomerProfile(0),
        method=ShippingMethod.STANDARD,
    )
    return PricingCalculated(input=pricing_input, result=price(pricing_input))


def test_in_memory_tracer_keeps_events_in_order() -> None:
    tracer = InMemoryPricingTracer()
    first, second = _event(100), _event(200)

    assert tracer.record(first) == Success(None)
    assert tracer.record(second) == Success(None)

    assert tracer.interactions == [first, second]


def test_in_memory_tracer_keeps_only_most_recent() -> None:
    tracer = InMemoryPricingTracer(max_interactions=2)
    events = [_event(p) for p in (100, 200, 300)]

    for e in events:
        tracer.record(e)

    assert tracer.interactions == events[1:]


def test_in_memory_tracer_clear() -> None:
    tracer = InMemoryPricingTracer()
    tracer.record(_event())
    tracer.clear()
    assert tracer.interactions == []


def test_logging_tracer_writes_one_line(caplog: pytest.LogCaptureFixture) -> None:
    tracer = LoggingPricingTracer()

    with caplog.at_level(logging.INFO, logger="cart_pricing.adapters.outbound.logging_tracer"):
        result = tracer.record(_event(1000))

    assert result == Success(None)
    assert len(caplog.records) == 1
    message = caplog.records[0].getMessage()
    assert "pricing_calculated" in message
    assert "method=STANDARD" in message
    assert "grand_total=1900" in message
