from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from returns.result import Result

from cart_pricing.core.domain.model.errors import PricingError
from cart_pricing.core.domain.model.pricing import PricingInput, PricingResult


@dataclass(frozen=True)
class PricingCalculated:
    input: PricingInput
    result: PricingResult


class PricingTracer(Protocol):
    """
    Audit sink for (input, output) pairs.

    The engine never depends on a tracer; the use case calls one only when it
    is wired in.
    """

    def record(self, event: PricingCalculated) -> Result[None, PricingError]: ...
