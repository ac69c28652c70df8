from __future__ import annotations

from dataclasses import dataclass, field

from returns.result import Failure, Result, Success

from cart_pricing.core.domain.model.errors import PricingError, TraceError
from cart_pricing.core.ports.outbound.trace import PricingCalculated, PricingTracer


@dataclass
class InMemoryPricingTracer(PricingTracer):
    max_interactions: int | None = None  # keeps the most recent N
    fail: bool = False
    interactions: list[PricingCalculated] = field(default_factory=list)

    def record(self, event: PricingCalculated) -> Result[None, PricingError]:
        if self.fail:
            return Failure(TraceError(message="tracer is down"))
        self.interactions.append(event)
        if self.max_interactions is not None:
            overflow = len(self.interactions) - self.max_interactions
            if overflow > 0:
                del self.interactions[:overflow]
        return Success(None)

    def clear(self) -> None:
        self.interactions.clear()
