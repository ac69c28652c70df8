from __future__ import annotations

import logging
from dataclasses import dataclass

from returns.pipeline import flow
from returns.pointfree import bind, map_
from returns.result import Result, Success

from cart_pricing.core.domain.model.errors import PricingError
from cart_pricing.core.domain.model.policy import DEFAULT_POLICY, PricingPolicy
from cart_pricing.core.domain.model.pricing import PricingInput, PricingResult
from cart_pricing.core.domain.service.pricing_engine import price
from cart_pricing.core.domain.service.validation import parse_pricing_input
from cart_pricing.core.ports.inbound.calculate_pricing import (
    CalculatePricingCommand,
    CalculatePricingUseCase,
)
from cart_pricing.core.ports.outbound.trace import PricingCalculated, PricingTracer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculatePricingDeps:
    policy: PricingPolicy = DEFAULT_POLICY
    tracer: PricingTracer | None = None


@dataclass(frozen=True)
class PricingContext:
    input: PricingInput
    result: PricingResult


@dataclass(frozen=True)
class CalculatePricingService(CalculatePricingUseCase):
    deps: CalculatePricingDeps

    def calculate_pricing(
        self, command: CalculatePricingCommand
    ) -> Result[PricingResult, PricingError]:
        return flow(
            command,
            _parse_command,
            bind(self._price),
            bind(self._trace),
            map_(_to_result),
        )

    def _price(self, pricing_input: PricingInput) -> Result[PricingContext, PricingError]:
        result = price(pricing_input, self.deps.policy)
        logger.debug(
            "priced cart: lines=%d method=%s grand_total=%d capped=%s",
            len(result.line_items),
            result.shipment.method.value,
            result.grand_total,
            result.is_capped,
        )
        return Success(PricingContext(input=pricing_input, result=result))

    def _trace(self, ctx: PricingContext) -> Result[PricingContext, PricingError]:
        if self.deps.tracer is None:
            return Success(ctx)
        return self.deps.tracer.record(PricingCalculated(ctx.input, ctx.result)).map(
            lambda _: ctx
        )


def _parse_command(
    cmd: CalculatePricingCommand,
) -> Result[PricingInput, PricingError]:
    return parse_pricing_input(cmd.items, cmd.user, cmd.method)


def _to_result(ctx: PricingContext) -> PricingResult:
    return ctx.result
