from __future__ import annotations

import logging
from dataclasses import dataclass

from returns.result import Result, Success

from cart_pricing.core.domain.model.errors import PricingError
from cart_pricing.core.ports.outbound.trace import PricingCalculated, PricingTracer

logger = logging.getLogger(__name__)


@dataclass
class LoggingPricingTracer(PricingTracer):
    level: int = logging.INFO

    def record(self, event: PricingCalculated) -> Result[None, PricingError]:
        result = event.result
        logger.log(
            self.level,
            "[trace] pricing_calculated: lines=%d tenure=%s method=%s "
            "original=%d discount=%d capped=%s shipping=%d grand_total=%d",
            len(event.input.items),
            event.input.user.tenure_years,
            event.input.method.value,
            result.original_total,
            result.total_discount,
            result.is_capped,
            result.shipment.total_shipping,
            result.grand_total,
        )
        return Success(None)
