from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence

from returns.result import Result

from cart_pricing.core.domain.model.errors import PricingError
from cart_pricing.core.domain.model.pricing import (
    CartLineItem,
    CustomerProfile,
    PricingResult,
    ShippingMethod,
)


@dataclass(frozen=True)
class CalculatePricingCommand:
    items: Sequence[CartLineItem | dict[str, Any]]
    user: CustomerProfile | dict[str, Any] = field(default_factory=CustomerProfile)
    method: ShippingMethod | str = ShippingMethod.STANDARD


class CalculatePricingUseCase(Protocol):
    def calculate_pricing(
        self, command: CalculatePricingCommand
    ) -> Result[PricingResult, PricingError]: ...
