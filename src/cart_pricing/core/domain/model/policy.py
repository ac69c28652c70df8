from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal


@dataclass(frozen=True)
class PricingPolicy:
    """
    Every business constant of the engine in one immutable value.

    Rates are fractions (``Decimal("0.15")`` is 15%); prices and thresholds
    are integer cents.
    """

    bulk_threshold_qty: int = 3
    bulk_rate: Decimal = Decimal("0.15")
    vip_tenure_years: int = 2
    vip_rate: Decimal = Decimal("0.05")
    max_discount_rate: Decimal = Decimal("0.30")
    free_shipping_threshold: int = 10000
    base_shipping: int = 700
    express_shipping: int = 2500
    weight_rate_per_kg: int = 200
    expedited_rate: Decimal = Decimal("0.15")

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name.endswith("_rate"):
                if not isinstance(value, Decimal):
                    raise ValueError(f"{f.name} must be a Decimal")
                if not Decimal(0) <= value <= Decimal(1):
                    raise ValueError(f"{f.name} must be between 0 and 1")
            else:
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValueError(f"{f.name} must be an integer")
                if value < 0:
                    raise ValueError(f"{f.name} must be >= 0")


DEFAULT_POLICY = PricingPolicy()
