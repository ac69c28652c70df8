from __future__ import annotations

from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_HALF_UP,
    Context,
    Decimal,
)

CENT = Decimal("1")

# Exact arithmetic regardless of the calling thread's decimal context; only
# addition, multiplication and quantize run under it.
PRICING_CONTEXT = Context(
    prec=MAX_PREC, rounding=ROUND_HALF_UP, Emax=MAX_EMAX, Emin=MIN_EMIN
)


def round_cents(value: Decimal) -> int:
    """Round to a whole cent, half away from zero."""
    return int(value.quantize(CENT, rounding=ROUND_HALF_UP, context=PRICING_CONTEXT))


def apply_rate(amount: int, rate: Decimal) -> int:
    return round_cents(PRICING_CONTEXT.multiply(Decimal(amount), rate))


def to_decimal(value: int | float | Decimal) -> Decimal:
    # str() keeps the shortest repr of a float, so 0.1 stays 0.1
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
