from __future__ import annotations

import json

from returns.result import Success

from cart_pricing.adapters.inbound.schemas import (
    CalculatePricingRequest,
    to_command,
    to_response,
)
from cart_pricing.core.ports.inbound.calculate_pricing import CalculatePricingUseCase


def run_cli(usecase: CalculatePricingUseCase, raw: str) -> int:
    """
    raw: JSON string.
    Example:
      {"items":[{"sku":"SKU-1","name":"Widget","unitPrice":10000,
                 "quantity":1,"weightKg":1.0}],
       "user":{"tenureYears":3},"method":"STANDARD"}
    """
    try:
        req = CalculatePricingRequest.model_validate(json.loads(raw))
    except ValueError as e:
        print(f"invalid_input: {e}")
        return 2

    result = usecase.calculate_pricing(to_command(req))

    if isinstance(result, Success):
        body = to_response(result.unwrap()).model_dump(mode="json", by_alias=True)
        print(json.dumps(body, ensure_ascii=False))
        return 0

    err = result.failure()
    print("[ng]", str(err))
    return 1
