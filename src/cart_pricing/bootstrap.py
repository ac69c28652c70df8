from __future__ import annotations

from dataclasses import dataclass

from fastapi import FastAPI

from cart_pricing.adapters.inbound.web import create_app
from cart_pricing.adapters.outbound.logging_tracer import LoggingPricingTracer
from cart_pricing.core.domain.model.policy import DEFAULT_POLICY, PricingPolicy
from cart_pricing.core.domain.service.calculate_pricing_service import (
    CalculatePricingDeps,
    CalculatePricingService,
)
from cart_pricing.core.ports.outbound.trace import PricingTracer
from cart_pricing.settings import Settings


@dataclass(frozen=True)
class UseCases:
    calculate_pricing: CalculatePricingService


def build_usecases(
    policy: PricingPolicy = DEFAULT_POLICY, tracer: PricingTracer | None = None
) -> UseCases:
    calculate_pricing = CalculatePricingService(
        CalculatePricingDeps(policy=policy, tracer=tracer)
    )
    return UseCases(calculate_pricing=calculate_pricing)


def build_from_settings(settings: Settings) -> UseCases:
    tracer = LoggingPricingTracer() if settings.trace_enabled else None
    return build_usecases(tracer=tracer)


def build_app(settings: Settings | None = None) -> FastAPI:
    usecases = build_from_settings(settings or Settings.from_env())
    return create_app(usecases.calculate_pricing)


def create_asgi_app() -> FastAPI:
    return build_app()
