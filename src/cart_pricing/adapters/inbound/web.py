from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from returns.result import Success

from cart_pricing.adapters.inbound.schemas import (
    CalculatePricingRequest,
    ErrorResponse,
    PricingResultResponse,
    to_command,
    to_error_response,
    to_response,
)
from cart_pricing.core.domain.model.errors import (
    InputValidationError,
    PricingError,
    TraceError,
)
from cart_pricing.core.ports.inbound.calculate_pricing import CalculatePricingUseCase

logger = logging.getLogger(__name__)


def _map_error_to_http(err: PricingError) -> tuple[int, ErrorResponse]:
    if isinstance(err, InputValidationError):
        return 400, to_error_response(err)

    if isinstance(err, TraceError):
        return 503, to_error_response(err)

    return 500, to_error_response(err)


def create_app(calculate_pricing_uc: CalculatePricingUseCase) -> FastAPI:
    app = FastAPI(title="cart_pricing")

    # --- exception handlers -------------------------------------------------

    @app.exception_handler(PricingError)
    async def handle_domain_error(_: Request, exc: PricingError) -> JSONResponse:
        status, body = _map_error_to_http(exc)
        if status >= 500:
            logger.error("pricing failed: %s", exc)
        return JSONResponse(status_code=status, content=body.model_dump())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        body = ErrorResponse(
            type="RequestValidationError",
            message="invalid request",
            details=jsonable_encoder(exc.errors()),
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("unexpected error while pricing", exc_info=exc)
        body = ErrorResponse(type=type(exc).__name__, message="internal server error")
        return JSONResponse(status_code=500, content=body.model_dump())

    # --- routes -------------------------------------------------------------

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post(
        "/pricing/calculate",
        response_model=PricingResultResponse,
        responses={
            400: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
            503: {"model": ErrorResponse},
        },
    )
    def calculate_pricing(req: CalculatePricingRequest) -> Any:
        result = calculate_pricing_uc.calculate_pricing(to_command(req))

        if isinstance(result, Success):
            return to_response(result.unwrap())

        raise result.failure()

    return app
