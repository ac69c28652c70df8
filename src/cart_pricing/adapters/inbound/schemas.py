from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cart_pricing.core.domain.model.errors import InputValidationError
from cart_pricing.core.domain.model.pricing import (
    CartLineItem,
    CustomerProfile,
    PricingResult,
    ShippingMethod,
)
from cart_pricing.core.ports.inbound.calculate_pricing import CalculatePricingCommand

# ---- request DTOs ----------------------------------------------------------
# Wire types only; value ranges are enforced by the engine so that range errors
# carry the same field-level detail whatever the entry point.


class CartLineItemIn(BaseModel):
    sku: str = Field(examples=["SKU-1"])
    name: str = Field(examples=["Widget"])
    unit_price: int = Field(
        strict=True,
        validation_alias=AliasChoices("unitPrice", "price", "unit_price"),
        examples=[10000],
    )
    quantity: int = Field(strict=True, examples=[1])
    weight_kg: float = Field(
        strict=True,
        validation_alias=AliasChoices("weightKg", "weightInKg", "weight_kg"),
        examples=[1.0],
    )


class CustomerProfileIn(BaseModel):
    tenure_years: float = Field(
        0,
        strict=True,
        validation_alias=AliasChoices("tenureYears", "tenure_years"),
        examples=[3],
    )


class CalculatePricingRequest(BaseModel):
    items: list[CartLineItemIn]
    user: CustomerProfileIn = Field(default_factory=CustomerProfileIn)
    method: ShippingMethod = ShippingMethod.STANDARD


# ---- response DTOs ---------------------------------------------------------


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LineItemOut(_CamelModel):
    sku: str
    name: str
    unit_price: int
    quantity: int
    line_original_total: int
    bulk_discount: int
    line_total_after_bulk: int


class ShipmentOut(_CamelModel):
    method: ShippingMethod
    base_shipping: int
    weight_surcharge: int
    expedited_surcharge: int
    total_shipping: int
    is_free_shipping: bool


class PricingResultResponse(_CamelModel):
    original_total: int
    volume_discount_total: int
    subtotal_after_bulk: int
    vip_discount: int
    total_discount: int
    is_capped: bool
    final_total: int
    line_items: list[LineItemOut]
    shipment: ShipmentOut
    grand_total: int


class ErrorResponse(BaseModel):
    type: str
    message: str
    details: list[dict[str, Any]] | None = None


# ---- mapping helpers -------------------------------------------------------


def to_command(req: CalculatePricingRequest) -> CalculatePricingCommand:
    return CalculatePricingCommand(
        items=tuple(
            CartLineItem(
                sku=ln.sku,
                name=ln.name,
                unit_price=ln.unit_price,
                quantity=ln.quantity,
                weight_kg=ln.weight_kg,
            )
            for ln in req.items
        ),
        user=CustomerProfile(tenure_years=req.user.tenure_years),
        method=req.method,
    )


def to_response(result: PricingResult) -> PricingResultResponse:
    s = result.shipment
    return PricingResultResponse(
        original_total=result.original_total,
        volume_discount_total=result.volume_discount_total,
        subtotal_after_bulk=result.subtotal_after_bulk,
        vip_discount=result.vip_discount,
        total_discount=result.total_discount,
        is_capped=result.is_capped,
        final_total=result.final_total,
        line_items=[
            LineItemOut(
                sku=li.sku,
                name=li.name,
                unit_price=li.unit_price,
                quantity=li.quantity,
                line_original_total=li.line_original_total,
                bulk_discount=li.bulk_discount,
                line_total_after_bulk=li.line_total_after_bulk,
            )
            for li in result.line_items
        ],
        shipment=ShipmentOut(
            method=s.method,
            base_shipping=s.base_shipping,
            weight_surcharge=s.weight_surcharge,
            expedited_surcharge=s.expedited_surcharge,
            total_shipping=s.total_shipping,
            is_free_shipping=s.is_free_shipping,
        ),
        grand_total=result.grand_total,
    )


def to_error_response(err: Exception) -> ErrorResponse:
    if isinstance(err, InputValidationError):
        return ErrorResponse(
            type=type(err).__name__,
            message=str(err),
            details=[{"field": err.field, "constraint": err.constraint}],
        )
    return ErrorResponse(type=type(err).__name__, message=str(err))
