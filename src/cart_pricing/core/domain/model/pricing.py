from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class ShippingMethod(str, Enum):
    STANDARD = "STANDARD"
    EXPEDITED = "EXPEDITED"
    EXPRESS = "EXPRESS"


@dataclass(frozen=True)
class CartLineItem:
    sku: str
    name: str
    unit_price: int  # cents
    quantity: int
    weight_kg: float


@dataclass(frozen=True)
class CustomerProfile:
    tenure_years: float = 0


@dataclass(frozen=True)
class PricingInput:
    items: Tuple[CartLineItem, ...]
    user: CustomerProfile
    method: ShippingMethod


@dataclass(frozen=True)
class LineItemResult:
    sku: str
    name: str
    unit_price: int
    quantity: int
    line_original_total: int
    bulk_discount: int
    line_total_after_bulk: int


@dataclass(frozen=True)
class ShipmentResult:
    method: ShippingMethod
    base_shipping: int
    weight_surcharge: int
    expedited_surcharge: int
    total_shipping: int
    is_free_shipping: bool


@dataclass(frozen=True)
class PricingResult:
    original_total: int
    volume_discount_total: int
    subtotal_after_bulk: int
    vip_discount: int
    total_discount: int
    is_capped: bool
    final_total: int
    line_items: Tuple[LineItemResult, ...]
    shipment: ShipmentResult
    grand_total: int
