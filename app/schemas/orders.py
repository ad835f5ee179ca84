from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from app.schemas.addons import AddonGroup, SelectedAddon
from app.schemas.delivery import DeliveryZone
from app.schemas.vouchers import Voucher


class OrderType(str, Enum):
    DELIVERY = "delivery"
    PICKUP = "pickup"
    COLLECTION = "collection"
    ADVANCE = "advance"


class FulfillmentType(str, Enum):
    DELIVERY = "delivery"
    COLLECTION = "collection"


class MenuItemRef(BaseModel):
    id: str
    name: str
    price: Decimal = Field(..., ge=0)
    # When present, selected addons are re-validated and re-priced against these.
    addon_groups: list[AddonGroup] = Field(default_factory=list)


class OrderItemIn(BaseModel):
    menu_item: MenuItemRef
    quantity: int = Field(..., ge=1)
    selected_addons: list[SelectedAddon] = Field(default_factory=list)
    special_instructions: Optional[str] = None


class OrderQuoteRequest(BaseModel):
    items: list[OrderItemIn] = Field(..., min_length=1)
    order_type: OrderType = OrderType.DELIVERY
    advance_fulfillment: FulfillmentType = FulfillmentType.DELIVERY
    postcode: Optional[str] = None
    delivery_zones: list[DeliveryZone] = Field(default_factory=list)
    voucher_code: Optional[str] = None
    voucher: Optional[Voucher] = None
    settings: dict[str, Any] = Field(default_factory=dict)


class QuoteLine(BaseModel):
    menu_item_id: str
    name: str
    quantity: int
    unit_price: Decimal
    addon_total: Decimal
    line_total: Decimal
    addons_display: str = ""
    special_instructions: Optional[str] = None
    errors: list[str] = Field(default_factory=list)


class OrderQuote(BaseModel):
    lines: list[QuoteLine]
    subtotal: Decimal
    delivery_fee: Decimal
    discount: Decimal
    total: Decimal
    voucher_code: Optional[str] = None
    delivery_time: Optional[int] = None
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    display: dict[str, str] = Field(default_factory=dict)


class OrderSummaryRequest(BaseModel):
    """A stored order as the admin pages receive it: loosely typed."""

    order: dict[str, Any]
    currency: Optional[str] = None


class SummaryLine(BaseModel):
    name: str
    quantity: int
    addons: list[str] = Field(default_factory=list)
    line_total: str


class OrderSummary(BaseModel):
    order_number: Optional[str] = None
    lines: list[SummaryLine]
    subtotal: str
    delivery_fee: str
    discount: Optional[str] = None
    discount_label: Optional[str] = None
    total: str
