from __future__ import annotations

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.core import config
from app.core.money import currency_symbol
from app.schemas.delivery import DeliveryQuote, DeliveryZone
from app.services.delivery_zones import calculate_delivery_fee

router = APIRouter(prefix="/api/{tenant_slug}/delivery", tags=["delivery"])


class DeliveryQuoteIn(BaseModel):
    postcode: str
    order_value: Decimal = Field(Decimal("0"), ge=0)
    zones: list[DeliveryZone] = Field(default_factory=list)
    currency: Optional[str] = None


@router.post("/quote", response_model=DeliveryQuote)
def delivery_quote(tenant_slug: str, payload: DeliveryQuoteIn):
    return calculate_delivery_fee(
        payload.zones,
        payload.postcode,
        payload.order_value,
        default_fee=config.DEFAULT_DELIVERY_FEE,
        currency_symbol=currency_symbol(payload.currency or config.DEFAULT_CURRENCY),
    )
