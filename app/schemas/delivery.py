from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class DeliveryZone(BaseModel):
    id: Optional[str] = None
    name: str
    type: str = "postcode"
    postcodes: list[str] = Field(default_factory=list)
    delivery_fee: Decimal = Field(Decimal("0"), ge=0)
    min_order: Decimal = Field(Decimal("0"), ge=0)
    delivery_time: Optional[int] = None
    collection_time: Optional[int] = None


class DeliveryQuote(BaseModel):
    available: bool
    fee: Decimal = Decimal("0")
    zone: Optional[DeliveryZone] = None
    delivery_time: int
    error: Optional[str] = None
