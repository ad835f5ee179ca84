from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.core.config import DEFAULT_CURRENCY

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class ThrottlingDay(BaseModel):
    """Stored capacity configuration for one weekday. Nothing enforces it."""

    model_config = ConfigDict(extra="forbid")

    interval: int = Field(15, ge=1)
    orders_per_interval: int = Field(10, ge=1)
    enabled: bool = False


class OrderThrottling(BaseModel):
    model_config = ConfigDict(extra="forbid")

    monday: ThrottlingDay = Field(default_factory=ThrottlingDay)
    tuesday: ThrottlingDay = Field(default_factory=ThrottlingDay)
    wednesday: ThrottlingDay = Field(default_factory=ThrottlingDay)
    thursday: ThrottlingDay = Field(default_factory=ThrottlingDay)
    friday: ThrottlingDay = Field(default_factory=ThrottlingDay)
    saturday: ThrottlingDay = Field(default_factory=ThrottlingDay)
    sunday: ThrottlingDay = Field(default_factory=ThrottlingDay)


class OrderTypeSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    delivery_enabled: bool = True
    advance_order_enabled: bool = True
    collection_enabled: bool = True


class RestaurantSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = "My Restaurant"
    currency: str = DEFAULT_CURRENCY
    order_prefix: str = "ORD"
    advance_order_prefix: str = "ADV"
    # Legacy value from when orders were taxed; totals never read it.
    tax_rate: Decimal = Decimal("0.10")
    order_type_settings: OrderTypeSettings = Field(default_factory=OrderTypeSettings)
    order_throttling: OrderThrottling = Field(default_factory=OrderThrottling)
