from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


class AddonGroupType(str, Enum):
    SINGLE = "single"
    MULTIPLE = "multiple"


class AddonCategory(str, Enum):
    SIZE = "size"
    EXTRA = "extra"
    SAUCE = "sauce"
    SIDES = "sides"
    DRINK = "drink"
    DESSERT = "dessert"


class QuantityPricing(BaseModel):
    """First `base_quantity` units cost the option price, the rest `additional_price` each."""

    base_quantity: int
    additional_price: Decimal


class AddonOption(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    price: Decimal = Decimal("0")
    available: bool = True
    description: Optional[str] = None
    quantity_pricing: Optional[QuantityPricing] = None


class AddonGroup(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    type: AddonGroupType = AddonGroupType.MULTIPLE
    category: AddonCategory = AddonCategory.EXTRA
    required: bool = False
    min_selections: int = 0
    max_selections: int = 1
    description: Optional[str] = None
    display_order: int = 0
    active: bool = True
    options: list[AddonOption] = Field(default_factory=list)

    def find_option(self, option_id: str) -> Optional[AddonOption]:
        for option in self.options:
            if option.id == option_id:
                return option
        return None


class OptionSelection(BaseModel):
    quantity: int = Field(..., ge=1)
    custom_note: Optional[str] = None


# {group_id: {option_id: OptionSelection}}
SelectionSnapshot = dict[str, dict[str, OptionSelection]]


class SelectedAddonOption(BaseModel):
    option_id: str
    quantity: int = Field(..., ge=1)
    custom_note: Optional[str] = None
    total_price: Decimal = Field(Decimal("0"), ge=0)


class SelectedAddon(BaseModel):
    group_id: str
    group_name: str
    group_type: AddonGroupType
    options: list[SelectedAddonOption] = Field(default_factory=list)

    @computed_field
    @property
    def total_price(self) -> Decimal:
        return sum((option.total_price for option in self.options), Decimal("0"))


class AddonValidationResult(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)


class BreakdownOption(BaseModel):
    option_id: str
    option_name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class BreakdownGroup(BaseModel):
    group_id: str
    group_name: str
    options: list[BreakdownOption] = Field(default_factory=list)
    group_total: Decimal = Decimal("0")


class AddonCalculationResult(BaseModel):
    subtotal: Decimal = Decimal("0")
    discounts: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    breakdown: list[BreakdownGroup] = Field(default_factory=list)


class AddonPriceRange(BaseModel):
    has_required_addons: bool
    min_addon_price: Decimal
    max_addon_price: Decimal
