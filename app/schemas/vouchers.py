from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class VoucherType(str, Enum):
    PERCENTAGE = "percentage"
    AMOUNT = "amount"


class Voucher(BaseModel):
    id: Optional[str] = None
    code: str = Field(..., min_length=1)
    type: VoucherType
    value: Decimal = Field(..., ge=0)
    min_order: Decimal = Decimal("0")
    max_discount: Optional[Decimal] = None
    expiry_date: Optional[datetime] = None
    active: bool = True
    usage_limit: Optional[int] = None
    used_count: int = 0


class VoucherCheck(BaseModel):
    valid: bool
    discount: Decimal = Decimal("0")
    error: Optional[str] = None
