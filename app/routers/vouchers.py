from __future__ import annotations

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.schemas.vouchers import Voucher, VoucherCheck
from app.services.vouchers import apply_voucher

router = APIRouter(prefix="/api/{tenant_slug}/vouchers", tags=["vouchers"])


class VoucherValidateIn(BaseModel):
    code: str = Field(..., min_length=1)
    order_total: Decimal = Field(..., ge=0)
    # The stored voucher for `code`, or null when no voucher matched.
    voucher: Optional[Voucher] = None


@router.post("/validate", response_model=VoucherCheck)
def validate_voucher_code(tenant_slug: str, payload: VoucherValidateIn):
    return apply_voucher(payload.voucher, payload.code, payload.order_total)
