from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from app.core.money import format_money, round_money
from app.schemas.vouchers import Voucher, VoucherCheck, VoucherType


logger = logging.getLogger(__name__)


def _as_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def validate_voucher(
    voucher: Optional[Voucher],
    code: str,
    order_total: Decimal,
    now: Optional[datetime] = None,
) -> tuple[bool, Optional[str]]:
    now = _as_aware(now or datetime.now(timezone.utc))
    if voucher is None or not voucher.active or voucher.code.strip().lower() != (code or "").strip().lower():
        return False, "Invalid voucher code"
    if voucher.expiry_date is not None and now > _as_aware(voucher.expiry_date):
        return False, "Voucher has expired"
    if voucher.usage_limit and voucher.used_count >= voucher.usage_limit:
        return False, "Voucher usage limit reached"
    if order_total < voucher.min_order:
        return False, f"Minimum order value is {format_money(voucher.min_order)}"
    return True, None


def calculate_voucher_discount(voucher: Voucher, order_total: Decimal) -> Decimal:
    discount = Decimal("0")
    if voucher.type == VoucherType.PERCENTAGE:
        discount = order_total * voucher.value / Decimal("100")
        if voucher.max_discount and discount > voucher.max_discount:
            discount = voucher.max_discount
    elif voucher.type == VoucherType.AMOUNT:
        discount = voucher.value
        if voucher.max_discount and discount > voucher.max_discount:
            discount = voucher.max_discount
        if discount > order_total:
            discount = order_total
    return round_money(discount)


def apply_voucher(
    voucher: Optional[Voucher],
    code: str,
    order_total: Decimal,
    now: Optional[datetime] = None,
) -> VoucherCheck:
    valid, error = validate_voucher(voucher, code, order_total, now)
    if not valid:
        logger.info("Voucher rejected code=%s reason=%s", code, error)
        return VoucherCheck(valid=False, error=error)
    return VoucherCheck(valid=True, discount=calculate_voucher_discount(voucher, order_total))
