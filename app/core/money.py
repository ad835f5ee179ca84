from __future__ import annotations

import logging
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
ZERO = Decimal("0")

# Same prefix parseFloat accepts: "12.5abc" -> 12.5, "abc" -> nothing.
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")

_CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
}
_DEFAULT_SYMBOL = "£"


def to_money(value: Any) -> Decimal:
    """Coerce anything to a Decimal amount, falling back to zero.

    This is the only place where malformed or missing monetary values are
    tolerated; it never raises.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return ZERO
        return Decimal(repr(value))
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return ZERO
        try:
            parsed = Decimal(match.group(1))
        except InvalidOperation:
            return ZERO
        return parsed if parsed.is_finite() else ZERO
    return ZERO


# Integer digits above this are not a price; quantizing them is refused.
MAX_MONEY_DIGITS = 60


def round_money(value: Decimal) -> Decimal:
    if value.adjusted() >= MAX_MONEY_DIGITS:
        raise InvalidOperation(f"Amount out of range: {value}")
    with localcontext() as ctx:
        ctx.prec = MAX_MONEY_DIGITS + 3
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_money(value: Any, symbol: str = "") -> str:
    try:
        amount = round_money(to_money(value))
    except InvalidOperation:
        logger.warning("Amount out of display range, rendering as zero value=%.40s", value)
        amount = ZERO
    if amount.is_zero():
        amount = amount.copy_abs()
    if amount < 0:
        return f"-{symbol}{amount.copy_abs():.2f}"
    return f"{symbol}{amount:.2f}"


def currency_symbol(currency: str | None) -> str:
    return _CURRENCY_SYMBOLS.get((currency or "").strip().upper(), _DEFAULT_SYMBOL)
