from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from app.core.money import currency_symbol, format_money, to_money
from app.schemas.orders import OrderSummary, SummaryLine


logger = logging.getLogger(__name__)


def _get(d: Any, *keys, default=None):
    """Tenta várias chaves possíveis (dict ou objeto)."""
    for k in keys:
        if isinstance(d, Mapping):
            value = d.get(k)
        else:
            value = getattr(d, k, None)
        if value not in (None, ""):
            return value
    return default


def _quantity(value: Any) -> int:
    return int(to_money(value))


def _addon_group_total(addon: Any) -> Decimal:
    total = _get(addon, "total_price", "totalPrice")
    if total is not None:
        return to_money(total)
    # Older carts only carry per-option totals.
    return sum(
        (to_money(_get(option, "total_price", "totalPrice")) for option in _get(addon, "options", default=[]) or []),
        Decimal("0"),
    )


def addons_total(selected_addons: Optional[Iterable[Any]]) -> Decimal:
    return sum((_addon_group_total(addon) for addon in selected_addons or []), Decimal("0"))


def compute_line_total(menu_item_price: Any, selected_addons: Optional[Iterable[Any]], quantity: Any) -> Decimal:
    """(base price + addon totals) x quantity."""
    return (to_money(menu_item_price) + addons_total(selected_addons)) * _quantity(quantity)


def _item_line_total(item: Any) -> Decimal:
    menu_item = _get(item, "menu_item", "menuItem", default={})
    price = _get(menu_item, "price", default=_get(item, "price", default=0))
    return compute_line_total(
        price,
        _get(item, "selected_addons", "selectedAddons", default=[]),
        _get(item, "quantity", default=0),
    )


def compute_order_subtotal(items: Iterable[Any]) -> Decimal:
    return sum((_item_line_total(item) for item in items), Decimal("0"))


def compute_order_total(items: Iterable[Any], delivery_fee: Any, discount: Any) -> Decimal:
    """Subtotal + delivery fee - discount. There is no tax term."""
    return compute_order_subtotal(items) + to_money(delivery_fee) - to_money(discount)


def _addon_labels(selected_addons: Optional[Iterable[Any]]) -> list[str]:
    labels: list[str] = []
    for addon in selected_addons or []:
        for option in _get(addon, "options", default=[]) or []:
            quantity = _quantity(_get(option, "quantity", default=1))
            label = str(_get(option, "name", "option_name", "option_id", "optionId", default=""))
            if not label:
                continue
            labels.append(f"{quantity}x {label}" if quantity > 1 else label)
    return labels


def build_order_summary(order: Mapping[str, Any], currency: Optional[str] = None) -> OrderSummary:
    """Display strings for a stored order. Malformed money fields render as 0.00."""
    symbol = currency_symbol(currency or _get(order, "currency", default=None))

    lines: list[SummaryLine] = []
    for item in _get(order, "items", default=[]) or []:
        menu_item = _get(item, "menu_item", "menuItem", default={})
        lines.append(
            SummaryLine(
                name=str(_get(menu_item, "name", default=_get(item, "name", default="")) or ""),
                quantity=_quantity(_get(item, "quantity", default=0)),
                addons=_addon_labels(_get(item, "selected_addons", "selectedAddons", default=[])),
                line_total=format_money(_item_line_total(item), symbol),
            )
        )

    order_number = _get(order, "order_number", "orderNumber", default=None)
    discount = to_money(_get(order, "discount", default=0))
    voucher_code = _get(order, "voucher_code", "voucherCode", default=None)
    return OrderSummary(
        order_number=str(order_number) if order_number is not None else None,
        lines=lines,
        subtotal=format_money(_get(order, "subtotal", default=0), symbol),
        delivery_fee=format_money(_get(order, "delivery_fee", "deliveryFee", default=0), symbol),
        discount=format_money(discount, symbol) if discount > 0 else None,
        discount_label=f"Discount ({voucher_code})" if discount > 0 and voucher_code else ("Discount" if discount > 0 else None),
        total=format_money(_get(order, "total", default=0), symbol),
    )
