from __future__ import annotations

import logging
from decimal import Decimal

from app.core import config
from app.core.money import currency_symbol, format_money
from app.schemas.addons import AddonGroup, SelectedAddon
from app.schemas.orders import (
    FulfillmentType,
    OrderItemIn,
    OrderQuote,
    OrderQuoteRequest,
    OrderType,
    QuoteLine,
)
from app.schemas.settings import RestaurantSettings
from app.services.addon_definitions import ensure_valid_addon_groups
from app.services.addon_pricing import format_addon_display, option_total_price
from app.services.addon_validation import validate_selected_addons
from app.services.delivery_zones import calculate_delivery_fee
from app.services.order_totals import addons_total, compute_line_total
from app.services.restaurant_settings import resolve_settings
from app.services.vouchers import apply_voucher


logger = logging.getLogger(__name__)


def _reprice_selected_addons(groups: list[AddonGroup], selected_addons: list[SelectedAddon]) -> list[SelectedAddon]:
    """Recomputa o preço de cada opção a partir dos grupos anexados ao item."""
    by_id = {group.id: group for group in groups}
    repriced: list[SelectedAddon] = []
    for addon in selected_addons:
        group = by_id.get(addon.group_id)
        if group is None:
            logger.debug("Dropping addon group not attached to item group_id=%s", addon.group_id)
            continue
        options = []
        for selected in addon.options:
            option = group.find_option(selected.option_id)
            if option is None:
                logger.debug("Dropping unknown addon option group_id=%s option_id=%s", group.id, selected.option_id)
                continue
            options.append(
                selected.model_copy(update={"total_price": option_total_price(option, selected.quantity)})
            )
        repriced.append(addon.model_copy(update={"options": options, "group_name": group.name, "group_type": group.type}))
    return repriced


def _quote_line(item: OrderItemIn) -> QuoteLine:
    menu_item = item.menu_item
    selected_addons = item.selected_addons
    errors: list[str] = []

    # With repricing on, an item without attached groups accepts no addons.
    if config.FEATURE_SERVER_SIDE_REPRICING:
        groups = ensure_valid_addon_groups(menu_item.addon_groups)
        validation = validate_selected_addons(groups, selected_addons)
        errors.extend(f"{menu_item.name}: {error}" for error in validation.errors)
        selected_addons = _reprice_selected_addons(groups, selected_addons)
        groups_by_id = {group.id: group for group in groups}
    else:
        groups_by_id = {}

    display = "; ".join(
        text
        for text in (format_addon_display(addon, groups_by_id.get(addon.group_id)) for addon in selected_addons)
        if text
    )
    return QuoteLine(
        menu_item_id=menu_item.id,
        name=menu_item.name,
        quantity=item.quantity,
        unit_price=menu_item.price,
        addon_total=addons_total(selected_addons),
        line_total=compute_line_total(menu_item.price, selected_addons, item.quantity),
        addons_display=display,
        special_instructions=item.special_instructions,
        errors=errors,
    )


def _needs_delivery(request: OrderQuoteRequest) -> bool:
    if request.order_type == OrderType.DELIVERY:
        return True
    return request.order_type == OrderType.ADVANCE and request.advance_fulfillment == FulfillmentType.DELIVERY


def _order_type_errors(request: OrderQuoteRequest, settings: RestaurantSettings) -> list[str]:
    enabled = settings.order_type_settings
    if request.order_type == OrderType.DELIVERY and not enabled.delivery_enabled:
        return ["Delivery orders are not available"]
    if request.order_type in (OrderType.PICKUP, OrderType.COLLECTION) and not enabled.collection_enabled:
        return ["Collection orders are not available"]
    if request.order_type == OrderType.ADVANCE and not enabled.advance_order_enabled:
        return ["Advance orders are not available"]
    return []


def quote_order(request: OrderQuoteRequest) -> OrderQuote:
    """Prices a cart: subtotal + delivery fee - discount. Settings tax_rate is never applied."""
    settings = resolve_settings(request.settings)
    symbol = currency_symbol(settings.currency)
    errors = _order_type_errors(request, settings)

    lines = [_quote_line(item) for item in request.items]
    for line in lines:
        errors.extend(line.errors)
    subtotal = sum((line.line_total for line in lines), Decimal("0"))

    delivery_fee = Decimal("0")
    delivery_time = None
    if _needs_delivery(request):
        delivery = calculate_delivery_fee(
            request.delivery_zones,
            request.postcode or "",
            subtotal,
            default_fee=config.DEFAULT_DELIVERY_FEE,
            currency_symbol=symbol,
        )
        delivery_fee = delivery.fee
        delivery_time = delivery.delivery_time
        if delivery.error:
            errors.append(delivery.error)

    discount = Decimal("0")
    voucher_code = None
    if request.voucher_code:
        check = apply_voucher(request.voucher, request.voucher_code, subtotal)
        if check.valid:
            discount = check.discount
            voucher_code = request.voucher_code.strip().upper()
        else:
            errors.append(check.error or "Invalid voucher code")

    total = subtotal + delivery_fee - discount
    logger.info(
        "Order quoted items=%s subtotal=%s delivery_fee=%s discount=%s total=%s errors=%s",
        len(lines),
        subtotal,
        delivery_fee,
        discount,
        total,
        len(errors),
    )

    return OrderQuote(
        lines=lines,
        subtotal=subtotal,
        delivery_fee=delivery_fee,
        discount=discount,
        total=total,
        voucher_code=voucher_code,
        delivery_time=delivery_time,
        is_valid=not errors,
        errors=errors,
        display={
            "subtotal": format_money(subtotal, symbol),
            "delivery_fee": format_money(delivery_fee, symbol),
            "discount": format_money(discount, symbol),
            "total": format_money(total, symbol),
        },
    )
