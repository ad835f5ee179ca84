from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional

from app.schemas.addons import (
    AddonCalculationResult,
    AddonGroup,
    AddonOption,
    AddonPriceRange,
    BreakdownGroup,
    BreakdownOption,
    SelectedAddon,
)

if TYPE_CHECKING:
    from app.services.addon_selection import AddonSelectionState


logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def option_total_price(option: AddonOption, quantity: int) -> Decimal:
    """Price for `quantity` units of one option, tier pricing included."""
    if quantity <= 0:
        return ZERO
    pricing = option.quantity_pricing
    if pricing is not None and quantity > pricing.base_quantity:
        extra = quantity - pricing.base_quantity
        return option.price * pricing.base_quantity + pricing.additional_price * extra
    return option.price * quantity


def calculate_addon_price(
    groups: Iterable[AddonGroup],
    state: "AddonSelectionState",
) -> AddonCalculationResult:
    subtotal = ZERO
    breakdown: list[BreakdownGroup] = []

    for group in groups:
        group_total = ZERO
        entry = BreakdownGroup(group_id=group.id, group_name=group.name)
        for option_id, selection in state.selections(group.id).items():
            option = group.find_option(option_id)
            if option is None or selection.quantity <= 0:
                continue
            total = option_total_price(option, selection.quantity)
            entry.options.append(
                BreakdownOption(
                    option_id=option.id,
                    option_name=option.name,
                    quantity=selection.quantity,
                    unit_price=option.price,
                    total_price=total,
                )
            )
            group_total += total

        entry.group_total = group_total
        if group_total > 0:
            breakdown.append(entry)
        subtotal += group_total

    logger.debug("Addon calculation subtotal=%s groups=%s", subtotal, len(breakdown))
    # No bulk-discount rule exists, so discounts stay at zero.
    return AddonCalculationResult(subtotal=subtotal, discounts=ZERO, total=subtotal, breakdown=breakdown)


def calculate_selected_addon_price(selected_addons: Iterable[SelectedAddon]) -> Decimal:
    return sum((addon.total_price for addon in selected_addons), ZERO)


def _units_needed(group: AddonGroup) -> int:
    needed = group.min_selections
    if group.required:
        needed = max(needed, 1)
    return needed


def _cheapest(options: list[AddonOption], quantity: int) -> Decimal:
    return min(option_total_price(option, quantity) for option in options)


def _dearest(options: list[AddonOption], quantity: int) -> Decimal:
    return max(option_total_price(option, quantity) for option in options)


def addon_price_range(groups: Iterable[AddonGroup]) -> AddonPriceRange:
    """Cheapest mandatory addon cost and most expensive allowed addon cost.

    Each group is priced as if all of its units went to a single option.
    """
    has_required = False
    minimum = ZERO
    maximum = ZERO

    for group in groups:
        if not group.active:
            continue
        available = [option for option in group.options if option.available]
        needed = _units_needed(group)
        if group.required:
            has_required = True
        if not available:
            continue
        if needed > 0:
            minimum += _cheapest(available, needed)
        maximum += _dearest(available, group.max_selections)

    return AddonPriceRange(
        has_required_addons=has_required,
        min_addon_price=minimum,
        max_addon_price=maximum,
    )


def format_addon_display(
    selected_addon: SelectedAddon,
    group: Optional[AddonGroup] = None,
) -> str:
    parts: list[str] = []
    for selected in selected_addon.options:
        label = selected.option_id
        if group is not None:
            option = group.find_option(selected.option_id)
            if option is not None:
                label = option.name
        prefix = f"{selected.quantity}x " if selected.quantity > 1 else ""
        parts.append(f"{prefix}{label}")
    return ", ".join(parts)


def has_addon_selections(selected_addons: list[SelectedAddon]) -> bool:
    return any(addon.options for addon in selected_addons)
