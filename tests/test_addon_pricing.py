from __future__ import annotations

from decimal import Decimal

from app.schemas.addons import AddonGroup, AddonOption, SelectedAddon
from app.services.addon_pricing import (
    addon_price_range,
    calculate_addon_price,
    calculate_selected_addon_price,
    format_addon_display,
    has_addon_selections,
    option_total_price,
)
from app.services.addon_selection import AddonSelectionState
from tests.fixtures_data import BURGER_GROUPS, BURGER_SELECTED_ADDONS, EXTRAS_GROUP


def _groups() -> list[AddonGroup]:
    return [AddonGroup.model_validate(group) for group in BURGER_GROUPS]


def test_option_total_price_applies_quantity_tier() -> None:
    cheese = AddonOption.model_validate(EXTRAS_GROUP["options"][0])

    assert option_total_price(cheese, 0) == Decimal("0")
    assert option_total_price(cheese, 1) == Decimal("0.80")
    assert option_total_price(cheese, 3) == Decimal("1.80")


def test_option_without_tier_is_linear() -> None:
    bacon = AddonOption(id="bacon", name="Bacon", price=Decimal("1.20"))

    assert option_total_price(bacon, 2) == Decimal("2.40")


def test_calculation_breakdown_skips_zero_total_groups() -> None:
    groups = _groups()
    state = AddonSelectionState(groups)
    state.set_option("size", "regular", 1)
    state.set_option("extras", "cheese", 2)
    state.set_option("extras", "bacon", 1)

    result = calculate_addon_price(groups, state)

    assert result.subtotal == Decimal("2.50")
    assert result.discounts == Decimal("0")
    assert result.total == result.subtotal
    assert [group.group_id for group in result.breakdown] == ["extras"]
    assert result.breakdown[0].group_total == Decimal("2.50")


def test_empty_selection_costs_nothing() -> None:
    groups = _groups()

    result = calculate_addon_price(groups, AddonSelectionState(groups))

    assert result.total == Decimal("0")
    assert result.breakdown == []


def test_selected_addon_totals_are_computed() -> None:
    selected = [SelectedAddon.model_validate(addon) for addon in BURGER_SELECTED_ADDONS]

    assert selected[1].total_price == Decimal("2.50")
    assert calculate_selected_addon_price(selected) == Decimal("4.00")
    assert has_addon_selections(selected) is True
    assert has_addon_selections([]) is False


def test_selected_addon_total_ignores_client_value() -> None:
    addon = SelectedAddon.model_validate({**BURGER_SELECTED_ADDONS[0], "total_price": "99"})

    assert addon.total_price == Decimal("1.50")


def test_price_range_covers_required_and_optional_groups() -> None:
    result = addon_price_range(_groups())

    assert result.has_required_addons is True
    # Regular size (0) plus two ketchups (0).
    assert result.min_addon_price == Decimal("0")
    # Large 1.50, three bacon 3.60, two mayo 0.50.
    assert result.max_addon_price == Decimal("5.60")


def test_format_addon_display_uses_option_names() -> None:
    groups = _groups()
    extras = SelectedAddon.model_validate(BURGER_SELECTED_ADDONS[1])

    assert format_addon_display(extras, groups[1]) == "2x Cheese, Bacon"
    assert format_addon_display(extras) == "2x cheese, bacon"
