from __future__ import annotations

import copy
import logging
from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.core import config
from app.schemas.orders import OrderQuoteRequest
from app.services.addon_definitions import AddonConfigurationError
from app.services.orders import quote_order
from tests.fixtures_data import BURGER, BURGER_GROUPS, BURGER_SELECTED_ADDONS, CITY_ZONE, TEN_PERCENT_VOUCHER


def _tampered_addons() -> list[dict]:
    addons = copy.deepcopy(BURGER_SELECTED_ADDONS)
    addons[1]["options"][0]["total_price"] = "0"
    return addons


def _request(**overrides) -> OrderQuoteRequest:
    payload = {
        "items": [
            {
                "menu_item": {**BURGER, "addon_groups": BURGER_GROUPS},
                "quantity": 2,
                "selected_addons": _tampered_addons(),
            }
        ],
        "order_type": "delivery",
        "postcode": "SW1A 1AA",
        "delivery_zones": [CITY_ZONE],
        "voucher_code": "save10",
        "voucher": TEN_PERCENT_VOUCHER,
        "settings": {"tax_rate": "0.20"},
    }
    payload.update(overrides)
    return OrderQuoteRequest.model_validate(payload)


def test_quote_reprices_addons_and_ignores_tax_rate() -> None:
    quote = quote_order(_request())

    assert quote.lines[0].addon_total == Decimal("4.00")
    assert quote.lines[0].line_total == Decimal("25.00")
    assert quote.lines[0].addons_display == "Large; 2x Cheese, Bacon"
    assert quote.subtotal == Decimal("25.00")
    assert quote.delivery_fee == Decimal("3.00")
    assert quote.discount == Decimal("2.50")
    assert quote.total == Decimal("25.50")
    assert quote.voucher_code == "SAVE10"
    assert quote.delivery_time == 25
    assert quote.is_valid is True
    assert quote.display["total"] == "£25.50"


def test_client_prices_are_trusted_when_repricing_is_off(monkeypatch) -> None:
    monkeypatch.setattr(config, "FEATURE_SERVER_SIDE_REPRICING", False)

    quote = quote_order(_request(voucher_code=None))

    assert quote.lines[0].addon_total == Decimal("2.70")
    assert quote.subtotal == Decimal("22.40")


def test_pickup_has_no_delivery_fee() -> None:
    quote = quote_order(_request(order_type="pickup", voucher_code=None, postcode=None))

    assert quote.delivery_fee == Decimal("0")
    assert quote.delivery_time is None
    assert quote.total == quote.subtotal


def test_advance_delivery_is_charged_like_delivery() -> None:
    quote = quote_order(_request(order_type="advance", advance_fulfillment="delivery", voucher_code=None))

    assert quote.delivery_fee == Decimal("3.00")


def test_problems_are_collected_as_errors() -> None:
    addons = _tampered_addons()
    addons[0]["options"][0]["option_id"] = "huge"

    quote = quote_order(
        _request(
            items=[{"menu_item": {**BURGER, "addon_groups": BURGER_GROUPS}, "quantity": 1, "selected_addons": addons}],
            postcode="M1 1AE",
            voucher_code="NOPE",
            settings={"order_type_settings": {"delivery_enabled": False}},
        )
    )

    assert quote.is_valid is False
    assert "Delivery orders are not available" in quote.errors
    assert "Burger Classic: Invalid option selected in Size" in quote.errors
    assert "Delivery not available to this postcode" in quote.errors
    assert "Invalid voucher code" in quote.errors
    assert quote.discount == Decimal("0")


def test_broken_group_definition_raises() -> None:
    broken = copy.deepcopy(BURGER_GROUPS)
    broken[0]["max_selections"] = 2

    with pytest.raises(AddonConfigurationError):
        quote_order(_request(items=[{"menu_item": {**BURGER, "addon_groups": broken}, "quantity": 1}]))


def test_negative_addon_total_is_rejected() -> None:
    addon = {
        "group_id": "extras",
        "group_name": "Extras",
        "group_type": "multiple",
        "options": [{"option_id": "bacon", "quantity": 1, "total_price": "-20.00"}],
    }

    with pytest.raises(ValidationError):
        _request(items=[{"menu_item": BURGER, "quantity": 1, "selected_addons": [addon]}], order_type="pickup")


def test_addons_on_item_without_groups_are_not_trusted() -> None:
    quote = quote_order(
        _request(
            items=[{"menu_item": BURGER, "quantity": 1, "selected_addons": BURGER_SELECTED_ADDONS}],
            order_type="pickup",
            voucher_code=None,
        )
    )

    assert quote.lines[0].addon_total == Decimal("0")
    assert quote.total == Decimal("8.50")
    assert quote.is_valid is False
    assert "Burger Classic: Invalid addon group selected" in quote.errors


def test_dropped_addon_lines_are_logged(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="app.services.orders")
    addons = copy.deepcopy(BURGER_SELECTED_ADDONS)
    addons[1]["options"].append({"option_id": "truffle", "quantity": 1, "total_price": "5.00"})
    addons.append({"group_id": "drinks", "group_name": "Drinks", "group_type": "single", "options": []})

    quote_order(
        _request(
            items=[{"menu_item": {**BURGER, "addon_groups": BURGER_GROUPS}, "quantity": 1, "selected_addons": addons}],
            order_type="pickup",
            voucher_code=None,
        )
    )

    messages = [record.getMessage() for record in caplog.records]
    assert "Dropping unknown addon option group_id=extras option_id=truffle" in messages
    assert "Dropping addon group not attached to item group_id=drinks" in messages
