from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.routers.delivery import router as delivery_router
from app.routers.orders import router as orders_router
from app.routers.settings import router as settings_router
from app.routers.vouchers import router as vouchers_router
from tests.fixtures_data import (
    BURGER,
    BURGER_GROUPS,
    BURGER_SELECTED_ADDONS,
    CITY_ZONE,
    SIZE_GROUP,
    STORED_ORDER,
    TEN_PERCENT_VOUCHER,
)


def _client() -> TestClient:
    app = FastAPI()
    app.include_router(orders_router)
    app.include_router(delivery_router)
    app.include_router(vouchers_router)
    app.include_router(settings_router)
    return TestClient(app)


def test_quote_endpoint_returns_totals_and_display() -> None:
    response = _client().post(
        "/api/burger-bar/orders/quote",
        json={
            "items": [
                {
                    "menu_item": {**BURGER, "addon_groups": BURGER_GROUPS},
                    "quantity": 1,
                    "selected_addons": BURGER_SELECTED_ADDONS,
                }
            ],
            "order_type": "collection",
            "settings": {"currency": "USD"},
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["subtotal"] == "12.50"
    assert body["delivery_fee"] == "0"
    assert body["total"] == "12.50"
    assert body["is_valid"] is True
    assert body["display"]["total"] == "$12.50"


def test_quote_with_broken_groups_or_settings_is_422() -> None:
    client = _client()
    item = {"menu_item": {**BURGER, "addon_groups": [{**SIZE_GROUP, "min_selections": 2}]}, "quantity": 1}

    broken_groups = client.post("/api/t/orders/quote", json={"items": [item], "order_type": "pickup"})
    broken_settings = client.post(
        "/api/t/orders/quote",
        json={"items": [{"menu_item": BURGER, "quantity": 1}], "settings": {"vat": 1}},
    )
    empty_cart = client.post("/api/t/orders/quote", json={"items": []})

    assert broken_groups.status_code == 422
    assert broken_settings.status_code == 422
    assert broken_settings.json()["detail"] == "Unknown settings: vat"
    assert empty_cart.status_code == 422


def test_summary_endpoint() -> None:
    response = _client().post("/api/t/orders/summary", json={"order": STORED_ORDER, "currency": "EUR"})

    assert response.status_code == 200
    assert response.json()["total"] == "€22.80"
    assert response.json()["discount_label"] == "Discount (SAVE10)"


def test_summary_endpoint_renders_database_shaped_order() -> None:
    response = _client().post(
        "/api/t/orders/summary",
        json={"order": {"orderNumber": 1001, "items": [], "total": "1e30"}},
    )

    assert response.status_code == 200
    assert response.json()["order_number"] == "1001"
    assert response.json()["total"] == "£1000000000000000000000000000000.00"


def test_delivery_quote_endpoint() -> None:
    response = _client().post(
        "/api/t/delivery/quote",
        json={"postcode": "sw1a1aa", "order_value": "20", "zones": [CITY_ZONE]},
    )

    assert response.status_code == 200
    assert response.json()["available"] is True
    assert response.json()["fee"] == "3.00"


def test_voucher_validate_endpoint() -> None:
    client = _client()

    ok = client.post(
        "/api/t/vouchers/validate",
        json={"code": "SAVE10", "order_total": "20", "voucher": TEN_PERCENT_VOUCHER},
    )
    unknown = client.post("/api/t/vouchers/validate", json={"code": "SAVE10", "order_total": "20"})

    assert ok.json() == {"valid": True, "discount": "2.00", "error": None}
    assert unknown.json()["error"] == "Invalid voucher code"


def test_settings_resolve_endpoint() -> None:
    client = _client()

    resolved = client.post("/api/t/settings/resolve", json={"name": "Burger Bar"})
    rejected = client.post("/api/t/settings/resolve", json={"order_throttling": {"funday": {}}})

    assert resolved.status_code == 200
    assert resolved.json()["name"] == "Burger Bar"
    assert resolved.json()["order_throttling"]["sunday"]["interval"] == 15
    assert rejected.status_code == 422
