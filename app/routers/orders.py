from __future__ import annotations

from fastapi import APIRouter, HTTPException

from app.schemas.orders import OrderQuote, OrderQuoteRequest, OrderSummary, OrderSummaryRequest
from app.services.addon_definitions import AddonConfigurationError
from app.services.order_totals import build_order_summary
from app.services.orders import quote_order
from app.services.restaurant_settings import InvalidSettingsError

router = APIRouter(prefix="/api/{tenant_slug}/orders", tags=["orders"])


@router.post("/quote", response_model=OrderQuote)
def quote(tenant_slug: str, payload: OrderQuoteRequest):
    try:
        return quote_order(payload)
    except AddonConfigurationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors) from exc
    except InvalidSettingsError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("/summary", response_model=OrderSummary)
def summary(tenant_slug: str, payload: OrderSummaryRequest):
    return build_order_summary(payload.order, payload.currency)
