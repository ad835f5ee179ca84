from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from app.schemas.settings import RestaurantSettings
from app.services.restaurant_settings import InvalidSettingsError, resolve_settings

router = APIRouter(prefix="/api/{tenant_slug}/settings", tags=["settings"])


@router.post("/resolve", response_model=RestaurantSettings)
def resolve(tenant_slug: str, overrides: dict[str, Any]):
    try:
        return resolve_settings(overrides)
    except InvalidSettingsError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
