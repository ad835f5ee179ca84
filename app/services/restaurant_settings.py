from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from app.schemas.settings import WEEKDAYS, RestaurantSettings


logger = logging.getLogger(__name__)


class InvalidSettingsError(ValueError):
    pass


def _merge_throttling(base: dict, overrides: Mapping[str, Any]) -> dict:
    merged = dict(base)
    for day, value in overrides.items():
        if day not in WEEKDAYS:
            raise InvalidSettingsError(f"Unknown weekday in order_throttling: {day}")
        if not isinstance(value, Mapping):
            raise InvalidSettingsError(f"order_throttling.{day} must be an object")
        merged[day] = {**base.get(day, {}), **value}
    return merged


def resolve_settings(overrides: Optional[Mapping[str, Any]] = None) -> RestaurantSettings:
    """Stored overrides merged over the defaults, one top-level key at a time."""
    base = RestaurantSettings().model_dump()
    overrides = dict(overrides or {})

    unknown = sorted(set(overrides) - set(base))
    if unknown:
        raise InvalidSettingsError(f"Unknown settings: {', '.join(unknown)}")

    merged = dict(base)
    for key, value in overrides.items():
        if key == "order_throttling" and isinstance(value, Mapping):
            merged[key] = _merge_throttling(base[key], value)
        elif key == "order_type_settings" and isinstance(value, Mapping):
            merged[key] = {**base[key], **value}
        else:
            merged[key] = value

    try:
        settings = RestaurantSettings.model_validate(merged)
    except ValidationError as exc:
        raise InvalidSettingsError(str(exc)) from exc

    logger.debug("Resolved restaurant settings keys=%s", sorted(overrides))
    return settings
