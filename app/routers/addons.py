from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from app.core.metrics import request_metrics
from app.schemas.addons import (
    AddonCalculationResult,
    AddonGroup,
    AddonPriceRange,
    AddonValidationResult,
    SelectedAddon,
    SelectionSnapshot,
)
from app.services.addon_definitions import (
    AddonConfigurationError,
    check_addon_group_definition,
    ensure_valid_addon_groups,
)
from app.services.addon_pricing import addon_price_range, calculate_addon_price
from app.services.addon_selection import AddonSelectionState
from app.services.addon_validation import validate_selected_addons, validate_selection
from utils.slug import normalize_slug

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/{tenant_slug}/addons", tags=["addons"])


class SelectionAction(str, Enum):
    SET = "set"
    INCREMENT = "increment"
    DECREMENT = "decrement"
    CLEAR_GROUP = "clear_group"


class SelectionActionIn(BaseModel):
    groups: list[AddonGroup]
    selections: SelectionSnapshot = Field(default_factory=dict)
    action: SelectionAction
    group_id: str
    option_id: Optional[str] = None
    quantity: int = 1
    custom_note: Optional[str] = None


class SelectionStateOut(BaseModel):
    accepted: bool
    selections: SelectionSnapshot
    validation: AddonValidationResult
    calculation: AddonCalculationResult
    selected_addons: list[SelectedAddon]


class SelectionIn(BaseModel):
    groups: list[AddonGroup]
    selections: SelectionSnapshot = Field(default_factory=dict)


class ValidateIn(BaseModel):
    groups: list[AddonGroup]
    selections: SelectionSnapshot = Field(default_factory=dict)
    # Cart-format addons; when sent they are checked instead of `selections`.
    selected_addons: Optional[list[SelectedAddon]] = None


class GroupsIn(BaseModel):
    groups: list[AddonGroup]


class GroupCheckOut(BaseModel):
    group_id: str
    is_valid: bool
    errors: list[str] = Field(default_factory=list)


def _valid_groups(groups: list[AddonGroup]) -> list[AddonGroup]:
    try:
        return ensure_valid_addon_groups(groups)
    except AddonConfigurationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors) from exc


def _apply_action(state: AddonSelectionState, payload: SelectionActionIn) -> bool:
    if state.group(payload.group_id) is None:
        raise HTTPException(status_code=404, detail="Addon group not found")
    if payload.action == SelectionAction.CLEAR_GROUP:
        return state.clear_group(payload.group_id)
    if not payload.option_id:
        raise HTTPException(status_code=400, detail="option_id is required for this action")
    if payload.action == SelectionAction.SET:
        return state.set_option(payload.group_id, payload.option_id, payload.quantity, payload.custom_note)
    if payload.action == SelectionAction.INCREMENT:
        return state.increment(payload.group_id, payload.option_id)
    return state.decrement(payload.group_id, payload.option_id)


@router.post("/selection", response_model=SelectionStateOut)
def apply_selection_action(tenant_slug: str, payload: SelectionActionIn):
    groups = _valid_groups(payload.groups)
    state = AddonSelectionState.from_snapshot(groups, payload.selections)

    accepted = _apply_action(state, payload)
    validation = validate_selection(groups, state)
    request_metrics.observe_selection(
        normalize_slug(tenant_slug),
        is_valid=validation.is_valid,
        action_accepted=accepted,
    )
    if not accepted:
        logger.info(
            "Selection action refused",
            extra={"action": payload.action.value, "group_id": payload.group_id, "option_id": payload.option_id},
        )

    return SelectionStateOut(
        accepted=accepted,
        selections=state.snapshot(),
        validation=validation,
        calculation=calculate_addon_price(groups, state),
        selected_addons=state.selected_addons(),
    )


@router.post("/validate", response_model=AddonValidationResult)
def validate_addons(tenant_slug: str, payload: ValidateIn):
    groups = _valid_groups(payload.groups)
    if payload.selected_addons is not None:
        result = validate_selected_addons(groups, payload.selected_addons)
    else:
        result = validate_selection(groups, AddonSelectionState.from_snapshot(groups, payload.selections))
    request_metrics.observe_selection(normalize_slug(tenant_slug), is_valid=result.is_valid)
    return result


@router.post("/calculate", response_model=AddonCalculationResult)
def calculate_addons(tenant_slug: str, payload: SelectionIn):
    groups = _valid_groups(payload.groups)
    state = AddonSelectionState.from_snapshot(groups, payload.selections)
    return calculate_addon_price(groups, state)


@router.post("/groups/check", response_model=list[GroupCheckOut])
def check_groups(tenant_slug: str, payload: GroupsIn):
    results: list[GroupCheckOut] = []
    seen: set[str] = set()
    for group in payload.groups:
        errors = check_addon_group_definition(group)
        if group.id in seen:
            errors.insert(0, f"Duplicate addon group id {group.id}")
        seen.add(group.id)
        results.append(GroupCheckOut(group_id=group.id, is_valid=not errors, errors=errors))
    return results


@router.post("/price-range", response_model=AddonPriceRange)
def price_range(tenant_slug: str, payload: GroupsIn):
    return addon_price_range(_valid_groups(payload.groups))
