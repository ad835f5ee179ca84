from __future__ import annotations

import logging
from typing import Iterable

from app.schemas.addons import (
    AddonGroup,
    AddonGroupType,
    AddonValidationResult,
    SelectedAddon,
)
from app.services.addon_selection import AddonSelectionState


logger = logging.getLogger(__name__)


def _plural(count: int) -> str:
    return "option" if count == 1 else "options"


def _cardinality_errors(group: AddonGroup, selected_count: int, distinct_options: int) -> list[str]:
    errors: list[str] = []
    if group.required and selected_count == 0:
        errors.append(f"{group.name} is required")
    if 0 < selected_count < group.min_selections:
        errors.append(f"Select at least {group.min_selections} {_plural(group.min_selections)}")
    if selected_count > group.max_selections:
        errors.append(f"Maximum {group.max_selections} {_plural(group.max_selections)} allowed")
    if group.type == AddonGroupType.SINGLE and distinct_options > 1:
        errors.append("Only one selection allowed")
    return errors


def validate_selection(
    groups: Iterable[AddonGroup],
    state: AddonSelectionState,
) -> AddonValidationResult:
    """Cardinality rules per group, errors flattened in group definition order."""
    errors: list[str] = []
    for group in groups:
        selections = state.selections(group.id)
        selected_count = sum(selection.quantity for selection in selections.values())
        errors.extend(_cardinality_errors(group, selected_count, len(selections)))
    return AddonValidationResult(is_valid=not errors, errors=errors)


def validate_selected_addons(
    groups: Iterable[AddonGroup],
    selected_addons: Iterable[SelectedAddon],
) -> AddonValidationResult:
    """Server-side check of cart addons against the item's attached groups."""
    groups = list(groups)
    selected_by_group = {addon.group_id: addon for addon in selected_addons}
    known_ids = {group.id for group in groups}
    errors: list[str] = []

    for group in groups:
        selected = selected_by_group.get(group.id)
        options = selected.options if selected else []
        selected_count = sum(option.quantity for option in options)
        errors.extend(_cardinality_errors(group, selected_count, len({option.option_id for option in options})))

        for selected_option in options:
            option = group.find_option(selected_option.option_id)
            if option is None:
                errors.append(f"Invalid option selected in {group.name}")
            elif not option.available:
                errors.append(f"{option.name} is currently unavailable")

    for group_id in selected_by_group:
        if group_id not in known_ids:
            logger.info("Selected addon group not attached to item group_id=%s", group_id)
            errors.append("Invalid addon group selected")

    return AddonValidationResult(is_valid=not errors, errors=errors)
