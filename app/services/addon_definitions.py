from __future__ import annotations

import logging
from typing import Iterable

from app.schemas.addons import AddonGroup, AddonGroupType, AddonOption


logger = logging.getLogger(__name__)


class AddonConfigurationError(ValueError):
    """Raised when an addon group definition breaks the editor rules."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def check_addon_option_definition(option: AddonOption) -> list[str]:
    errors: list[str] = []
    if not (option.name or "").strip():
        errors.append("Addon option name is required")
    if option.price < 0:
        errors.append("Addon option price cannot be negative")
    pricing = option.quantity_pricing
    if pricing is not None:
        if pricing.base_quantity < 0:
            errors.append(f"{option.name}: base quantity cannot be negative")
        if pricing.additional_price < 0:
            errors.append(f"{option.name}: additional price cannot be negative")
    return errors


def check_addon_group_definition(group: AddonGroup) -> list[str]:
    """Editor-side rules for one group.

    `required` and `min_selections` are deliberately not cross-checked: a
    required multi-select group with min_selections=0 is accepted here and
    the selection validator applies both rules independently.
    """
    errors: list[str] = []

    if not (group.name or "").strip():
        errors.append("Addon group name is required")
    if group.min_selections < 0:
        errors.append("Minimum selections cannot be negative")
    if group.max_selections < 1:
        errors.append("Maximum selections must be at least 1")
    if group.min_selections > group.max_selections:
        errors.append("Minimum selections cannot exceed maximum selections")
    if group.type == AddonGroupType.SINGLE and group.max_selections != 1:
        errors.append("Single-choice addon groups must allow exactly 1 selection")

    seen: set[str] = set()
    for option in group.options:
        if option.id in seen:
            errors.append(f"Duplicate option id {option.id} in {group.name}")
        seen.add(option.id)
        errors.extend(check_addon_option_definition(option))

    return errors


def ensure_valid_addon_groups(groups: Iterable[AddonGroup]) -> list[AddonGroup]:
    groups = list(groups)
    errors: list[str] = []
    seen: set[str] = set()
    for group in groups:
        if group.id in seen:
            errors.append(f"Duplicate addon group id {group.id}")
        seen.add(group.id)
        errors.extend(check_addon_group_definition(group))
    if errors:
        logger.info("Rejected addon group definitions errors=%s", errors)
        raise AddonConfigurationError(errors)
    return groups
