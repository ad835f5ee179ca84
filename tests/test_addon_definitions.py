from __future__ import annotations

import pytest

from app.schemas.addons import AddonGroup
from app.services.addon_definitions import (
    AddonConfigurationError,
    check_addon_group_definition,
    ensure_valid_addon_groups,
)
from tests.fixtures_data import BURGER_GROUPS, EXTRAS_GROUP, SIZE_GROUP


def test_fixture_groups_are_valid() -> None:
    groups = [AddonGroup.model_validate(group) for group in BURGER_GROUPS]

    assert ensure_valid_addon_groups(groups) == groups


def test_group_rules_are_reported_together() -> None:
    group = AddonGroup.model_validate(
        {**EXTRAS_GROUP, "name": " ", "min_selections": 4, "max_selections": 3}
    )

    errors = check_addon_group_definition(group)

    assert "Addon group name is required" in errors
    assert "Minimum selections cannot exceed maximum selections" in errors


def test_single_group_must_allow_exactly_one() -> None:
    group = AddonGroup.model_validate({**SIZE_GROUP, "max_selections": 2})

    assert check_addon_group_definition(group) == [
        "Single-choice addon groups must allow exactly 1 selection"
    ]


def test_negative_option_prices_and_duplicates_are_rejected() -> None:
    group = AddonGroup.model_validate(
        {
            **EXTRAS_GROUP,
            "options": [
                {"id": "cheese", "name": "Cheese", "price": "-1"},
                {"id": "cheese", "name": "Cheese again", "price": "0.50"},
            ],
        }
    )

    errors = check_addon_group_definition(group)

    assert "Addon option price cannot be negative" in errors
    assert "Duplicate option id cheese in Extras" in errors


def test_duplicate_group_ids_raise_configuration_error() -> None:
    size = AddonGroup.model_validate(SIZE_GROUP)

    with pytest.raises(AddonConfigurationError) as exc_info:
        ensure_valid_addon_groups([size, size])

    assert exc_info.value.errors == ["Duplicate addon group id size"]
