from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from app.schemas.addons import (
    AddonGroup,
    AddonGroupType,
    OptionSelection,
    SelectedAddon,
    SelectedAddonOption,
)
from app.services.addon_pricing import option_total_price


logger = logging.getLogger(__name__)


class AddonSelectionState:
    """Per-group option selections for one item customization.

    Quantities are always >= 1; an option whose quantity drops to zero is
    removed rather than stored.
    """

    def __init__(self, groups: Iterable[AddonGroup]):
        self._groups: dict[str, AddonGroup] = {group.id: group for group in groups}
        self._selected: dict[str, dict[str, OptionSelection]] = {group_id: {} for group_id in self._groups}

    @classmethod
    def from_snapshot(
        cls,
        groups: Iterable[AddonGroup],
        snapshot: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ) -> "AddonSelectionState":
        """Rebuild state as-is; single-choice clearing only applies to new actions."""
        state = cls(groups)
        for group_id, options in (snapshot or {}).items():
            if group_id not in state._groups:
                logger.warning("Ignoring selection for unknown addon group group_id=%s", group_id)
                continue
            for option_id, raw in options.items():
                selection = raw if isinstance(raw, OptionSelection) else OptionSelection.model_validate(raw)
                state._selected[group_id][option_id] = selection
        return state

    @property
    def groups(self) -> list[AddonGroup]:
        return list(self._groups.values())

    def group(self, group_id: str) -> Optional[AddonGroup]:
        return self._groups.get(group_id)

    def selections(self, group_id: str) -> dict[str, OptionSelection]:
        return dict(self._selected.get(group_id, {}))

    def set_option(
        self,
        group_id: str,
        option_id: str,
        quantity: int,
        custom_note: Optional[str] = None,
    ) -> bool:
        group = self._groups.get(group_id)
        if group is None:
            return False
        option = group.find_option(option_id)
        if option is None:
            return False
        if quantity > 0 and not option.available:
            logger.info(
                "Refused unavailable addon option",
                extra={"group_id": group_id, "option_id": option_id},
            )
            return False

        selected = self._selected[group_id]
        if group.type == AddonGroupType.SINGLE:
            selected.clear()

        if quantity <= 0:
            selected.pop(option_id, None)
        else:
            selected[option_id] = OptionSelection(quantity=quantity, custom_note=custom_note)
        return True

    def get_quantity(self, group_id: str, option_id: str) -> int:
        selection = self._selected.get(group_id, {}).get(option_id)
        return selection.quantity if selection else 0

    def is_selected(self, group_id: str, option_id: str) -> bool:
        return self.get_quantity(group_id, option_id) > 0

    def selected_count(self, group_id: str) -> int:
        return sum(selection.quantity for selection in self._selected.get(group_id, {}).values())

    def remaining_allowance(self, group_id: str, option_id: str) -> int:
        """Highest quantity this option may reach without overflowing the group."""
        group = self._groups.get(group_id)
        if group is None:
            return 0
        return group.max_selections - self.selected_count(group_id) + self.get_quantity(group_id, option_id)

    def increment(self, group_id: str, option_id: str) -> bool:
        quantity = self.get_quantity(group_id, option_id)
        if quantity >= self.remaining_allowance(group_id, option_id):
            return False
        return self.set_option(group_id, option_id, quantity + 1, self._note(group_id, option_id))

    def decrement(self, group_id: str, option_id: str) -> bool:
        quantity = self.get_quantity(group_id, option_id)
        if quantity <= 0:
            return False
        return self.set_option(group_id, option_id, quantity - 1, self._note(group_id, option_id))

    def clear_group(self, group_id: str) -> bool:
        if group_id not in self._selected:
            return False
        self._selected[group_id].clear()
        return True

    def _note(self, group_id: str, option_id: str) -> Optional[str]:
        selection = self._selected.get(group_id, {}).get(option_id)
        return selection.custom_note if selection else None

    def snapshot(self) -> dict[str, dict[str, dict[str, Any]]]:
        return {
            group_id: {option_id: selection.model_dump() for option_id, selection in options.items()}
            for group_id, options in self._selected.items()
            if options
        }

    def selected_addons(self) -> list[SelectedAddon]:
        """Selections in cart format, in group definition order, empty groups omitted."""
        result: list[SelectedAddon] = []
        for group in self._groups.values():
            options: list[SelectedAddonOption] = []
            for option_id, selection in self._selected[group.id].items():
                option = group.find_option(option_id)
                if option is None:
                    continue
                options.append(
                    SelectedAddonOption(
                        option_id=option.id,
                        quantity=selection.quantity,
                        custom_note=selection.custom_note,
                        total_price=option_total_price(option, selection.quantity),
                    )
                )
            if options:
                result.append(
                    SelectedAddon(
                        group_id=group.id,
                        group_name=group.name,
                        group_type=group.type,
                        options=options,
                    )
                )
        return result
