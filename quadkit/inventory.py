"""Equipment slots and an inventory, changed through fitting commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

__all__ = ["Slot", "Unfit", "Fit", "Refit", "FittingCommand", "Inventory", "DEFAULT_SLOT_LABELS"]

DEFAULT_SLOT_LABELS = (
    "Left Mouse Button",
    "Right Mouse Button",
    "Middle Mouse Button",
    "Space",
    '"1"',
    '"2"',
    '"3"',
)


@dataclass
class Slot:
    """An equipment slot that holds at most one item."""

    id: int
    item: Optional[str] = None


@dataclass(frozen=True)
class Unfit:
    """Remove the item from a slot."""

    target_slot: int


@dataclass(frozen=True)
class Fit:
    """Put an item from the inventory into a slot."""

    target_slot: int
    item: str


@dataclass(frozen=True)
class Refit:
    """Move the item from one slot to another."""

    target_slot: int
    origin_slot: int


FittingCommand = Union[Unfit, Fit, Refit]


@dataclass
class Inventory:
    """Bought items plus labelled equipment slots."""

    SHOP_SIZE = 30

    slot_labels: Sequence[str] = DEFAULT_SLOT_LABELS
    items: list[str] = field(default_factory=list)
    slots: list[tuple[str, Slot]] = field(init=False)

    def __post_init__(self) -> None:
        self.slots = [(label, Slot(index + 1)) for index, label in enumerate(self.slot_labels)]

    def _find(self, slot_id: int) -> Optional[Slot]:
        return next((slot for _, slot in self.slots if slot.id == slot_id), None)

    def buy(self, index: int) -> str:
        """Buy shop item number index and add it to the inventory."""
        if not 0 <= index < self.SHOP_SIZE:
            raise IndexError(f"shop has no item {index}")
        item = f"Item {index}"
        self.items.append(item)
        return item

    def set_item(self, slot_id: int, item: Optional[str]) -> None:
        """Put item (or nothing) into the slot; unknown slots are ignored."""
        slot = self._find(slot_id)
        if slot is not None:
            slot.item = item

    def apply(self, command: FittingCommand) -> None:
        """Carry out a fitting command."""
        if isinstance(command, Unfit):
            self.set_item(command.target_slot, None)
        elif isinstance(command, Fit):
            self.set_item(command.target_slot, command.item)
        elif isinstance(command, Refit):
            origin = self._find(command.origin_slot)
            origin_item = origin.item if origin is not None else None
            self.set_item(command.target_slot, origin_item)
            self.set_item(command.origin_slot, None)
        else:
            raise TypeError(f"not a fitting command: {command!r}")