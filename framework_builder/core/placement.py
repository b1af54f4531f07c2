"""
Slot occupancy for a single document and the drag session that feeds it.

A placement references its item by id only. The text shown in a slot is
looked up in the document's ItemStore when it is read, so editing an item
never leaves a stale copy on the board.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from framework_builder.core.items import Item, ItemStore
from framework_builder.core.template import BVF_TEMPLATE, Category, DiagramTemplate, Slot
from framework_builder.errors import (
    CategoryMismatchError,
    ItemAlreadyPlacedError,
    SlotNotFoundError,
)


@dataclass(frozen=True)
class Placement:
    """An item assigned to a slot."""

    slot_key: str
    item_id: str
    category: Category

    def to_dict(self) -> Dict[str, str]:
        return {
            "slot_key": self.slot_key,
            "item_id": self.item_id,
            "category": self.category.value,
        }


@dataclass(frozen=True)
class DragSession:
    """An in-progress move of one unplaced item toward a slot.

    Holds a snapshot taken at drag start. ``text`` is for display only; a
    drop places the item by ``item_id``.
    """

    document_id: str
    item_id: str
    category: Category
    text: str = ""

    @classmethod
    def for_item(cls, document_id: str, item: Item) -> "DragSession":
        return cls(
            document_id=document_id,
            item_id=item.id,
            category=item.category,
            text=item.text,
        )


@dataclass
class PlacementMap:
    """slot key -> Placement for one document.

    Enforces that an item occupies at most one slot and that every entry's
    category is accepted by its slot.
    """

    template: DiagramTemplate = BVF_TEMPLATE
    entries: Dict[str, Placement] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Placement]:
        return iter(list(self.entries.values()))

    def __contains__(self, slot_key: object) -> bool:
        return slot_key in self.entries

    def get(self, slot_key: str) -> Optional[Placement]:
        return self.entries.get(slot_key)

    def slot_of(self, item_id: str) -> Optional[str]:
        """Return the key of the slot holding the item, if any."""
        for slot_key, placement in self.entries.items():
            if placement.item_id == item_id:
                return slot_key
        return None

    def is_placed(self, item_id: str) -> bool:
        return self.slot_of(item_id) is not None

    def require_slot(self, slot_key: str) -> Slot:
        slot = self.template.slot(slot_key)
        if slot is None:
            raise SlotNotFoundError(f"Slot '{slot_key}' is not part of '{self.template.name}'")
        return slot

    def check_drop(
        self, slot_key: str, category: Category, expected_category: Optional[Category] = None
    ) -> Slot:
        """Validate a drop of ``category`` onto ``slot_key`` without mutating.

        Raises
        ------
        SlotNotFoundError
            If the slot is not declared by the template.
        CategoryMismatchError
            If the slot, or the caller's expected category, rejects it.
        """
        slot = self.require_slot(slot_key)
        if not slot.accepts_category(category):
            raise CategoryMismatchError(slot_key, slot.accepts, category)
        if expected_category is not None and expected_category != category:
            raise CategoryMismatchError(slot_key, expected_category, category)
        return slot

    def place(
        self,
        slot_key: str,
        item: Item,
        expected_category: Optional[Category] = None,
    ) -> Placement:
        """Put ``item`` in ``slot_key``, replacing any prior occupant.

        If the item sits in another slot it is moved, keeping at most one
        placement per item. Placing an item on its own slot is a no-op
        overwrite.
        """
        self.check_drop(slot_key, item.category, expected_category)
        current = self.slot_of(item.id)
        if current is not None and current != slot_key:
            del self.entries[current]
        placement = Placement(slot_key=slot_key, item_id=item.id, category=item.category)
        self.entries[slot_key] = placement
        return placement

    def drop(
        self,
        session: DragSession,
        slot_key: str,
        store: ItemStore,
        expected_category: Optional[Category] = None,
    ) -> Optional[Placement]:
        """Resolve a drag session onto a slot.

        Returns None when the dragged item no longer exists in ``store``.
        Validation failures raise before anything changes.
        """
        self.check_drop(slot_key, session.category, expected_category)
        item = store.find(session.category, session.item_id)
        if item is None:
            return None
        return self.place(slot_key, item, expected_category)

    def clear(self, slot_key: str) -> Optional[Placement]:
        """Empty a slot. Returns the removed placement, or None if it was empty."""
        return self.entries.pop(slot_key, None)

    def clear_item(self, item_id: str) -> Optional[Placement]:
        """Empty whichever slot holds the item."""
        slot_key = self.slot_of(item_id)
        if slot_key is None:
            return None
        return self.entries.pop(slot_key)

    def reset(self) -> int:
        """Remove every placement and return how many there were."""
        count = len(self.entries)
        self.entries.clear()
        return count

    def resolve_text(self, slot_key: str, store: ItemStore) -> Optional[str]:
        """Current text of the item in a slot, or None for an empty slot."""
        placement = self.entries.get(slot_key)
        if placement is None:
            return None
        item = store.find(placement.category, placement.item_id)
        return item.text if item is not None else None

    def is_valid_target(self, slot_key: str, session: Optional[DragSession]) -> bool:
        """Whether the slot would accept the item being dragged."""
        if session is None:
            return False
        slot = self.template.slot(slot_key)
        return slot is not None and slot.accepts_category(session.category)

    def ensure_draggable(self, item_id: str, session: Optional[DragSession] = None) -> None:
        """Raise if the item is placed or already being dragged."""
        slot_key = self.slot_of(item_id)
        if slot_key is not None:
            raise ItemAlreadyPlacedError(f"Item '{item_id}' is already placed in '{slot_key}'")
        if session is not None and session.item_id == item_id:
            raise ItemAlreadyPlacedError(f"Item '{item_id}' is already being dragged")

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {slot_key: p.to_dict() for slot_key, p in self.entries.items()}
