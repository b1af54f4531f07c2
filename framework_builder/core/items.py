"""
Category-partitioned pools of free-text items.

Each document owns one ItemStore. Items keep their insertion order within a
category, which is the order they are listed in the pool panels.
"""

import uuid
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from framework_builder.core.template import Category


def new_item_id(category: Category) -> str:
    return f"{category.value}-{uuid.uuid4().hex[:12]}"


@dataclass
class Item:
    """A single text item in a category pool.

    Attributes
    ----------
    id : str
        Unique identifier within the document.
    category : Category
        The pool the item belongs to.
    text : str
        Free text, empty when the item is first added.
    """

    id: str
    category: Category
    text: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "category": self.category.value, "text": self.text}


@dataclass
class ItemStore:
    """Ordered item pools, one per category.

    Lookups by an id that is not present return None instead of raising, so
    an edit racing a deletion is a no-op.
    """

    pools: Dict[Category, List[Item]] = field(
        default_factory=lambda: {category: [] for category in Category}
    )

    def __post_init__(self) -> None:
        for category in Category:
            self.pools.setdefault(category, [])

    def __contains__(self, item_id: object) -> bool:
        return self.get(item_id) is not None  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[Item]:
        return iter(self.all_items())

    def __len__(self) -> int:
        return sum(len(pool) for pool in self.pools.values())

    def items(self, category: Category) -> List[Item]:
        """Return a copy of the category's items in insertion order."""
        return list(self.pools[category])

    def all_items(self) -> List[Item]:
        """Return every item, grouped by category in enum order."""
        return [item for category in Category for item in self.pools[category]]

    def get(self, item_id: str) -> Optional[Item]:
        for pool in self.pools.values():
            for item in pool:
                if item.id == item_id:
                    return item
        return None

    def find(self, category: Category, item_id: str) -> Optional[Item]:
        for item in self.pools[category]:
            if item.id == item_id:
                return item
        return None

    def add(self, category: Category) -> Item:
        """Append a new empty item to the category pool."""
        item = Item(id=new_item_id(category), category=category)
        self.pools[category].append(item)
        return item

    def update(self, category: Category, item_id: str, text: str) -> Optional[Item]:
        """Replace an item's text in place, keeping its id and position."""
        item = self.find(category, item_id)
        if item is None:
            return None
        item.text = text
        return item

    def remove(self, category: Category, item_id: str) -> Optional[Item]:
        """Delete an item from its pool and return it."""
        pool = self.pools[category]
        for idx, item in enumerate(pool):
            if item.id == item_id:
                return pool.pop(idx)
        return None

    def to_dict(self) -> Dict[str, List[Dict[str, str]]]:
        return {
            category.value: [item.to_dict() for item in self.pools[category]]
            for category in Category
        }
