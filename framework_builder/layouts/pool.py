"""Pool layout: the draggable tile list, one section per category."""

from typing import Any, Dict, List, Optional

from framework_builder.core.document import Document
from framework_builder.core.placement import DragSession
from framework_builder.core.template import Category
from framework_builder.styles.colors import POOL_TITLES


def compute_pool_layout(
    document: Document, session: Optional[DragSession] = None
) -> List[Dict[str, Any]]:
    """Compute pool sections for a document.

    Returns a list of dicts with keys: category, title, items. Each item dict
    has keys: id, text, placed, dragging, draggable. Sections follow the
    category order and items keep their insertion order.

    An item is draggable only when it is not on the board and is not the
    item of the open drag session.
    """
    dragging_id = None
    if session is not None and session.document_id == document.id:
        dragging_id = session.item_id

    sections: List[Dict[str, Any]] = []
    for category in Category:
        items = []
        for item in document.items.items(category):
            placed = document.placements.is_placed(item.id)
            dragging = item.id == dragging_id
            items.append(
                {
                    "id": item.id,
                    "text": item.text,
                    "placed": placed,
                    "dragging": dragging,
                    "draggable": not placed and not dragging,
                }
            )
        sections.append(
            {
                "category": category,
                "title": POOL_TITLES[category],
                "items": items,
            }
        )
    return sections
