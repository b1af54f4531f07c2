"""Board layout: rows of slots with their contents and drop affordances."""

from typing import Any, Dict, List, Optional

from framework_builder.core.document import Document
from framework_builder.core.placement import DragSession


def compute_board_layout(
    document: Document,
    session: Optional[DragSession] = None,
    label_defaults: Optional[Dict[str, str]] = None,
) -> List[Dict[str, Any]]:
    """Compute board rows for a document.

    Returns a list of dicts with keys: key, label, slots. Each slot dict has
    keys: key, accepts, placeholder, item_id, text, is_empty,
    is_valid_target, is_dimmed.

    While a drag session for this document is open, slots that would reject
    the dragged item are dimmed. A session for another document is ignored.
    """
    template = document.template
    placements = document.placements
    active_session = session if session is not None and session.document_id == document.id else None

    rows: List[Dict[str, Any]] = []
    for row in template.rows:
        label = row.title
        if row.label_key is not None:
            label = document.label(row.label_key, label_defaults)

        slots = []
        for slot in template.slots_in_row(row.key):
            placement = placements.get(slot.key)
            valid = placements.is_valid_target(slot.key, active_session)
            slots.append(
                {
                    "key": slot.key,
                    "accepts": slot.accepts,
                    "placeholder": slot.placeholder,
                    "item_id": placement.item_id if placement else None,
                    "text": placements.resolve_text(slot.key, document.items),
                    "is_empty": placement is None,
                    "is_valid_target": valid,
                    "is_dimmed": active_session is not None and not valid,
                }
            )
        rows.append({"key": row.key, "label": label, "slots": slots})
    return rows
