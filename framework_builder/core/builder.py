"""FrameworkBuilder — editing context for a set of framework documents."""

import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from framework_builder.config import BuilderConfig
from framework_builder.core.board_view import BoardView
from framework_builder.core.document import Document, compose_document_name, default_document_name
from framework_builder.core.items import Item
from framework_builder.core.placement import DragSession, Placement
from framework_builder.core.registry import DocumentRegistry
from framework_builder.core.template import BVF_TEMPLATE, Category, DiagramTemplate
from framework_builder.errors import (
    CategoryMismatchError,
    ConfirmationError,
    DocumentNotFoundError,
    InactiveDocumentError,
    ItemNotFoundError,
    LastDocumentError,
    NoDragSessionError,
    ValidationError,
)
from framework_builder.layouts.pool import compute_pool_layout
from framework_builder.utils.log import configure_logging, get_logger

logger = get_logger("builder")

CategoryLike = Union[Category, str]

DELETE_DOCUMENT = "delete_document"
RESET_LAYOUT = "reset_layout"


@dataclass(frozen=True)
class PendingConfirmation:
    """A destructive action waiting for the user's answer."""

    token: str
    action: str
    document_id: str


class FrameworkBuilder:
    """Stateful editor for Business Value Framework documents.

    FrameworkBuilder provides:
    - A registry of documents with one active document
    - Item pools per category, with edits and deletions kept consistent
      with the board
    - Drag-and-drop placement of items into typed slots
    - Two-phase confirmation for document deletion and layout reset
    - HTML rendering of the active board in Jupyter

    Every item and placement operation targets the active document unless a
    ``document_id`` is given. Rejected operations raise before changing
    anything.

    Parameters
    ----------
    config : BuilderConfig, optional
        Naming, label and logging settings. The log level is only applied
        when a config is given.
    template : DiagramTemplate
        Slot set shared by all documents.

    Examples
    --------
    >>> builder = FrameworkBuilder()
    >>> doc = builder.create_document("BVF - Acme - October 2026")
    >>> item = builder.add_item(Category.PILLAR)
    >>> item = builder.update_item(Category.PILLAR, item.id, "Grow revenue")
    >>> session = builder.begin_drag(Category.PILLAR, item.id)
    >>> placement = builder.drop("pillar-2")
    >>> builder.slot_text("pillar-2")
    'Grow revenue'
    """

    def __init__(
        self,
        config: Optional[BuilderConfig] = None,
        template: DiagramTemplate = BVF_TEMPLATE,
    ) -> None:
        if config is not None:
            configure_logging(config.log_level)
        self.config = config or BuilderConfig()
        self.template = template
        self.label_defaults = {**template.label_defaults, **self.config.label_defaults}
        self.registry = DocumentRegistry(
            default_document_name(self.config.name_prefix, self.config.default_account),
            template=template,
        )
        self._drag: Optional[DragSession] = None
        self._pending: Dict[str, PendingConfirmation] = {}
        self._uid = uuid.uuid4().hex[:12]

    # Document registry

    @property
    def documents(self) -> List[Document]:
        return self.registry.documents

    @property
    def active_document(self) -> Document:
        return self.registry.active

    @property
    def active_id(self) -> str:
        return self.registry.active_id

    def document(self, document_id: Optional[str] = None) -> Document:
        """Return a document by id, defaulting to the active one."""
        return self.registry.require(document_id)

    def compose_name(self, account: str, date_str: str) -> str:
        return compose_document_name(account, date_str, prefix=self.config.name_prefix)

    def create_document(self, name: str) -> Document:
        """Create an empty document and switch to it.

        Raises
        ------
        ValidationError
            If ``name`` is blank.
        """
        doc = self.registry.create(name)
        self._invalidate_drag(keep_document=doc.id)
        return doc

    def delete_document(self, document_id: str) -> Document:
        """Delete a document immediately.

        Callers that need user confirmation should use
        :meth:`request_delete_document` and :meth:`confirm`.

        Raises
        ------
        LastDocumentError
            If it is the only document.
        DocumentNotFoundError
            If no document has the id.
        """
        doc = self.registry.delete(document_id)
        if self._drag is not None and self._drag.document_id == document_id:
            self._drag = None
        self._drop_pending_for(document_id)
        return doc

    def set_active_document(self, document_id: str) -> Document:
        """Switch the active document. An open drag session is cancelled."""
        doc = self.registry.set_active(document_id)
        self._invalidate_drag(keep_document=doc.id)
        return doc

    def rename_document(self, name: str, document_id: Optional[str] = None) -> Document:
        return self.registry.rename(self._doc_id(document_id), name)

    def set_custom_label(self, key: str, value: str, document_id: Optional[str] = None) -> Document:
        return self.registry.set_custom_label(self._doc_id(document_id), key, value)

    def set_financial_text(
        self, key: str, value: str, document_id: Optional[str] = None
    ) -> Document:
        return self.registry.set_financial_text(self._doc_id(document_id), key, value)

    def touch(self, document_id: Optional[str] = None) -> Document:
        return self.registry.touch(self._doc_id(document_id))

    def label(self, key: str, document_id: Optional[str] = None) -> str:
        """Row caption for ``key``: the custom label or the default."""
        return self.document(document_id).label(key, self.label_defaults)

    # Item store

    def add_item(self, category: CategoryLike, document_id: Optional[str] = None) -> Item:
        """Append an empty item to a category pool."""
        doc = self.document(document_id)
        item = doc.items.add(_category(category))
        doc.touch()
        logger.debug("Added %s to %s", item.id, doc.id)
        return item

    def update_item(
        self,
        category: CategoryLike,
        item_id: str,
        text: str,
        document_id: Optional[str] = None,
    ) -> Optional[Item]:
        """Replace an item's text.

        The board reads placed text from the pool, so a placed item shows the
        new text immediately. Unknown item ids are ignored.
        """
        doc = self.document(document_id)
        item = doc.items.update(_category(category), item_id, text)
        if item is None:
            logger.debug("Ignored edit of missing item %s in %s", item_id, doc.id)
            return None
        doc.touch()
        return item

    def remove_item(
        self, category: CategoryLike, item_id: str, document_id: Optional[str] = None
    ) -> Optional[Item]:
        """Delete an item, emptying its slot and cancelling a drag of it."""
        doc = self.document(document_id)
        item = doc.items.remove(_category(category), item_id)
        if item is None:
            logger.debug("Ignored removal of missing item %s in %s", item_id, doc.id)
            return None
        cleared = doc.placements.clear_item(item_id)
        if self._drag is not None and self._drag.item_id == item_id:
            self._drag = None
        doc.touch()
        if cleared is not None:
            logger.debug("Removed %s and cleared slot %s", item_id, cleared.slot_key)
        return item

    def pool(self, category: CategoryLike, document_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """Items of one category with their ``placed`` and ``draggable`` flags."""
        cat = _category(category)
        sections = compute_pool_layout(self.document(document_id), self._drag)
        for section in sections:
            if section["category"] == cat:
                return section["items"]
        return []

    # Placement and drag session

    @property
    def drag_session(self) -> Optional[DragSession]:
        return self._drag

    def is_placed(self, item_id: str, document_id: Optional[str] = None) -> bool:
        return self.document(document_id).placements.is_placed(item_id)

    def slot_text(self, slot_key: str, document_id: Optional[str] = None) -> Optional[str]:
        return self.document(document_id).slot_text(slot_key)

    def placement(self, slot_key: str, document_id: Optional[str] = None) -> Optional[Placement]:
        return self.document(document_id).placements.get(slot_key)

    def is_valid_target(self, slot_key: str) -> bool:
        """Whether the slot on the active board accepts the dragged item."""
        if self._drag is None or self._drag.document_id != self.registry.active_id:
            return False
        return self.active_document.placements.is_valid_target(slot_key, self._drag)

    def begin_drag(
        self, category: CategoryLike, item_id: str, document_id: Optional[str] = None
    ) -> Optional[DragSession]:
        """Start dragging an unplaced item.

        Replaces any open session for a different item. Returns None when
        the item does not exist.

        Raises
        ------
        ItemAlreadyPlacedError
            If the item is on the board or already being dragged.
        InactiveDocumentError
            If ``document_id`` names a document other than the active one.
        """
        doc = self.document(document_id)
        if doc.id != self.registry.active_id:
            raise InactiveDocumentError(f"Cannot drag from inactive document '{doc.id}'")
        item = doc.items.find(_category(category), item_id)
        if item is None:
            logger.debug("Ignored drag of missing item %s in %s", item_id, doc.id)
            return None
        doc.placements.ensure_draggable(item_id, self._drag)
        self._drag = DragSession.for_item(doc.id, item)
        return self._drag

    def drop(self, slot_key: str, expected_category: Optional[CategoryLike] = None) -> Placement:
        """Place the dragged item in a slot and close the session.

        Any prior occupant of the slot returns to the unplaced pool. On a
        category mismatch nothing changes and the session stays open.

        Raises
        ------
        NoDragSessionError
            If nothing is being dragged.
        SlotNotFoundError
            If the slot is not on the template.
        CategoryMismatchError
            If the slot does not accept the dragged item's category.
        ItemNotFoundError
            If the dragged item was deleted; the session is closed.
        InactiveDocumentError
            If the session belongs to a document that is no longer active;
            the session is closed.
        """
        session = self._drag
        if session is None:
            raise NoDragSessionError("No item is being dragged")
        doc = self.registry.get(session.document_id)
        if doc is None:
            self._drag = None
            raise DocumentNotFoundError(f"Document '{session.document_id}' not found")
        if doc.id != self.registry.active_id:
            self._drag = None
            raise InactiveDocumentError(f"Drag session belongs to inactive document '{doc.id}'")

        expected = _category(expected_category) if expected_category is not None else None
        try:
            placement = doc.placements.drop(session, slot_key, doc.items, expected)
        except CategoryMismatchError as exc:
            logger.info("Rejected drop on %s: %s", slot_key, exc)
            raise
        if placement is None:
            self._drag = None
            raise ItemNotFoundError(f"Item '{session.item_id}' no longer exists")

        self._drag = None
        doc.touch()
        logger.debug("Placed %s in %s of %s", placement.item_id, slot_key, doc.id)
        return placement

    def cancel_drag(self) -> None:
        self._drag = None

    def clear_slot(self, slot_key: str, document_id: Optional[str] = None) -> bool:
        """Empty a slot. Returns False if it was already empty."""
        doc = self.document(document_id)
        if doc.placements.clear(slot_key) is None:
            return False
        doc.touch()
        return True

    def reset_layout(self, document_id: Optional[str] = None) -> int:
        """Empty every slot of a document and return how many were cleared."""
        doc = self.document(document_id)
        count = doc.placements.reset()
        doc.touch()
        logger.debug("Reset layout of %s (%d placements)", doc.id, count)
        return count

    # Confirmations

    @property
    def pending_confirmations(self) -> List[PendingConfirmation]:
        return list(self._pending.values())

    def request_delete_document(self, document_id: str) -> str:
        """Ask to delete a document; returns a token for :meth:`confirm`.

        Raises
        ------
        LastDocumentError
            If it is the only document, before any prompt is shown.
        """
        doc = self.document(document_id)
        if len(self.registry) == 1:
            logger.warning("Refused delete request for %s: it is the last document", doc.id)
            raise LastDocumentError("You must have at least one framework.")
        return self._request(DELETE_DOCUMENT, doc.id)

    def request_reset_layout(self, document_id: Optional[str] = None) -> str:
        """Ask to clear a document's layout; returns a token for :meth:`confirm`."""
        return self._request(RESET_LAYOUT, self.document(document_id).id)

    def confirm(self, token: str) -> Any:
        """Carry out a pending action. Each token can be used once."""
        pending = self._pending.pop(token, None)
        if pending is None:
            raise ConfirmationError(f"Unknown or already used confirmation '{token}'")
        if pending.action == DELETE_DOCUMENT:
            return self.delete_document(pending.document_id)
        return self.reset_layout(pending.document_id)

    def discard(self, token: str) -> bool:
        """Drop a pending action the user declined."""
        return self._pending.pop(token, None) is not None

    # Rendering

    def _repr_html_(self) -> str:
        """Jupyter auto-display."""
        return self.to_html()

    def display(self) -> None:
        """Display in IPython/Jupyter."""
        from IPython.display import HTML
        from IPython.display import display as ipy_display

        ipy_display(HTML(self.to_html()))

    def to_html(self) -> str:
        """Generate the board HTML for the active document."""
        return BoardView(self, uid=self._uid).to_html()

    # Internals

    def _doc_id(self, document_id: Optional[str]) -> str:
        return self.registry.active_id if document_id is None else document_id

    def _invalidate_drag(self, keep_document: str) -> None:
        if self._drag is not None and self._drag.document_id != keep_document:
            logger.debug("Cancelled drag of %s", self._drag.item_id)
            self._drag = None

    def _request(self, action: str, document_id: str) -> str:
        token = uuid.uuid4().hex
        self._pending[token] = PendingConfirmation(token, action, document_id)
        return token

    def _drop_pending_for(self, document_id: str) -> None:
        for token in [t for t, p in self._pending.items() if p.document_id == document_id]:
            del self._pending[token]


def _category(value: CategoryLike) -> Category:
    if isinstance(value, Category):
        return value
    try:
        return Category(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown category '{value}'") from exc
