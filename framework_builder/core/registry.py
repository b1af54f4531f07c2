"""
Document registry: the ordered collection of frameworks and the active one.

The registry never becomes empty. Deleting the last document is refused, and
deleting the active document promotes the first remaining one.
"""

from typing import Iterator, List, Optional

from framework_builder.core.document import Document
from framework_builder.core.template import BVF_TEMPLATE, DiagramTemplate
from framework_builder.errors import DocumentNotFoundError, LastDocumentError, ValidationError
from framework_builder.utils.log import get_logger

logger = get_logger("registry")


class DocumentRegistry:
    """Ordered documents plus the active-document pointer.

    Parameters
    ----------
    initial_name : str
        Name of the document the registry starts with.
    template : DiagramTemplate
        Template every document in this registry is built on.
    """

    def __init__(self, initial_name: str, template: DiagramTemplate = BVF_TEMPLATE) -> None:
        self.template = template
        first = self._new_document(initial_name)
        self._documents: List[Document] = [first]
        self._active_id = first.id

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(list(self._documents))

    def __contains__(self, document_id: object) -> bool:
        return self.get(document_id) is not None  # type: ignore[arg-type]

    @property
    def documents(self) -> List[Document]:
        """Documents in collection order."""
        return list(self._documents)

    @property
    def active_id(self) -> str:
        return self._active_id

    @property
    def active(self) -> Document:
        return self.require(self._active_id)

    def get(self, document_id: str) -> Optional[Document]:
        for doc in self._documents:
            if doc.id == document_id:
                return doc
        return None

    def require(self, document_id: Optional[str] = None) -> Document:
        """Return the document, defaulting to the active one.

        Raises
        ------
        DocumentNotFoundError
            If no document has the given id.
        """
        target = self._active_id if document_id is None else document_id
        doc = self.get(target)
        if doc is None:
            raise DocumentNotFoundError(f"Document '{target}' not found")
        return doc

    def create(self, name: str) -> Document:
        """Add a new empty document and make it active."""
        doc = self._new_document(name)
        self._documents.append(doc)
        self._active_id = doc.id
        logger.debug("Created document %s (%r)", doc.id, doc.name)
        return doc

    def delete(self, document_id: str) -> Document:
        """Remove a document; the first remaining one becomes active if needed."""
        doc = self.require(document_id)
        if len(self._documents) == 1:
            logger.warning("Refused to delete %s: it is the last document", document_id)
            raise LastDocumentError("You must have at least one framework.")
        self._documents.remove(doc)
        if self._active_id == document_id:
            self._active_id = self._documents[0].id
        logger.debug("Deleted document %s; active is %s", document_id, self._active_id)
        return doc

    def set_active(self, document_id: str) -> Document:
        doc = self.require(document_id)
        self._active_id = doc.id
        return doc

    def rename(self, document_id: str, name: str) -> Document:
        doc = self.require(document_id)
        doc.name = name
        return doc

    def set_custom_label(self, document_id: str, key: str, value: str) -> Document:
        doc = self.require(document_id)
        doc.custom_labels[key] = value
        doc.touch()
        return doc

    def set_financial_text(self, document_id: str, key: str, value: str) -> Document:
        doc = self.require(document_id)
        if key not in self.template.financial_keys:
            raise ValidationError(
                f"Unknown financial field '{key}'; expected one of {list(self.template.financial_keys)}"
            )
        doc.financial_text[key] = value
        doc.touch()
        return doc

    def touch(self, document_id: str) -> Document:
        doc = self.require(document_id)
        doc.touch()
        return doc

    def _new_document(self, name: str) -> Document:
        if not name or not name.strip():
            raise ValidationError("Document name is required")
        return Document(name=name, template=self.template)
