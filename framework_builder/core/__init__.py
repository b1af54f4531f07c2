"""Core data model for framework documents, item pools and placements."""

from framework_builder.core.template import BVF_TEMPLATE, Category, DiagramTemplate, Row, Slot
from framework_builder.core.items import Item, ItemStore
from framework_builder.core.placement import DragSession, Placement, PlacementMap
from framework_builder.core.document import (
    Document,
    compose_document_name,
    default_document_name,
)
from framework_builder.core.registry import DocumentRegistry

__all__ = [
    "BVF_TEMPLATE",
    "Category",
    "DiagramTemplate",
    "Row",
    "Slot",
    "Item",
    "ItemStore",
    "DragSession",
    "Placement",
    "PlacementMap",
    "Document",
    "DocumentRegistry",
    "compose_document_name",
    "default_document_name",
]
