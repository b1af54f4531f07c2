"""
Framework Builder — assemble Business Value Framework diagrams from item pools.
"""

__version__ = "0.1.0"

from framework_builder.config import BuilderConfig, load_config
from framework_builder.core.board_view import BoardView
from framework_builder.core.builder import FrameworkBuilder, PendingConfirmation
from framework_builder.core.document import Document
from framework_builder.core.items import Item
from framework_builder.core.placement import DragSession, Placement
from framework_builder.core.template import BVF_TEMPLATE, Category, DiagramTemplate, Slot
from framework_builder.errors import (
    CategoryMismatchError,
    ConfirmationError,
    FrameworkBuilderError,
    InactiveDocumentError,
    ItemAlreadyPlacedError,
    LastDocumentError,
    NoDragSessionError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "BVF_TEMPLATE",
    "BoardView",
    "BuilderConfig",
    "Category",
    "CategoryMismatchError",
    "ConfirmationError",
    "DiagramTemplate",
    "Document",
    "DragSession",
    "FrameworkBuilder",
    "FrameworkBuilderError",
    "InactiveDocumentError",
    "Item",
    "ItemAlreadyPlacedError",
    "LastDocumentError",
    "NoDragSessionError",
    "NotFoundError",
    "PendingConfirmation",
    "Placement",
    "Slot",
    "ValidationError",
    "load_config",
    "__version__",
]
