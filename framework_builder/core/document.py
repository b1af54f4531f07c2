"""Framework documents and their naming helpers."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from framework_builder.core.items import ItemStore
from framework_builder.core.placement import PlacementMap
from framework_builder.core.template import BVF_TEMPLATE, DiagramTemplate
from framework_builder.errors import ValidationError

DEFAULT_NAME_PREFIX = "BVF"
DEFAULT_ACCOUNT = "Account"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def new_document_id() -> str:
    return f"doc-{uuid.uuid4().hex[:12]}"


def current_date_string(when: Optional[datetime] = None) -> str:
    """Month and year, e.g. ``"October 2026"``."""
    when = when or datetime.now()
    return f"{when.strftime('%B')} {when.year}"


def compose_document_name(account: str, date_str: str, prefix: str = DEFAULT_NAME_PREFIX) -> str:
    """Build a framework name the way the creation dialog does.

    Raises
    ------
    ValidationError
        If either the account or the date part is blank.
    """
    if not account.strip():
        raise ValidationError("Account name is required")
    if not date_str.strip():
        raise ValidationError("Date is required")
    return f"{prefix} - {account} - {date_str}"


def default_document_name(
    prefix: str = DEFAULT_NAME_PREFIX,
    account: str = DEFAULT_ACCOUNT,
    when: Optional[datetime] = None,
) -> str:
    return compose_document_name(account, current_date_string(when), prefix=prefix)


@dataclass
class Document:
    """One independently editable framework.

    Parameters
    ----------
    name : str
        Display name, e.g. ``"BVF - Acme - October 2026"``.
    template : DiagramTemplate
        Slot set the placements are checked against.
    id : str
        Unique document id.
    custom_labels : Dict[str, str]
        Per-document overrides for row captions. Missing or empty values
        fall back to the template defaults.
    financial_text : Dict[str, str]
        Free text for the financial summary boxes.
    """

    name: str
    template: DiagramTemplate = BVF_TEMPLATE
    id: str = field(default_factory=new_document_id)
    created_at: datetime = field(default_factory=_now)
    last_modified: datetime = field(default_factory=_now)
    items: ItemStore = field(default_factory=ItemStore)
    placements: PlacementMap = field(init=False)
    custom_labels: Dict[str, str] = field(default_factory=dict)
    financial_text: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.placements = PlacementMap(template=self.template)
        for key in self.template.financial_keys:
            self.financial_text.setdefault(key, "")

    def touch(self) -> None:
        self.last_modified = _now()

    def label(self, key: str, defaults: Optional[Dict[str, str]] = None) -> str:
        """Custom label for ``key``, falling back to the default caption."""
        custom = self.custom_labels.get(key)
        if custom:
            return custom
        fallback = defaults if defaults is not None else self.template.label_defaults
        return fallback.get(key, key)

    def slot_text(self, slot_key: str) -> Optional[str]:
        return self.placements.resolve_text(slot_key, self.items)

    def to_dict(self) -> Dict[str, Any]:
        """Read-only snapshot for rendering collaborators."""
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at.isoformat(),
            "last_modified": self.last_modified.isoformat(),
            "items": self.items.to_dict(),
            "placements": self.placements.to_dict(),
            "custom_labels": dict(self.custom_labels),
            "financial_text": dict(self.financial_text),
        }
