"""Exceptions raised by the framework builder core.

Every error is raised before any state is mutated, so callers can catch it,
show a notice and keep editing.
"""

from typing import Optional


class FrameworkBuilderError(Exception):
    """Base error for the package."""


class ValidationError(FrameworkBuilderError, ValueError):
    """A required field is empty or a value is outside its allowed set."""


class ConfigError(FrameworkBuilderError):
    """Configuration file could not be read or failed validation."""


class NotFoundError(FrameworkBuilderError, KeyError):
    """An operation referenced an id that does not exist."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class DocumentNotFoundError(NotFoundError):
    """No document with the given id."""


class ItemNotFoundError(NotFoundError):
    """No item with the given id in the target document."""


class SlotNotFoundError(NotFoundError):
    """The slot key is not part of the diagram template."""


class InvariantViolation(FrameworkBuilderError):
    """The requested placement would break a placement invariant."""


class ItemAlreadyPlacedError(InvariantViolation):
    """The item already occupies a slot or is being dragged."""


class NoDragSessionError(InvariantViolation):
    """A drop was attempted without an open drag session."""


class InactiveDocumentError(InvariantViolation):
    """Drag and drop only operate on the active document."""


class CategoryMismatchError(InvariantViolation):
    """The dragged item's category is not accepted by the target slot."""

    def __init__(self, slot_key: str, expected: object, actual: object) -> None:
        self.slot_key = slot_key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Slot '{slot_key}' only accepts {_label(expected)} items, got {_label(actual)}"
        )


class GuardedDestructionError(FrameworkBuilderError):
    """A destructive operation was refused to protect required state."""


class LastDocumentError(GuardedDestructionError):
    """The last remaining document cannot be deleted."""


class ConfirmationError(FrameworkBuilderError):
    """The confirmation token is unknown or was already used."""


def _label(value: Optional[object]) -> str:
    return getattr(value, "value", str(value))
