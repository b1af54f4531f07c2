"""Tests for FrameworkBuilder: item edits, drag-and-drop and document switching."""

from collections import Counter

import pytest

from framework_builder.config import BuilderConfig
from framework_builder.core.builder import FrameworkBuilder
from framework_builder.core.template import BVF_TEMPLATE, Category, DiagramTemplate, Row, Slot
from framework_builder.errors import (
    CategoryMismatchError,
    DocumentNotFoundError,
    InactiveDocumentError,
    ItemAlreadyPlacedError,
    LastDocumentError,
    NoDragSessionError,
    SlotNotFoundError,
    ValidationError,
)


def _make_builder():
    builder = FrameworkBuilder()
    builder.create_document("BVF - Acme - October 2026")
    return builder


def _add(builder, category, text, document_id=None):
    item = builder.add_item(category, document_id=document_id)
    builder.update_item(category, item.id, text, document_id=document_id)
    return item


def _place(builder, category, text, slot_key):
    item = _add(builder, category, text)
    builder.begin_drag(category, item.id)
    builder.drop(slot_key)
    return item


def _assert_invariants(builder):
    for doc in builder.documents:
        counts = Counter(p.item_id for p in doc.placements)
        assert all(n == 1 for n in counts.values())
        for placement in doc.placements:
            slot = doc.template.slot(placement.slot_key)
            assert slot.accepts is None or slot.accepts == placement.category


def test_builder_starts_with_default_document():
    """A new builder holds one document with the default name."""
    builder = FrameworkBuilder()
    assert len(builder.documents) == 1
    assert builder.active_document.name.startswith("BVF - Account - ")


def test_config_prefix_and_account_name_initial_document():
    """Config prefix and account shape the initial and composed names."""
    builder = FrameworkBuilder(config=BuilderConfig(name_prefix="VF", default_account="Client"))
    assert builder.active_document.name.startswith("VF - Client - ")
    assert builder.compose_name("Acme", "Q4") == "VF - Acme - Q4"


def test_acme_pillar_scenario():
    """Place, edit and remove a pillar; the board follows each step."""
    builder = _make_builder()
    item = _add(builder, Category.PILLAR, "Grow revenue")

    builder.begin_drag(Category.PILLAR, item.id)
    builder.drop("pillar-2")
    assert builder.slot_text("pillar-2") == "Grow revenue"
    assert builder.pool(Category.PILLAR)[0]["placed"] is True
    assert builder.drag_session is None

    with pytest.raises(ItemAlreadyPlacedError):
        builder.begin_drag(Category.PILLAR, item.id)
    assert builder.drag_session is None

    builder.update_item(Category.PILLAR, item.id, "Grow EBITDA")
    assert builder.slot_text("pillar-2") == "Grow EBITDA"

    builder.remove_item(Category.PILLAR, item.id)
    assert builder.slot_text("pillar-2") is None
    assert builder.placement("pillar-2") is None
    assert builder.pool(Category.PILLAR) == []
    _assert_invariants(builder)


def test_mismatched_drop_keeps_session_open():
    """A wrong-category drop changes nothing and keeps the drag open."""
    builder = _make_builder()
    kpi = _add(builder, Category.KPI, "Churn < 5%")
    session = builder.begin_drag(Category.KPI, kpi.id)

    with pytest.raises(CategoryMismatchError):
        builder.drop("pillar-1")
    assert builder.placement("pillar-1") is None
    assert builder.drag_session == session

    builder.drop("kpi-row1-1")
    assert builder.slot_text("kpi-row1-1") == "Churn < 5%"
    _assert_invariants(builder)


def test_expected_category_from_caller():
    """A caller-supplied category is checked on top of the slot's own."""
    builder = _make_builder()
    pillar = _add(builder, Category.PILLAR, "Grow")
    builder.begin_drag(Category.PILLAR, pillar.id)
    with pytest.raises(CategoryMismatchError):
        builder.drop("pillar-1", expected_category="kpi")
    assert builder.drag_session is not None
    builder.drop("pillar-1", expected_category="pillar")
    assert builder.is_placed(pillar.id)


def test_drop_on_unknown_slot_keeps_session():
    """Dropping on an unknown slot raises and keeps the drag open."""
    builder = _make_builder()
    pillar = _add(builder, Category.PILLAR, "Grow")
    builder.begin_drag(Category.PILLAR, pillar.id)
    with pytest.raises(SlotNotFoundError):
        builder.drop("pillar-42")
    assert builder.drag_session is not None


def test_drop_without_session():
    """Dropping with nothing dragged raises."""
    builder = _make_builder()
    with pytest.raises(NoDragSessionError):
        builder.drop("pillar-1")


def test_cancel_drag_changes_nothing():
    """Cancelling a drag leaves the board untouched and is repeatable."""
    builder = _make_builder()
    pillar = _add(builder, Category.PILLAR, "Grow")
    builder.begin_drag(Category.PILLAR, pillar.id)
    builder.cancel_drag()
    assert builder.drag_session is None
    assert len(builder.active_document.placements) == 0
    builder.cancel_drag()


def test_same_item_cannot_be_dragged_twice():
    """The item already being dragged cannot start a second drag."""
    builder = _make_builder()
    pillar = _add(builder, Category.PILLAR, "Grow")
    builder.begin_drag(Category.PILLAR, pillar.id)
    with pytest.raises(ItemAlreadyPlacedError):
        builder.begin_drag(Category.PILLAR, pillar.id)
    assert builder.drag_session.item_id == pillar.id


def test_new_drag_replaces_previous_session():
    """Dragging another item replaces the open session."""
    builder = _make_builder()
    first = _add(builder, Category.PILLAR, "One")
    second = _add(builder, Category.PILLAR, "Two")
    builder.begin_drag(Category.PILLAR, first.id)
    builder.begin_drag(Category.PILLAR, second.id)
    assert builder.drag_session.item_id == second.id


def test_drag_of_missing_item_is_noop():
    """Dragging an unknown item returns None and opens nothing."""
    builder = _make_builder()
    assert builder.begin_drag(Category.PILLAR, "pillar-missing") is None
    assert builder.drag_session is None


def test_drop_overwrites_occupant():
    """Dropping on a filled slot returns the old item to the pool."""
    builder = _make_builder()
    first = _place(builder, Category.PILLAR, "One", "pillar-1")
    second = _place(builder, Category.PILLAR, "Two", "pillar-1")
    assert builder.slot_text("pillar-1") == "Two"
    assert not builder.is_placed(first.id)
    assert builder.is_placed(second.id)
    # The displaced item can be dragged again.
    assert builder.begin_drag(Category.PILLAR, first.id) is not None


def test_clear_slot_is_idempotent():
    """Clearing a slot frees its item; clearing again reports False."""
    builder = _make_builder()
    item = _place(builder, Category.STRATEGY, "Expand", "strat-1")
    assert builder.clear_slot("strat-1") is True
    assert builder.clear_slot("strat-1") is False
    assert builder.placement("strat-1") is None
    assert builder.pool(Category.STRATEGY)[0]["draggable"] is True
    assert builder.begin_drag(Category.STRATEGY, item.id) is not None


def test_reset_layout_clears_only_target_document():
    """Reset empties one document's board and keeps its items."""
    builder = _make_builder()
    other = builder.active_id
    _place(builder, Category.PILLAR, "One", "pillar-1")
    _place(builder, Category.FUNCTIONAL, "HR", "func-3")
    builder.create_document("Second")
    _place(builder, Category.PILLAR, "Kept", "pillar-1")

    assert builder.reset_layout(document_id=other) == 2
    assert len(builder.document(other).placements) == 0
    assert builder.slot_text("pillar-1") == "Kept"
    # Items survive a layout reset.
    assert len(builder.document(other).items) == 2


def test_update_missing_item_is_noop():
    """Updating or removing an unknown item returns None."""
    builder = _make_builder()
    assert builder.update_item(Category.KPI, "kpi-missing", "x") is None
    assert builder.remove_item(Category.KPI, "kpi-missing") is None


def test_unknown_category_string_rejected():
    """An unknown category name raises ValidationError."""
    builder = _make_builder()
    with pytest.raises(ValidationError):
        builder.add_item("mission")


def test_category_strings_accepted():
    """Category values may be given as strings."""
    builder = _make_builder()
    item = builder.add_item("dxc_initiative")
    assert item.category == Category.DXC_INITIATIVE


def test_operations_on_unknown_document_rejected():
    """Operations on an unknown document id raise DocumentNotFoundError."""
    builder = _make_builder()
    with pytest.raises(DocumentNotFoundError):
        builder.add_item(Category.KPI, document_id="doc-missing")
    with pytest.raises(DocumentNotFoundError):
        builder.clear_slot("pillar-1", document_id="doc-missing")
    with pytest.raises(DocumentNotFoundError):
        builder.set_active_document("doc-missing")


def test_removing_dragged_item_cancels_session():
    """Removing the dragged item closes the session."""
    builder = _make_builder()
    item = _add(builder, Category.KPI, "NPS")
    builder.begin_drag(Category.KPI, item.id)
    builder.remove_item(Category.KPI, item.id)
    assert builder.drag_session is None
    with pytest.raises(NoDragSessionError):
        builder.drop("kpi-row1-1")


def test_editing_dragged_item_places_current_text():
    """Text edited mid-drag is what the slot shows."""
    builder = _make_builder()
    item = _add(builder, Category.KPI, "NPS")
    builder.begin_drag(Category.KPI, item.id)
    builder.update_item(Category.KPI, item.id, "NPS > 60")
    builder.drop("kpi-row3-4")
    assert builder.slot_text("kpi-row3-4") == "NPS > 60"


def test_switching_document_cancels_drag():
    """Switching documents cancels the drag without placing anything."""
    builder = _make_builder()
    first = builder.active_id
    item = _add(builder, Category.PILLAR, "Grow")
    second = builder.create_document("Second").id
    builder.set_active_document(first)
    builder.begin_drag(Category.PILLAR, item.id)

    builder.set_active_document(second)
    assert builder.drag_session is None
    with pytest.raises(NoDragSessionError):
        builder.drop("pillar-1")
    assert len(builder.document(second).placements) == 0
    assert len(builder.document(first).placements) == 0


def test_drag_from_inactive_document_rejected():
    """Dragging an item of a document that is not active raises."""
    builder = _make_builder()
    first = builder.active_id
    item = _add(builder, Category.PILLAR, "Hidden")
    builder.create_document("Second")

    with pytest.raises(InactiveDocumentError):
        builder.begin_drag(Category.PILLAR, item.id, document_id=first)
    assert builder.drag_session is None
    assert not builder.is_valid_target("pillar-1")
    with pytest.raises(NoDragSessionError):
        builder.drop("pillar-1")
    assert len(builder.document(first).placements) == 0
    assert len(builder.active_document.placements) == 0


def test_drag_with_explicit_active_document_id():
    """Naming the active document explicitly still allows a drag."""
    builder = _make_builder()
    item = _add(builder, Category.PILLAR, "Grow")
    session = builder.begin_drag(Category.PILLAR, item.id, document_id=builder.active_id)
    assert session.document_id == builder.active_id


def test_drop_refuses_session_of_inactive_document():
    """A session left on a document that lost focus is closed on drop."""
    builder = _make_builder()
    first = builder.active_id
    item = _add(builder, Category.PILLAR, "Grow")
    second = builder.create_document("Second").id
    builder.set_active_document(first)
    builder.begin_drag(Category.PILLAR, item.id)
    builder.registry.set_active(second)

    with pytest.raises(InactiveDocumentError):
        builder.drop("pillar-1")
    assert builder.drag_session is None
    assert len(builder.document(first).placements) == 0
    assert len(builder.document(second).placements) == 0


def test_creating_document_cancels_drag():
    """Creating a document cancels the open drag."""
    builder = _make_builder()
    item = _add(builder, Category.PILLAR, "Grow")
    builder.begin_drag(Category.PILLAR, item.id)
    builder.create_document("Another")
    assert builder.drag_session is None


def test_reselecting_same_document_keeps_drag():
    """Re-selecting the active document keeps the drag."""
    builder = _make_builder()
    item = _add(builder, Category.PILLAR, "Grow")
    builder.begin_drag(Category.PILLAR, item.id)
    builder.set_active_document(builder.active_id)
    assert builder.drag_session is not None


def test_delete_active_document_scenario():
    """Deleting the active document promotes the other; the last one stays."""
    builder = FrameworkBuilder()
    a = builder.active_id
    b = builder.create_document("B").id
    builder.set_active_document(a)

    builder.delete_document(a)
    assert builder.active_id == b
    with pytest.raises(LastDocumentError):
        builder.delete_document(b)
    assert len(builder.documents) == 1


def test_deleting_document_of_open_drag_cancels_it():
    """Deleting the dragged item's document closes the session."""
    builder = _make_builder()
    builder.create_document("Other")
    item = _add(builder, Category.PILLAR, "Grow")
    builder.begin_drag(Category.PILLAR, item.id)
    builder.delete_document(builder.active_id)
    assert builder.active_id == builder.documents[0].id
    assert builder.drag_session is None


def test_documents_keep_separate_pools_and_placements():
    """Each document has its own pool and board."""
    builder = _make_builder()
    first = builder.active_id
    _place(builder, Category.PILLAR, "First pillar", "pillar-1")
    builder.create_document("Second")
    assert builder.pool(Category.PILLAR) == []
    assert builder.slot_text("pillar-1") is None
    assert builder.slot_text("pillar-1", document_id=first) == "First pillar"


def test_items_can_target_inactive_document():
    """Item edits can be routed to an inactive document."""
    builder = _make_builder()
    first = builder.active_id
    builder.create_document("Second")
    item = _add(builder, Category.KPI, "NPS", document_id=first)
    assert builder.document(first).items.get(item.id) is not None
    assert builder.pool(Category.KPI) == []


def test_is_valid_target_follows_session():
    """Valid targets exist only while dragging and match the category."""
    builder = _make_builder()
    item = _add(builder, Category.KPI, "NPS")
    assert not builder.is_valid_target("kpi-row1-1")
    builder.begin_drag(Category.KPI, item.id)
    assert builder.is_valid_target("kpi-row1-1")
    assert not builder.is_valid_target("pillar-1")


def test_pool_flags():
    """Pool entries report placed, dragging and draggable flags in order."""
    builder = _make_builder()
    placed = _place(builder, Category.KPI, "Placed", "kpi-row1-1")
    dragging = _add(builder, Category.KPI, "Dragging")
    free = _add(builder, Category.KPI, "Free")
    builder.begin_drag(Category.KPI, dragging.id)

    flags = {entry["id"]: entry for entry in builder.pool(Category.KPI)}
    assert flags[placed.id]["placed"] and not flags[placed.id]["draggable"]
    assert flags[dragging.id]["dragging"] and not flags[dragging.id]["draggable"]
    assert flags[free.id]["draggable"]
    assert [e["id"] for e in builder.pool("kpi")] == [placed.id, dragging.id, free.id]


def test_mutations_touch_document():
    """A drop bumps the document's last_modified."""
    builder = _make_builder()
    doc = builder.active_document
    before = doc.last_modified
    _place(builder, Category.PILLAR, "Grow", "pillar-1")
    assert doc.last_modified >= before


def test_labels_use_config_defaults():
    """Config label defaults apply until a custom label is set."""
    config = BuilderConfig(label_defaults={"kpi_row1": "Clients", "kpi_row2": "Revenue"})
    builder = FrameworkBuilder(config=config)
    assert builder.label("kpi_row1") == "Clients"
    assert builder.label("kpi_row3") == "EBITDA"
    builder.set_custom_label("kpi_row1", "Logos")
    assert builder.label("kpi_row1") == "Logos"


def test_empty_custom_label_falls_back():
    """An empty custom label shows the default caption."""
    builder = _make_builder()
    builder.set_custom_label("kpi_row1", "")
    assert builder.label("kpi_row1") == "Customer Base"


def test_financial_text_and_rename():
    """Financial text and renaming update the active document."""
    builder = _make_builder()
    builder.set_financial_text("leverage", "1.2x")
    builder.rename_document("BVF - Acme Corp - October 2026")
    doc = builder.active_document
    assert doc.financial_text["leverage"] == "1.2x"
    assert doc.name == "BVF - Acme Corp - October 2026"


def test_any_category_slot_via_custom_template():
    """A slot without a declared category accepts any item."""
    template = DiagramTemplate(
        name="Notes",
        rows=(Row("notes", "Notes"),),
        slots=(Slot("note-1", None, "notes"), Slot("pillar-only", Category.PILLAR, "notes")),
    )
    builder = FrameworkBuilder(template=template)
    kpi = _add(builder, Category.KPI, "NPS")
    builder.begin_drag(Category.KPI, kpi.id)
    builder.drop("note-1")
    assert builder.slot_text("note-1") == "NPS"
    _assert_invariants(builder)


def test_invariants_hold_through_mixed_edits():
    """Placements stay unique and well-typed across mixed edits."""
    builder = _make_builder()
    items = [_add(builder, Category.PILLAR, f"P{n}") for n in range(5)]
    for n, item in enumerate(items[:4], start=1):
        builder.begin_drag(Category.PILLAR, item.id)
        builder.drop(f"pillar-{n}")
    builder.begin_drag(Category.PILLAR, items[4].id)
    builder.drop("pillar-2")
    builder.remove_item(Category.PILLAR, items[0].id)
    builder.clear_slot("pillar-3")
    _assert_invariants(builder)
    assert builder.slot_text("pillar-1") is None
    assert builder.slot_text("pillar-2") == "P4"
    assert builder.slot_text("pillar-4") == "P3"
    assert BVF_TEMPLATE.slot("pillar-2").accepts == Category.PILLAR
