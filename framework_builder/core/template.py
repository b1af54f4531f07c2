"""
Static diagram template for the Business Value Framework board.

The template declares the closed set of item categories, every slot on the
board with the category it accepts, how slots are grouped into rows, and the
default captions for rows whose labels can be overridden per document.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple


class Category(Enum):
    """Classification of an item; decides which slots accept it."""

    CORPORATE_STRATEGY = "corporate_strategy"
    PILLAR = "pillar"
    BUSINESS_HEADER = "business_header"
    KPI = "kpi"
    STRATEGY = "strategy"
    BUSINESS_INITIATIVE = "business_initiative"
    FUNCTIONAL = "functional"
    DXC_INITIATIVE = "dxc_initiative"


@dataclass(frozen=True)
class Slot:
    """A fixed position on the board.

    Attributes
    ----------
    key : str
        Stable identifier, e.g. ``"pillar-2"`` or ``"kpi-row1-3"``.
    accepts : Category, optional
        The only category this slot accepts. ``None`` accepts any category.
    row : str
        Key of the board row the slot belongs to.
    placeholder : str
        Caption shown while the slot is empty.
    """

    key: str
    accepts: Optional[Category]
    row: str
    placeholder: str = ""

    def accepts_category(self, category: Category) -> bool:
        return self.accepts is None or self.accepts == category


@dataclass(frozen=True)
class Row:
    """A horizontal band of slots with a caption.

    ``label_key`` names a per-document custom label that overrides
    ``title`` when set.
    """

    key: str
    title: str
    label_key: Optional[str] = None


@dataclass(frozen=True)
class DiagramTemplate:
    """The fixed slot set of a diagram plus its default captions."""

    name: str
    rows: Tuple[Row, ...]
    slots: Tuple[Slot, ...]
    label_defaults: Dict[str, str] = field(default_factory=dict)
    financial_keys: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        keys = [slot.key for slot in self.slots]
        if len(keys) != len(set(keys)):
            raise ValueError(f"Template '{self.name}' declares duplicate slot keys")
        row_keys = {row.key for row in self.rows}
        unknown = sorted({slot.row for slot in self.slots} - row_keys)
        if unknown:
            raise ValueError(f"Template '{self.name}' has slots in unknown rows: {unknown}")

    def __iter__(self) -> Iterator[Slot]:
        return iter(self.slots)

    def __contains__(self, slot_key: object) -> bool:
        return any(slot.key == slot_key for slot in self.slots)

    def slot(self, slot_key: str) -> Optional[Slot]:
        """Return the slot with the given key, or None."""
        for slot in self.slots:
            if slot.key == slot_key:
                return slot
        return None

    def slots_in_row(self, row_key: str) -> List[Slot]:
        return [slot for slot in self.slots if slot.row == row_key]

    def slots_accepting(self, category: Category) -> List[Slot]:
        return [slot for slot in self.slots if slot.accepts_category(category)]


LABEL_DEFAULTS = {
    "kpi_row1": "Customer Base",
    "kpi_row2": "Revenue",
    "kpi_row3": "EBITDA",
}

FINANCIAL_KEYS = ("growth", "cash_flow", "investments", "leverage")


def _numbered(prefix: str, count: int, category: Category, row: str, placeholder: str) -> List[Slot]:
    return [
        Slot(f"{prefix}-{n}", category, row, placeholder.format(n=n)) for n in range(1, count + 1)
    ]


def _initiative_slots() -> List[Slot]:
    # Four strategy columns, each a 3x2 grid ordered column-major like the board.
    slots = []
    for col in range(1, 5):
        for sub in (1, 2):
            for row in range(1, 4):
                slots.append(
                    Slot(
                        f"init-c{col}-r{row}-c{sub}",
                        Category.BUSINESS_INITIATIVE,
                        "initiatives",
                        "Init",
                    )
                )
    return slots


def _build_bvf_template() -> DiagramTemplate:
    rows = (
        Row("corporate_strategy", "Corporate Strategy"),
        Row("pillars", "Strategic Pillars"),
        Row("kpi_headers", "Business Headers"),
        Row("kpi_row1", LABEL_DEFAULTS["kpi_row1"], label_key="kpi_row1"),
        Row("kpi_row2", LABEL_DEFAULTS["kpi_row2"], label_key="kpi_row2"),
        Row("kpi_row3", LABEL_DEFAULTS["kpi_row3"], label_key="kpi_row3"),
        Row("strategies", "Business Strategies"),
        Row("initiatives", "Business Initiatives"),
        Row("functional_areas", "Functional Areas"),
        Row("dxc_initiatives", "DXC Initiatives"),
    )

    slots: List[Slot] = [
        Slot(
            "corp-strat",
            Category.CORPORATE_STRATEGY,
            "corporate_strategy",
            "Drop Corporate Strategy",
        )
    ]
    slots += _numbered("pillar", 4, Category.PILLAR, "pillars", "Pillar {n}")
    slots += _numbered("kpi-head", 4, Category.BUSINESS_HEADER, "kpi_headers", "Header")
    for r in range(1, 4):
        slots += _numbered(f"kpi-row{r}", 4, Category.KPI, f"kpi_row{r}", "Metric")
    slots += _numbered("strat", 4, Category.STRATEGY, "strategies", "Strategy {n}")
    slots += _initiative_slots()
    slots += _numbered("func", 8, Category.FUNCTIONAL, "functional_areas", "Area")
    slots += _numbered("dxc", 5, Category.DXC_INITIATIVE, "dxc_initiatives", "Initiative")

    return DiagramTemplate(
        name="Business Value Framework",
        rows=rows,
        slots=tuple(slots),
        label_defaults=dict(LABEL_DEFAULTS),
        financial_keys=FINANCIAL_KEYS,
    )


BVF_TEMPLATE = _build_bvf_template()
