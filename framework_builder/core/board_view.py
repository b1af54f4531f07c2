"""BoardView — read-only HTML rendering of the active framework."""

import html
import json
from typing import TYPE_CHECKING, Any, Dict, Optional

from framework_builder.core.template import Category
from framework_builder.layouts.board import compute_board_layout
from framework_builder.layouts.pool import compute_pool_layout
from framework_builder.styles.colors import (
    CATEGORY_COLORS,
    CSS_CLASSES,
    EMPTY_COLOR,
    EMPTY_TEXT_COLOR,
    SECTION_TITLES,
    TEXT_COLORS,
)

if TYPE_CHECKING:
    from framework_builder.core.builder import FrameworkBuilder

FINANCIAL_TITLES = {
    "growth": "Growth",
    "cash_flow": "Cash Flow",
    "investments": "Investments",
    "leverage": "Leverage",
}


class BoardView:
    """Renders a builder's active document as HTML.

    The view only reads state: the tile pool with used markers, the board
    rows with placed text, the financial summary and, while an item is being
    dragged, which slots would accept it.

    Parameters
    ----------
    builder : FrameworkBuilder
        The editing context to render.
    uid : str, optional
        Suffix for element ids; keeps several views on one page apart.
    """

    def __init__(self, builder: "FrameworkBuilder", uid: Optional[str] = None) -> None:
        self.builder = builder
        self._uid = uid or builder._uid

    def _repr_html_(self) -> str:
        """Jupyter auto-display."""
        return self.to_html()

    def display(self) -> None:
        """Display in IPython/Jupyter."""
        from IPython.display import HTML
        from IPython.display import display as ipy_display

        ipy_display(HTML(self.to_html()))

    def to_html(self) -> str:
        uid = self._uid
        parts = [
            f'<div id="fwb-{uid}" class="fwb-container">',
            f"<style>{self._css(uid)}</style>",
            self._header_html(),
            '<div class="fwb-body">',
            self._pool_html(),
            self._board_html(),
            "</div>",
            self._legend_html(),
            self._data_script(uid),
            "</div>",
        ]
        return "\n".join(parts)

    # ------------------------------------------------------------------ CSS
    def _css(self, uid: str) -> str:
        s = f"#fwb-{uid}"
        slot_rules = []
        for category, css_cls in CSS_CLASSES.items():
            bg = CATEGORY_COLORS[category]
            fg = TEXT_COLORS[category]
            slot_rules.append(f"{s} .{css_cls} {{ background: {bg}; color: {fg}; }}")
        slot_css = "\n".join(slot_rules)
        return f"""
{s} * {{ box-sizing: border-box; margin: 0; padding: 0; }}
{s} {{ font-family: 'Inter', 'Helvetica', sans-serif; line-height: 1.3; }}
{s} .fwb-header {{
  display: flex; justify-content: space-between; align-items: center;
  border-bottom: 2px solid #3B0764; padding: 12px; margin-bottom: 12px;
}}
{s} .fwb-title {{ font-size: 16px; font-weight: 700; }}
{s} .fwb-modified {{ font-size: 11px; color: #6B7280; }}
{s} .fwb-body {{ display: flex; gap: 16px; }}
{s} .fwb-pool {{ width: 240px; flex-shrink: 0; }}
{s} .fwb-pool-title {{
  font-size: 11px; font-weight: 700; color: #9CA3AF;
  text-transform: uppercase; margin: 8px 0 4px;
}}
{s} .fwb-tile {{
  border: 1px solid #D1D5DB; border-radius: 6px; padding: 6px;
  font-size: 12px; margin-bottom: 4px; display: flex;
}}
{s} .fwb-tile-used {{ opacity: 0.4; }}
{s} .fwb-tile-dragging {{ outline: 2px solid #7E22CE; }}
{s} .fwb-used {{ margin-left: auto; font-size: 10px; font-weight: 700; color: #9CA3AF; }}
{s} .fwb-board {{ flex: 1; display: flex; flex-direction: column; gap: 8px; }}
{s} .fwb-row {{ display: flex; gap: 6px; align-items: stretch; }}
{s} .fwb-row-label {{
  width: 120px; flex-shrink: 0; font-size: 11px; font-weight: 700;
  display: flex; align-items: center;
}}
{s} .fwb-slot {{
  flex: 1; min-height: 40px; padding: 6px; font-size: 11px;
  display: flex; align-items: center; justify-content: center; text-align: center;
}}
{s} .fwb-slot-empty {{
  background: {EMPTY_COLOR}; color: {EMPTY_TEXT_COLOR};
  border: 2px dashed #D1D5DB;
}}
{s} .fwb-slot-pillar, {s} .fwb-slot-initiative {{ border: 2px solid black; }}
{s} .fwb-slot-kpi {{ border: 2px solid #3B0764; justify-content: flex-start; }}
{s} .fwb-valid-target {{ border-color: #7E22CE; background: #FAF5FF; }}
{s} .fwb-dimmed {{ opacity: 0.5; filter: blur(1px); }}
{s} .fwb-financials {{ border: 2px solid black; padding: 6px; }}
{s} .fwb-fin-row {{ display: flex; font-size: 11px; margin-bottom: 4px; }}
{s} .fwb-fin-key {{ width: 40%; background: #3B0764; color: white; padding: 4px; font-weight: 700; }}
{s} .fwb-fin-value {{ flex: 1; border: 2px solid #3B0764; padding: 4px; font-weight: 700; }}
{s} .fwb-legend {{ display: flex; flex-wrap: wrap; gap: 12px; margin-top: 12px; }}
{s} .fwb-legend-item {{ display: flex; align-items: center; gap: 4px; font-size: 11px; }}
{s} .fwb-legend-swatch {{ width: 14px; height: 14px; border: 1px solid black; }}
{slot_css}
"""

    # -------------------------------------------------------------- Header
    def _header_html(self) -> str:
        doc = self.builder.active_document
        modified = doc.last_modified.strftime("%Y-%m-%d %H:%M")
        return (
            f'<div class="fwb-header">'
            f'<span class="fwb-title">{html.escape(doc.name)}</span>'
            f'<span class="fwb-modified">Last modified {modified} UTC</span>'
            f"</div>"
        )

    # ---------------------------------------------------------------- Pool
    def _pool_html(self) -> str:
        doc = self.builder.active_document
        parts = ['<div class="fwb-pool">']
        for section in compute_pool_layout(doc, self.builder.drag_session):
            parts.append(f'<div class="fwb-pool-title">{html.escape(section["title"])}</div>')
            for item in section["items"]:
                parts.append(self._tile_div(item))
        parts.append("</div>")
        return "\n".join(parts)

    def _tile_div(self, item: Dict[str, Any]) -> str:
        classes = ["fwb-tile"]
        if item["placed"]:
            classes.append("fwb-tile-used")
        if item["dragging"]:
            classes.append("fwb-tile-dragging")
        text = item["text"] or "Empty Item"
        used = '<span class="fwb-used">USED</span>' if item["placed"] else ""
        draggable = "true" if item["draggable"] else "false"
        return (
            f'<div class="{" ".join(classes)}" data-item-id="{html.escape(item["id"])}" '
            f'draggable="{draggable}">'
            f"<span>{html.escape(text)}</span>{used}"
            f"</div>"
        )

    # --------------------------------------------------------------- Board
    def _board_html(self) -> str:
        doc = self.builder.active_document
        rows = compute_board_layout(doc, self.builder.drag_session, self.builder.label_defaults)
        parts = ['<div class="fwb-board">']
        for row in rows:
            parts.append(f'<div class="fwb-row" data-row="{html.escape(row["key"])}">')
            parts.append(f'<div class="fwb-row-label">{html.escape(row["label"])}</div>')
            for slot in row["slots"]:
                parts.append(self._slot_div(slot))
            parts.append("</div>")
        parts.append(self._financials_html())
        parts.append("</div>")
        return "\n".join(parts)

    def _slot_div(self, slot: Dict[str, Any]) -> str:
        accepts: Optional[Category] = slot["accepts"]
        if slot["is_empty"]:
            classes = ["fwb-slot", "fwb-slot-empty"]
            text = slot["placeholder"] or (f"Drop {accepts.value}" if accepts else "Drop Here")
        else:
            classes = ["fwb-slot", CSS_CLASSES.get(accepts, "") if accepts else ""]
            text = slot["text"] or ""
        if slot["is_valid_target"]:
            classes.append("fwb-valid-target")
        if slot["is_dimmed"]:
            classes.append("fwb-dimmed")
        return (
            f'<div class="{" ".join(c for c in classes if c)}" '
            f'data-slot="{html.escape(slot["key"])}">'
            f"{html.escape(text)}"
            f"</div>"
        )

    def _financials_html(self) -> str:
        doc = self.builder.active_document
        parts = ['<div class="fwb-financials">']
        for key in doc.template.financial_keys:
            title = FINANCIAL_TITLES.get(key, key)
            value = doc.financial_text.get(key, "")
            parts.append(
                f'<div class="fwb-fin-row">'
                f'<div class="fwb-fin-key">{html.escape(title)}</div>'
                f'<div class="fwb-fin-value">{html.escape(value)}</div>'
                f"</div>"
            )
        parts.append("</div>")
        return "\n".join(parts)

    # -------------------------------------------------------------- Legend
    def _legend_html(self) -> str:
        items = []
        for category in Category:
            items.append(
                f'<div class="fwb-legend-item">'
                f'<div class="fwb-legend-swatch" style="background:{CATEGORY_COLORS[category]};"></div>'
                f"<span>{html.escape(SECTION_TITLES[category])}</span>"
                f"</div>"
            )
        return f'<div class="fwb-legend">{"".join(items)}</div>'

    # ----------------------------------------------------------- Data JSON
    def _data_script(self, uid: str) -> str:
        """Embed the document snapshot for client-side scripts."""
        data = self.builder.active_document.to_dict()
        session = self.builder.drag_session
        data["drag_session"] = (
            {
                "document_id": session.document_id,
                "item_id": session.item_id,
                "category": session.category.value,
                "text": session.text,
            }
            if session is not None
            else None
        )
        # Keep "</script>" in user text from closing the tag.
        payload = json.dumps(data, ensure_ascii=False).replace("</", "<\\/")
        return f"<script>var fwbData_{uid} = {payload};</script>"
