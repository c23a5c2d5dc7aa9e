"""Report rendering — terminal preview and JSON dumps of a render."""

from __future__ import annotations

import dataclasses
import json
from typing import Any

from rich.style import Style
from rich.text import Text

import mdlive
from mdlive.models import ParseResult, TagRange
from mdlive.styles import BOLD, ITALIC, LINE_THROUGH, MONOSPACE, SpanStyle, StyledText

# Terminals have one font size; anything at least this large reads as a title.
_TITLE_SIZE = 16

# ---------------------------------------------------------------------------
# Terminal preview
# ---------------------------------------------------------------------------


def to_rich_style(style: SpanStyle) -> Style:
    weight = style.font_weight or 0
    size = style.font_size or 0
    return Style(
        color=style.color,
        bgcolor=style.background,
        bold=True if weight >= BOLD or size >= _TITLE_SIZE else None,
        italic=True if style.font_style == ITALIC else None,
        strike=True if style.text_decoration == LINE_THROUGH else None,
        dim=True if style.font_family == MONOSPACE and style.color is None else None,
    )


def to_rich_text(styled: StyledText) -> Text:
    """Convert to a rich ``Text`` with the same characters."""
    text = Text(styled.text, end="")
    for span in styled.spans:
        text.stylize(to_rich_style(span.style), span.start, span.end)
    return text


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------


def tag_range_to_dict(tag: TagRange) -> dict[str, Any]:
    return {"kind": type(tag).__name__, **dataclasses.asdict(tag)}


def render_ranges_json(text: str, parsed: ParseResult) -> str:
    doc: dict[str, Any] = {
        "tool": "mdlive",
        "version": mdlive.__version__,
        "length": len(text),
        "tag_ranges": [tag_range_to_dict(t) for t in parsed],
    }
    return json.dumps(doc, indent=2, ensure_ascii=False)


def render_spans_json(styled: StyledText) -> str:
    """Produce stable JSON output (spans in application order)."""
    doc: dict[str, Any] = {
        "tool": "mdlive",
        "version": mdlive.__version__,
        "length": len(styled),
        "spans": [
            {
                "start": s.start,
                "end": s.end,
                "text": styled.text[s.start:s.end],
                "style": s.style.attributes(),
            }
            for s in styled.spans
        ],
    }
    return json.dumps(doc, indent=2, ensure_ascii=False)
