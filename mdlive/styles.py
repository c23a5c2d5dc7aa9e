"""Styled text — source characters plus non-destructive style overlays."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace

MONOSPACE = "monospace"
BOLD = 700
ITALIC = "italic"
LINE_THROUGH = "line-through"


@dataclass(frozen=True)
class SpanStyle:
    """A bag of presentation attributes; ``None`` means "not set"."""

    color: str | None = None
    background: str | None = None
    font_family: str | None = None
    font_weight: int | None = None
    font_style: str | None = None
    text_decoration: str | None = None
    font_size: float | None = None
    line_height: float | None = None
    letter_spacing: float | None = None

    def merge(self, other: SpanStyle) -> SpanStyle:
        """Return a copy where every attribute set on *other* wins."""
        changes = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if getattr(other, f.name) is not None
        }
        return replace(self, **changes) if changes else self

    def attributes(self) -> dict[str, object]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @property
    def is_empty(self) -> bool:
        return not self.attributes()


@dataclass(frozen=True)
class StyleSpan:
    start: int
    end: int
    style: SpanStyle

    def covers(self, index: int) -> bool:
        return self.start <= index < self.end


@dataclass(frozen=True)
class StyledText:
    """Source text with overlays in application order.

    The character content is always the source text; styling never inserts,
    removes or reorders characters.
    """

    text: str
    spans: tuple[StyleSpan, ...] = ()

    def __len__(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return self.text

    @property
    def plain(self) -> str:
        return self.text

    def spans_at(self, index: int) -> list[StyleSpan]:
        return [s for s in self.spans if s.covers(index)]

    def style_at(self, index: int) -> SpanStyle:
        """Effective style of one character: later spans win per attribute."""
        style = SpanStyle()
        for span in self.spans_at(index):
            style = style.merge(span.style)
        return style


class StyledTextBuilder:
    """Accumulates overlays for one source text.

    Offsets outside the text are clamped; spans that end up empty are
    dropped, so a misbehaving parser can never break rendering.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self._spans: list[StyleSpan] = []

    def add_style(self, style: SpanStyle, start: int, end: int) -> None:
        length = len(self.text)
        start = min(max(start, 0), length)
        end = min(max(end, 0), length)
        if start >= end or style.is_empty:
            return
        self._spans.append(StyleSpan(start, end, style))

    def build(self) -> StyledText:
        return StyledText(self.text, tuple(self._spans))
