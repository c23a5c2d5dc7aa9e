"""Theme values — color roles and typography passed to the renderer.

A :class:`Theme` is immutable and hashable so it can be part of the render
cache key.  Build one per editing session (defaults or from config) and
pass it explicitly; there is no process-wide typography state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mdlive.styles import BOLD, ITALIC, LINE_THROUGH, SpanStyle

# ---------------------------------------------------------------------------
# Color roles
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ColorScheme:
    """The three accent roles the renderer draws with (hex ``#rrggbb``)."""

    primary: str = "#6750a4"
    secondary: str = "#625b71"
    tertiary: str = "#7d5260"


# ---------------------------------------------------------------------------
# Typography
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextStyle:
    """One typography scale entry (sizes in sp)."""

    font_size: float | None = None
    font_weight: int | None = None
    line_height: float | None = None
    letter_spacing: float | None = None
    font_family: str | None = None

    def to_span_style(self) -> SpanStyle:
        return SpanStyle(
            font_family=self.font_family,
            font_weight=self.font_weight,
            font_size=self.font_size,
            line_height=self.line_height,
            letter_spacing=self.letter_spacing,
        )


@dataclass(frozen=True)
class MarkdownTypography:
    title_large: TextStyle = TextStyle(22, 400, 28, 0)
    title_medium: TextStyle = TextStyle(16, 500, 24, 0.15)
    title_small: TextStyle = TextStyle(14, 500, 20, 0.1)
    bold: SpanStyle = SpanStyle(font_weight=BOLD)
    emph: SpanStyle = SpanStyle(font_style=ITALIC)
    # black at half alpha / light gray at half alpha, flattened on white
    strikethrough: SpanStyle = SpanStyle(color="#808080", text_decoration=LINE_THROUGH)
    inline_code: SpanStyle = SpanStyle(background="#e6e6e6")

    def title_for(self, level: int) -> TextStyle:
        if level == 1:
            return self.title_large
        if level == 2:
            return self.title_medium
        return self.title_small


@dataclass(frozen=True)
class Theme:
    colors: ColorScheme = field(default_factory=ColorScheme)
    typography: MarkdownTypography = field(default_factory=MarkdownTypography)


DEFAULT_THEME = Theme()
