"""Style renderer — tag ranges over source text to :class:`StyledText`.

Overlays are applied in parse-result order.  Different attributes on
overlapping ranges combine; the same attribute on the same character is
won by whichever overlay was applied last.
"""

from __future__ import annotations

from typing import assert_never

from mdlive.models import (
    BlockQuote,
    CodeBlock,
    Emphasis,
    Heading,
    Image,
    InlineCode,
    Link,
    List,
    ListItem,
    Paragraph,
    ParseResult,
    Rule,
    Strikethrough,
    Strong,
    TagRange,
    TaskListMarker,
)
from mdlive.styles import BOLD, MONOSPACE, SpanStyle, StyledText, StyledTextBuilder
from mdlive.theme import Theme


def render(parsed: ParseResult, text: str, theme: Theme) -> StyledText:
    """Return *text* with the styles for every tag range in *parsed*."""
    builder = StyledTextBuilder(text)
    for tag in parsed:
        render_tag(tag, builder, theme)
    return builder.build()


def render_tag(tag: TagRange, builder: StyledTextBuilder, theme: Theme) -> None:
    colors = theme.colors
    typography = theme.typography
    primary = SpanStyle(color=colors.primary)
    secondary = SpanStyle(color=colors.secondary)
    code = SpanStyle(color=colors.tertiary, font_family=MONOSPACE)

    match tag:
        case Heading(start=start, end=end, level=level):
            builder.add_style(primary, start, start + level)
            builder.add_style(typography.title_for(level).to_span_style(), start, end)

        case Emphasis(start=start, end=end):
            builder.add_style(primary, start, start + 1)
            builder.add_style(primary, end - 1, end)
            builder.add_style(typography.emph, start, end)

        case Strong(start=start, end=end):
            builder.add_style(primary, start, start + 2)
            builder.add_style(primary, end - 2, end)
            builder.add_style(typography.bold, start, end)

        case Strikethrough(start=start, end=end):
            builder.add_style(typography.strikethrough, start, end)

        case InlineCode(start=start, end=end):
            builder.add_style(SpanStyle(font_family=MONOSPACE), start + 1, end - 1)
            builder.add_style(primary, start, start + 1)
            builder.add_style(primary, end - 1, end)
            builder.add_style(typography.inline_code, start, end)

        case ListItem(start=start, end=end, ordered=ordered):
            marker = 3 if ordered else 2
            builder.add_style(
                SpanStyle(color=colors.tertiary, font_family=MONOSPACE, font_weight=BOLD),
                start,
                min(start + marker, end),
            )

        case List():
            # structural; feeds the list range index instead
            pass

        case Paragraph():
            pass

        case Link(start=start, end=end, url_offset=url_offset):
            _render_link(builder, theme, start, end, url_offset, opening=1)

        case Image(start=start, end=end, url_offset=url_offset):
            _render_link(builder, theme, start, end, url_offset, opening=2)

        case (
            Rule(start=start, end=end)
            | TaskListMarker(start=start, end=end)
            | CodeBlock(start=start, end=end)
        ):
            builder.add_style(code, start, end)

        case BlockQuote(start=start, end=end):
            builder.add_style(code, start, start + 1)
            builder.add_style(secondary, start + 1, end)

        case _:
            assert_never(tag)


def _render_link(
    builder: StyledTextBuilder,
    theme: Theme,
    start: int,
    end: int,
    url_offset: int,
    opening: int,
) -> None:
    colors = theme.colors
    brackets = SpanStyle(color=colors.tertiary)
    parens = SpanStyle(color=colors.secondary)

    # [ ]
    builder.add_style(brackets, start, start + opening)
    builder.add_style(brackets, url_offset - 2, url_offset - 1)
    # ( )
    builder.add_style(parens, url_offset - 1, url_offset)
    builder.add_style(parens, end - 1, end)
    # url
    builder.add_style(SpanStyle(color=colors.primary), url_offset, end - 1)
