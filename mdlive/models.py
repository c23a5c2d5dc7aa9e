"""Data models used throughout mdlive.

Offsets are Python ``str`` indices (code points) everywhere in the package.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

# ---------------------------------------------------------------------------
# Tag ranges
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Heading:
    start: int
    end: int
    level: int = 1


@dataclass(frozen=True)
class Emphasis:
    start: int
    end: int


@dataclass(frozen=True)
class Strong:
    start: int
    end: int


@dataclass(frozen=True)
class Strikethrough:
    start: int
    end: int


@dataclass(frozen=True)
class InlineCode:
    """Inline code span, backtick delimiters included."""

    start: int
    end: int


@dataclass(frozen=True)
class ListItem:
    start: int
    end: int
    ordered: bool = False


@dataclass(frozen=True)
class List:
    """A whole list block.

    ``order`` is 0 for bullet lists and the start number for ordered ones.
    """

    start: int
    end: int
    order: int = 0
    nested_level: int = 0


@dataclass(frozen=True)
class Paragraph:
    start: int
    end: int


@dataclass(frozen=True)
class Link:
    """Inline link; ``url_offset`` is the first index after ``(``."""

    start: int
    end: int
    url_offset: int


@dataclass(frozen=True)
class Image:
    start: int
    end: int
    url_offset: int


@dataclass(frozen=True)
class Rule:
    start: int
    end: int


@dataclass(frozen=True)
class BlockQuote:
    start: int
    end: int


@dataclass(frozen=True)
class TaskListMarker:
    start: int
    end: int


@dataclass(frozen=True)
class CodeBlock:
    start: int
    end: int


TagRange = Union[
    Heading,
    Emphasis,
    Strong,
    Strikethrough,
    InlineCode,
    ListItem,
    List,
    Paragraph,
    Link,
    Image,
    Rule,
    BlockQuote,
    TaskListMarker,
    CodeBlock,
]

TAG_RANGE_TYPES: tuple[type, ...] = TagRange.__args__


# ---------------------------------------------------------------------------
# Parse result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParseResult:
    """Tag ranges in parser-encounter order (enclosing before enclosed)."""

    tag_ranges: tuple[TagRange, ...] = ()

    def __iter__(self):
        return iter(self.tag_ranges)

    def __len__(self) -> int:
        return len(self.tag_ranges)

    def of_type(self, kind: type) -> list[TagRange]:
        return [t for t in self.tag_ranges if isinstance(t, kind)]


# ---------------------------------------------------------------------------
# Editor state
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextRange:
    """Selection in a text field; ``start == end`` is a plain cursor."""

    start: int
    end: int

    @classmethod
    def cursor(cls, offset: int) -> TextRange:
        return cls(offset, offset)

    @property
    def collapsed(self) -> bool:
        return self.start == self.end

    def shifted(self, delta: int) -> TextRange:
        return TextRange(self.start + delta, self.end + delta)


@dataclass(frozen=True)
class TextFieldValue:
    """Text plus selection, as exchanged with the host text field."""

    text: str = ""
    selection: TextRange = TextRange(0, 0)
