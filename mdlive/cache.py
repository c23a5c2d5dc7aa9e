"""Render cache — one (text, theme) → styled text entry, explicit invalidation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from loguru import logger

from mdlive.lists import EMPTY_INDEX, ListRangeIndex
from mdlive.models import ParseResult
from mdlive.parser import parse_markdown
from mdlive.renderer import render
from mdlive.styles import StyledText
from mdlive.theme import Theme

Parser = Callable[[str], ParseResult]


class IdentityOffsetMapping:
    """Displayed text and source text share every offset."""

    @staticmethod
    def original_to_transformed(offset: int) -> int:
        return offset

    @staticmethod
    def transformed_to_original(offset: int) -> int:
        return offset


IDENTITY = IdentityOffsetMapping()


@dataclass(frozen=True)
class TransformedText:
    styled: StyledText
    offset_mapping: IdentityOffsetMapping = field(default=IDENTITY)

    @property
    def text(self) -> str:
        return self.styled.text


@dataclass(frozen=True)
class CacheEntry:
    key: tuple[str, Theme]
    parsed: ParseResult
    styled: StyledText
    lists: ListRangeIndex


class RenderCache:
    """Holds the result of the last render until the caller invalidates it.

    The owner must call :meth:`invalidate` whenever the displayed text or
    the theme changes; a stale entry with a different key is never served.
    """

    def __init__(self, parser: Parser = parse_markdown) -> None:
        self._parser = parser
        self._entry: CacheEntry | None = None

    @property
    def entry(self) -> CacheEntry | None:
        return self._entry

    @property
    def parsed(self) -> ParseResult:
        return self._entry.parsed if self._entry else ParseResult()

    @property
    def list_ranges(self) -> ListRangeIndex:
        """List ranges of the most recent parse (empty after invalidation)."""
        return self._entry.lists if self._entry else EMPTY_INDEX

    def get_or_compute(self, text: str, theme: Theme) -> TransformedText:
        key = (text, theme)
        entry = self._entry
        if entry is not None and entry.key == key:
            logger.debug("render cache hit")
            return TransformedText(entry.styled)

        logger.debug(f"render cache miss ({len(text)} chars)")
        parsed = self._parser(text)
        entry = CacheEntry(
            key=key,
            parsed=parsed,
            styled=render(parsed, text, theme),
            lists=ListRangeIndex.from_parse_result(parsed),
        )
        self._entry = entry
        return TransformedText(entry.styled)

    def invalidate(self) -> None:
        if self._entry is not None:
            logger.debug("render cache invalidated")
        self._entry = None
