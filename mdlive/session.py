"""Editor session — glue between a host text field and the render pipeline.

The host calls :meth:`EditorSession.display` to get what to paint and
:meth:`EditorSession.on_value_change` with every value the user produces.
"""

from __future__ import annotations

from loguru import logger

from mdlive.cache import Parser, RenderCache, TransformedText
from mdlive.continuation import continue_list
from mdlive.models import TextFieldValue, TextRange
from mdlive.parser import parse_markdown
from mdlive.theme import DEFAULT_THEME, Theme


class EditorSession:
    def __init__(
        self,
        text: str = "",
        theme: Theme = DEFAULT_THEME,
        parser: Parser = parse_markdown,
        list_continuation: bool = True,
    ) -> None:
        self.theme = theme
        self.list_continuation = list_continuation
        self.cache = RenderCache(parser)
        self.value = TextFieldValue(text, TextRange.cursor(len(text)))

    @property
    def text(self) -> str:
        return self.value.text

    def display(self) -> TransformedText:
        return self.cache.get_or_compute(self.value.text, self.theme)

    def on_value_change(self, new: TextFieldValue) -> TextFieldValue:
        """Accept a value from the host and return the one to show.

        Selection-only changes keep the cached render; text changes may be
        rewritten by list continuation and always invalidate the cache.
        """
        old = self.value
        if new.text == old.text:
            self.value = new
            return new

        if self.list_continuation:
            new = continue_list(old, new, self.cache.list_ranges)
        self.value = new
        self.cache.invalidate()
        return new

    def set_text(self, text: str) -> None:
        self.value = TextFieldValue(text, TextRange.cursor(len(text)))
        self.cache.invalidate()

    def set_theme(self, theme: Theme) -> None:
        if theme != self.theme:
            logger.debug("theme changed")
            self.theme = theme
            self.cache.invalidate()

    def type_text(self, typed: str) -> TextFieldValue:
        """Replace the selection with *typed*, as a keyboard would."""
        # the host repaints between keystrokes
        self.display()
        sel = self.value.selection
        lo, hi = min(sel.start, sel.end), max(sel.start, sel.end)
        text = self.value.text[:lo] + typed + self.value.text[hi:]
        return self.on_value_change(
            TextFieldValue(text, TextRange.cursor(lo + len(typed)))
        )

    def press_enter(self) -> TextFieldValue:
        return self.type_text("\n")
