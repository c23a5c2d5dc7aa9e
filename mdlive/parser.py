"""Markdown parser adapter — markdown-it tokens to character-offset tag ranges.

Uses ``markdown-it-py`` (CommonMark plus strikethrough and GitHub task
lists) to parse the editor text, then maps every token back to code-point
offsets in the original string:

* block tokens carry ``token.map`` (0-indexed ``[start_line, end_line)``),
  turned into offsets with a line-start table;
* inline children carry no positions, so their ``markup`` / ``content`` is
  located by a forward search through the inline source, and the inline
  source is aligned back to the original text (it has container prefixes
  such as ``> `` and list indentation stripped).

The adapter is total: anything it cannot place produces no tag range.
"""

from __future__ import annotations

import re
from functools import lru_cache

from loguru import logger
from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.tasklists import tasklists_plugin

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

# Same line terminators markdown-it normalises to "\n".
_NEWLINE_RE = re.compile(r"\r\n?|\n")

_PAIRED_INLINE = {
    "em": Emphasis,
    "strong": Strong,
    "s": Strikethrough,
}

_CHECKBOX_CLASS = "task-list-item-checkbox"


@lru_cache(maxsize=1)
def _markdown_it() -> MarkdownIt:
    md = MarkdownIt("commonmark").enable("strikethrough").use(tasklists_plugin)
    # Keep escapes and entities as separate tokens whose markup is the
    # original source text.
    md.disable("text_join", ignoreInvalid=True)
    return md


def parse_markdown(text: str) -> ParseResult:
    """Parse *text* and return its tag ranges in encounter order.

    Never raises: if the grammar collaborator fails, the text is treated as
    plain (an empty result) and the failure is logged.
    """
    try:
        tokens = _markdown_it().parse(text)
        ranges = _TagCollector(text).collect(tokens)
    except Exception:
        logger.opt(exception=True).warning(
            f"markdown parse failed for {len(text)} chars; rendering as plain text"
        )
        return ParseResult()
    logger.debug(f"parsed {len(text)} chars into {len(ranges)} tag ranges")
    return ParseResult(tuple(ranges))


# ---------------------------------------------------------------------------
# Offset helpers
# ---------------------------------------------------------------------------


def _line_starts(text: str) -> list[int]:
    starts = [0]
    starts.extend(m.end() for m in _NEWLINE_RE.finditer(text))
    return starts


def _backtick_run(markup: str) -> re.Pattern[str]:
    return re.compile(r"(?<!`)" + re.escape(markup) + r"(?!`)")


def _destination_end(s: str, i: int) -> int:
    """Index of the ``)`` closing a link destination (and title) at *i*."""
    n = len(s)
    if i < n and s[i] == "<":
        close = s.find(">", i + 1)
        if close < 0:
            return -1
        i = close + 1
    depth = 0
    quote: str | None = None
    prev_space = False
    while i < n:
        ch = s[i]
        if ch == "\\":
            i += 2
            prev_space = False
            continue
        if quote is not None:
            if ch == quote:
                quote = None
        elif prev_space and ch in "\"'":
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            if depth == 0:
                return i
            depth -= 1
        prev_space = ch in " \t\n"
        i += 1
    return -1


def _label_end(s: str, i: int) -> int:
    """Index of the ``]`` balancing an already-consumed ``[`` (scan from *i*)."""
    depth = 0
    n = len(s)
    while i < n:
        ch = s[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "[":
            depth += 1
        elif ch == "]":
            if depth == 0:
                return i
            depth -= 1
        i += 1
    return -1


# ---------------------------------------------------------------------------
# Collector
# ---------------------------------------------------------------------------


class _TagCollector:
    """Walks one token stream and records tag ranges.

    Ranges are emitted in opening order; paired inline constructs reserve
    their slot on ``*_open`` and fill it on ``*_close`` so an enclosing
    construct always precedes what it encloses.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.starts = _line_starts(text)
        # line -> first offset not yet claimed by a container marker
        self.floor: dict[int, int] = {}
        self.slots: list[TagRange | None] = []
        self.list_depth = 0

    # -- lines --------------------------------------------------------------

    def line_start(self, line: int) -> int:
        if line < len(self.starts):
            return self.starts[line]
        return len(self.text)

    def scan_from(self, line: int) -> int:
        return self.floor.get(line, self.line_start(line))

    def first_non_space(self, line: int) -> int:
        p = self.scan_from(line)
        end = self.line_start(line + 1)
        while p < end and self.text[p] in " \t":
            p += 1
        return p

    def block_end(self, end_line: int, keep_newline: bool) -> int:
        end = self.line_start(end_line)
        if keep_newline:
            return end
        floor = self.line_start(end_line - 1)
        while end > floor and self.text[end - 1] in "\r\n":
            end -= 1
        return end

    # -- output -------------------------------------------------------------

    def emit(self, tag: TagRange) -> None:
        self.slots.append(tag)

    def reserve(self) -> int:
        self.slots.append(None)
        return len(self.slots) - 1

    # -- walk ---------------------------------------------------------------

    def collect(self, tokens: list[Token]) -> list[TagRange]:
        for token in tokens:
            kind = token.type
            if kind == "inline":
                self.inline(token)
            elif kind.endswith("_close"):
                if kind in ("bullet_list_close", "ordered_list_close"):
                    self.list_depth -= 1
            else:
                self.block(token)
        return [tag for tag in self.slots if tag is not None]

    def block(self, token: Token) -> None:
        if token.map is None:
            return
        kind = token.type
        line, end_line = token.map

        if kind == "heading_open":
            level = int(token.tag[1:])
            start = self.first_non_space(line)
            if token.markup.startswith("#"):
                self.floor[line] = start + level
            self.emit(Heading(start, self.block_end(end_line, False), level))

        elif kind == "paragraph_open":
            self.emit(Paragraph(self.first_non_space(line), self.block_end(end_line, False)))

        elif kind in ("bullet_list_open", "ordered_list_open"):
            if kind == "bullet_list_open":
                order = 0
            else:
                order = max(int(token.attrGet("start") or 1), 1)
            self.emit(List(
                self.first_non_space(line),
                self.block_end(end_line, True),
                order=order,
                nested_level=self.list_depth,
            ))
            self.list_depth += 1

        elif kind == "list_item_open":
            ordered = token.markup in (".", ")")
            marker = (token.info + token.markup) if ordered else token.markup
            start = self.first_non_space(line)
            found = self.text.find(marker, start, self.line_start(line + 1))
            if found >= 0:
                start = found
                self.floor[line] = found + len(marker)
            self.emit(ListItem(start, self.block_end(end_line, True), ordered=ordered))

        elif kind == "blockquote_open":
            start = self.first_non_space(line)
            self.emit(BlockQuote(start, self.block_end(end_line, True)))
            for quoted in range(line, end_line):
                p = self.first_non_space(quoted)
                if p < len(self.text) and self.text[p] == ">":
                    self.floor[quoted] = p + 1

        elif kind == "hr":
            self.emit(Rule(self.first_non_space(line), self.block_end(end_line, False)))

        elif kind == "fence":
            self.emit(CodeBlock(self.first_non_space(line), self.block_end(end_line, True)))

        elif kind == "code_block":
            self.emit(CodeBlock(self.scan_from(line), self.block_end(end_line, True)))

    # -- inline -------------------------------------------------------------

    def align(self, content: str, start: int, end: int) -> list[int]:
        """Map each index of *content* to its offset in the source text.

        *content* is the source between *start* and *end* with some
        characters removed; every content character is matched to the next
        equal source character.  The extra trailing entry maps ``len(content)``.
        """
        text = self.text
        offsets: list[int] = []
        p = start
        for ch in content:
            q = p
            while q < end and text[q] != ch:
                q += 1
            if q < end:
                offsets.append(q)
                p = q + 1
            else:
                # synthesised by the grammar (e.g. tab expansion)
                offsets.append(p)
        offsets.append(p)
        return offsets

    def inline(self, token: Token) -> None:
        content = token.content
        if not content or not token.children or token.map is None:
            return
        line = token.map[0]
        region_start = self.first_non_space(line)
        region_end = self.line_start(token.map[1])

        children = token.children
        first = children[0]
        if first.type == "html_inline" and _CHECKBOX_CLASS in first.content:
            # the task-list plugin strips "[ ]" from the inline source
            found = self.text.find("[", region_start, region_end)
            if found >= 0:
                self.emit(TaskListMarker(found, found + 3))
                region_start = found + 3
            if content[:3] in ("[ ]", "[x]", "[X]"):
                content = content[3:]
            children = children[1:]

        offsets = self.align(content, region_start, region_end)

        def src(i: int) -> int:
            return offsets[min(max(i, 0), len(content))]

        def src_end(j: int) -> int:
            return offsets[min(j, len(content)) - 1] + 1 if j > 0 else offsets[0]

        pos = 0
        # (slot, content offset of the opening markup or -1)
        paired: list[tuple[int, int]] = []
        links: list[tuple[int, int, bool]] = []

        for child in children:
            kind = child.type

            if kind in ("text", "text_special", "html_inline"):
                needle = child.markup if kind == "text_special" else child.content
                found = content.find(needle, pos) if needle else -1
                if found >= 0:
                    pos = found + len(needle)

            elif kind in ("softbreak", "hardbreak"):
                found = content.find("\n", pos)
                if found >= 0:
                    pos = found + 1

            elif kind.endswith("_open") and kind[:-5] in _PAIRED_INLINE:
                found = content.find(child.markup, pos)
                paired.append((self.reserve(), found))
                if found >= 0:
                    pos = found + len(child.markup)

            elif kind.endswith("_close") and kind[:-6] in _PAIRED_INLINE:
                if not paired:
                    continue
                slot, begin = paired.pop()
                found = content.find(child.markup, pos)
                if begin >= 0 and found >= 0:
                    pos = found + len(child.markup)
                    self.slots[slot] = _PAIRED_INLINE[kind[:-6]](src(begin), src_end(pos))

            elif kind == "code_inline":
                run = _backtick_run(child.markup)
                opening = run.search(content, pos)
                closing = run.search(content, opening.end()) if opening else None
                if opening and closing:
                    self.emit(InlineCode(src(opening.start()), src_end(closing.end())))
                    pos = closing.end()

            elif kind == "link_open":
                inline_link = child.markup not in ("autolink", "linkify")
                found = content.find("<" if not inline_link else "[", pos)
                links.append((self.reserve(), found, inline_link))
                if found >= 0:
                    pos = found + 1

            elif kind == "link_close":
                if not links:
                    continue
                slot, begin, inline_link = links.pop()
                if not inline_link:
                    found = content.find(">", pos)
                    if found >= 0:
                        pos = found + 1
                    continue
                label_close = content.find("]", pos)
                if begin < 0 or label_close < 0:
                    continue
                pos = label_close + 1
                if not content.startswith("(", pos):
                    continue  # reference link
                paren = _destination_end(content, pos + 1)
                if paren >= 0:
                    self.slots[slot] = Link(src(begin), src_end(paren + 1), src(pos + 1))
                    pos = paren + 1

            elif kind == "image":
                found = content.find("![", pos)
                if found < 0:
                    continue
                label_close = _label_end(content, found + 2)
                if label_close < 0 or not content.startswith("(", label_close + 1):
                    pos = found + 2
                    continue
                paren = _destination_end(content, label_close + 2)
                if paren >= 0:
                    self.emit(Image(src(found), src_end(paren + 1), src(label_close + 2)))
                    pos = paren + 1
                else:
                    pos = label_close + 1
