"""List continuation — react to Enter pressed inside a list item.

Only one edit shape is handled: a single newline typed at a plain cursor.
Inside a bullet list the next line gets a ``- `` marker; inside an ordered
list it gets ``1. ``.  Pressing Enter right after ``- `` (or ``. ``), or on
a line holding nothing but a marker, removes that marker instead, which
ends the list.  Every other edit is returned unchanged.
"""

from __future__ import annotations

import enum
import re
from typing import assert_never

from loguru import logger

from mdlive.lists import (
    ListRangeIndex,
    NoMatch,
    OrderedListMatch,
    UnorderedListMatch,
    match_list,
)
from mdlive.models import TextFieldValue

UNORDERED_MARKER = "- "
ORDERED_MARKER = "1. "
UNORDERED_TRIGGER = "-"
ORDERED_TRIGGER = "."

# lines holding nothing but a marker the literal triggers miss
_BARE_BULLET_LINE = re.compile(r"[*+] ")
_BARE_ORDERED_LINE = re.compile(r"\d+[.)] ")


class Action(enum.Enum):
    NONE = "none"
    INSERT_MARKER = "insert"
    DELETE_MARKER = "delete"


def is_enter_keystroke(old: TextFieldValue, new: TextFieldValue) -> bool:
    """True when *new* is *old* plus one newline typed at the cursor."""
    if not (old.selection.collapsed and new.selection.collapsed):
        return False
    if old.selection.start + 1 != new.selection.start:
        return False
    i = new.selection.end - 1
    return 0 <= i < len(new.text) and new.text[i] == "\n"


def continue_list(
    old: TextFieldValue,
    new: TextFieldValue,
    ranges: ListRangeIndex,
) -> TextFieldValue:
    """Return the editor value to keep after the edit *old* → *new*.

    *ranges* must come from the parse of the text displayed before the edit.
    """
    if not is_enter_keystroke(old, new):
        return new

    newline = new.selection.end - 1
    match match_list(newline, ranges):
        case UnorderedListMatch():
            action, count = _plan(new.text, newline, ordered=False)
            marker = UNORDERED_MARKER
        case OrderedListMatch():
            action, count = _plan(new.text, newline, ordered=True)
            marker = ORDERED_MARKER
        case NoMatch():
            return new
        case unreachable:
            assert_never(unreachable)

    logger.debug(f"enter at {newline}: {action.value}")
    if action is Action.INSERT_MARKER:
        return _insert(new, marker)
    if action is Action.DELETE_MARKER:
        return _delete(new, newline, count)
    return new


def _plan(text: str, newline: int, ordered: bool) -> tuple[Action, int]:
    """Decide what Enter at *newline* does; returns the action and delete count.

    ``"- "`` (or ``". "``) right before the newline always deletes a fixed
    3 (or 4) characters.  Any other marker only counts when it is the whole
    line, so ``"a + "`` or ``"f(x) "`` keep their text.
    """
    if newline < 1:
        return Action.NONE, 0
    if text[newline - 1] == "\n":
        # blank line: the list already ended
        return Action.NONE, 0
    line_start = text.rfind("\n", 0, newline) + 1
    bare = _BARE_ORDERED_LINE if ordered else _BARE_BULLET_LINE
    if bare.fullmatch(text, line_start, newline):
        return Action.DELETE_MARKER, newline - line_start + 1
    trigger = ORDERED_TRIGGER if ordered else UNORDERED_TRIGGER
    if newline >= 2 and text[newline - 2] == trigger and text[newline - 1] == " ":
        return Action.DELETE_MARKER, 4 if ordered else 3
    return Action.INSERT_MARKER, 0


def _insert(value: TextFieldValue, marker: str) -> TextFieldValue:
    at = value.selection.end
    return TextFieldValue(
        text=value.text[:at] + marker + value.text[at:],
        selection=value.selection.shifted(len(marker)),
    )


def _delete(value: TextFieldValue, newline: int, count: int) -> TextFieldValue:
    begin = max(newline - count, 0)
    return TextFieldValue(
        text=value.text[:begin] + value.text[newline:],
        selection=value.selection.shifted(begin - newline),
    )
