"""List range index — where the last parse saw bullet and ordered lists."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from mdlive.models import List, ParseResult


@dataclass(frozen=True)
class Interval:
    start: int
    end: int

    def contains(self, index: int) -> bool:
        """Membership test, end included.

        The index probed is a newline typed just after the list, which sits
        at ``end`` of the range parsed before the keystroke.
        """
        return self.start <= index <= self.end


@dataclass(frozen=True)
class ListRangeIndex:
    """Bullet-list and ordered-list intervals from one parse result."""

    unordered: tuple[Interval, ...] = ()
    ordered: tuple[Interval, ...] = ()

    @classmethod
    def from_parse_result(cls, parsed: ParseResult) -> ListRangeIndex:
        unordered: list[Interval] = []
        ordered: list[Interval] = []
        for tag in parsed.of_type(List):
            target = unordered if tag.order == 0 else ordered
            target.append(Interval(tag.start, tag.end))
        return cls(tuple(unordered), tuple(ordered))

    def __bool__(self) -> bool:
        return bool(self.unordered or self.ordered)


EMPTY_INDEX = ListRangeIndex()


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NoMatch:
    pass


@dataclass(frozen=True)
class UnorderedListMatch:
    interval: Interval


@dataclass(frozen=True)
class OrderedListMatch:
    interval: Interval


ListMatch = Union[NoMatch, UnorderedListMatch, OrderedListMatch]


def match_list(index: int, ranges: ListRangeIndex) -> ListMatch:
    """Find the list containing *index*; bullet lists are checked first."""
    for interval in ranges.unordered:
        if interval.contains(index):
            return UnorderedListMatch(interval)
    for interval in ranges.ordered:
        if interval.contains(index):
            return OrderedListMatch(interval)
    return NoMatch()
