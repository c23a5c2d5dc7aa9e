"""Tests for the render cache."""

from mdlive.cache import IDENTITY, RenderCache
from mdlive.lists import EMPTY_INDEX, Interval
from mdlive.models import Heading, List, ParseResult
from mdlive.theme import DEFAULT_THEME, ColorScheme, Theme


class CountingParser:
    """Stands in for the markdown parser and counts invocations."""

    def __init__(self, result=ParseResult()):
        self.result = result
        self.calls = []

    def __call__(self, text):
        self.calls.append(text)
        return self.result


class TestGetOrCompute:
    def test_second_call_is_served_from_cache(self):
        parser = CountingParser(ParseResult((Heading(0, 7, 1),)))
        cache = RenderCache(parser)
        first = cache.get_or_compute("# Title", DEFAULT_THEME)
        second = cache.get_or_compute("# Title", DEFAULT_THEME)
        assert first == second
        assert first.styled is second.styled
        assert parser.calls == ["# Title"]

    def test_identity_offset_mapping(self):
        shown = RenderCache(CountingParser()).get_or_compute("abc", DEFAULT_THEME)
        assert shown.offset_mapping is IDENTITY
        assert shown.offset_mapping.original_to_transformed(2) == 2
        assert shown.offset_mapping.transformed_to_original(2) == 2
        assert shown.text == "abc"

    def test_different_text_replaces_entry(self):
        parser = CountingParser()
        cache = RenderCache(parser)
        cache.get_or_compute("a", DEFAULT_THEME)
        cache.get_or_compute("b", DEFAULT_THEME)
        cache.get_or_compute("b", DEFAULT_THEME)
        assert parser.calls == ["a", "b"]

    def test_different_theme_misses(self):
        parser = CountingParser()
        cache = RenderCache(parser)
        cache.get_or_compute("a", DEFAULT_THEME)
        cache.get_or_compute("a", Theme(colors=ColorScheme(primary="#000000")))
        assert len(parser.calls) == 2

    def test_default_parser_is_markdown(self):
        cache = RenderCache()
        cache.get_or_compute("# x", DEFAULT_THEME)
        assert cache.parsed.of_type(Heading) == [Heading(0, 3, 1)]


class TestInvalidate:
    def test_invalidate_forces_reparse(self):
        parser = CountingParser()
        cache = RenderCache(parser)
        cache.get_or_compute("# Title", DEFAULT_THEME)
        cache.invalidate()
        cache.get_or_compute("# Title", DEFAULT_THEME)
        assert len(parser.calls) == 2

    def test_invalidate_clears_list_ranges(self):
        cache = RenderCache(CountingParser(ParseResult((List(0, 7),))))
        cache.get_or_compute("- item\n", DEFAULT_THEME)
        assert cache.list_ranges.unordered == (Interval(0, 7),)
        cache.invalidate()
        assert cache.list_ranges is EMPTY_INDEX
        assert cache.entry is None
        assert cache.parsed == ParseResult()

    def test_invalidate_when_empty(self):
        cache = RenderCache(CountingParser())
        cache.invalidate()
        assert cache.entry is None
