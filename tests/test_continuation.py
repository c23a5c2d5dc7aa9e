"""Tests for list continuation on Enter."""

import pytest

from mdlive.continuation import continue_list, is_enter_keystroke
from mdlive.lists import EMPTY_INDEX, Interval, ListRangeIndex
from mdlive.models import TextFieldValue, TextRange


def _value(text, start, end=None):
    return TextFieldValue(text, TextRange(start, start if end is None else end))


def _bullets(start, end):
    return ListRangeIndex(unordered=(Interval(start, end),))


def _numbers(start, end):
    return ListRangeIndex(ordered=(Interval(start, end),))


class TestEditShape:
    def test_single_newline_at_cursor(self):
        assert is_enter_keystroke(_value("- item", 6), _value("- item\n", 7))

    def test_paste_is_not_enter(self):
        assert not is_enter_keystroke(_value("- item", 6), _value("- item\nxx", 9))

    def test_plain_character_is_not_enter(self):
        assert not is_enter_keystroke(_value("- ite", 5), _value("- item", 6))

    def test_deletion_is_not_enter(self):
        assert not is_enter_keystroke(_value("- item\n", 7), _value("- item", 6))

    def test_selection_replaced_is_not_enter(self):
        assert not is_enter_keystroke(_value("- item", 2, 6), _value("- \n", 3))

    def test_cursor_jump_is_not_enter(self):
        assert not is_enter_keystroke(_value("a\nb", 0), _value("a\nb", 2))


class TestUnordered:
    def test_insert_marker(self):
        result = continue_list(_value("- item", 6), _value("- item\n", 7), _bullets(0, 7))
        assert result == _value("- item\n- ", 9)

    def test_insert_in_middle_of_text(self):
        old = _value("- a\n- b", 3)
        new = _value("- a\n\n- b", 4)
        result = continue_list(old, new, _bullets(0, 7))
        assert result == _value("- a\n- \n- b", 6)

    def test_delete_empty_bullet(self):
        old = _value("- item\n- ", 9)
        new = _value("- item\n- \n", 10)
        result = continue_list(old, new, _bullets(0, 9))
        assert result == _value("- item\n", 7)

    @pytest.mark.parametrize("glyph", ["*", "+"])
    def test_delete_other_glyphs(self, glyph):
        old = _value(f"{glyph} a\n{glyph} ", 6)
        new = _value(f"{glyph} a\n{glyph} \n", 7)
        assert continue_list(old, new, _bullets(0, 6)) == _value(f"{glyph} a\n", 4)

    @pytest.mark.parametrize("glyph", ["*", "+"])
    def test_content_ending_in_glyph_gets_marker(self, glyph):
        old = _value(f"- 1 {glyph} ", 6)
        new = _value(f"- 1 {glyph} \n", 7)
        result = continue_list(old, new, _bullets(0, 6))
        assert result == _value(f"- 1 {glyph} \n- ", 9)

    def test_content_ending_in_dash_deletes_three(self):
        old = _value("- a - ", 6)
        new = _value("- a - \n", 7)
        assert continue_list(old, new, _bullets(0, 6)) == _value("- a\n", 4)

    def test_indented_star_line_is_not_bare(self):
        old = _value("* a\n  * ", 8)
        new = _value("* a\n  * \n", 9)
        result = continue_list(old, new, _bullets(0, 8))
        assert result == _value("* a\n  * \n- ", 11)

    def test_delete_clamped_at_text_start(self):
        result = continue_list(_value("- ", 2), _value("- \n", 3), _bullets(0, 2))
        assert result == _value("\n", 1)

    def test_blank_line_ends_list(self):
        old = _value("- a\n", 4)
        new = _value("- a\n\n", 5)
        assert continue_list(old, new, _bullets(0, 4)) == new

    def test_newline_at_index_zero(self):
        new = _value("\n- a", 1)
        assert continue_list(_value("- a", 0), new, _bullets(0, 3)) == new


class TestOrdered:
    def test_insert_marker(self):
        result = continue_list(_value("1. one", 6), _value("1. one\n", 7), _numbers(0, 6))
        assert result == _value("1. one\n1. ", 10)

    def test_delete_empty_item(self):
        old = _value("1. one\n1. ", 10)
        new = _value("1. one\n1. \n", 11)
        assert continue_list(old, new, _numbers(0, 10)) == _value("1. one\n", 7)

    def test_delete_multi_digit_marker(self):
        old = _value("9. a\n10. ", 9)
        new = _value("9. a\n10. \n", 10)
        assert continue_list(old, new, _numbers(0, 9)) == _value("9. a\n", 5)

    def test_paren_delimiter_deletes(self):
        old = _value("1) a\n1) ", 8)
        new = _value("1) a\n1) \n", 9)
        assert continue_list(old, new, _numbers(0, 8)) == _value("1) a\n", 5)

    def test_content_ending_in_paren_gets_marker(self):
        old = _value("1. call f(x) ", 13)
        new = _value("1. call f(x) \n", 14)
        result = continue_list(old, new, _numbers(0, 13))
        assert result == _value("1. call f(x) \n1. ", 17)

    def test_content_ending_in_period_deletes_four(self):
        old = _value("1. end. ", 8)
        new = _value("1. end. \n", 9)
        assert continue_list(old, new, _numbers(0, 8)) == _value("1. e\n", 5)

    def test_multi_digit_marker_with_content_gets_marker(self):
        old = _value("10) a", 5)
        new = _value("10) a\n", 6)
        result = continue_list(old, new, _numbers(0, 5))
        assert result == _value("10) a\n1. ", 9)


class TestPassThrough:
    def test_no_list_match(self):
        old = _value("plain text", 5)
        new = _value("plain\n text", 6)
        assert continue_list(old, new, _bullets(20, 30)) == new

    def test_empty_index(self):
        new = _value("- item\n", 7)
        assert continue_list(_value("- item", 6), new, EMPTY_INDEX) == new

    def test_non_enter_edit_untouched_inside_list(self):
        new = _value("- item\nxx", 9)
        assert continue_list(_value("- item", 6), new, _bullets(0, 7)) == new
