"""Tests for styled text and its builder."""

from mdlive.styles import BOLD, SpanStyle, StyledText, StyledTextBuilder, StyleSpan


class TestSpanStyle:
    def test_merge_overrides_set_attributes_only(self):
        base = SpanStyle(color="#111111", font_weight=BOLD)
        merged = base.merge(SpanStyle(color="#222222"))
        assert merged.color == "#222222"
        assert merged.font_weight == BOLD

    def test_empty(self):
        assert SpanStyle().is_empty
        assert not SpanStyle(font_style="italic").is_empty


class TestStyledText:
    def test_style_at_last_wins_per_attribute(self):
        styled = StyledText("abc", (
            StyleSpan(0, 3, SpanStyle(color="#111111", font_weight=BOLD)),
            StyleSpan(1, 2, SpanStyle(color="#222222")),
        ))
        assert styled.style_at(0).color == "#111111"
        assert styled.style_at(1).color == "#222222"
        assert styled.style_at(1).font_weight == BOLD

    def test_uncovered_character_is_unstyled(self):
        styled = StyledText("abc", (StyleSpan(0, 1, SpanStyle(color="#111111")),))
        assert styled.style_at(2) == SpanStyle()

    def test_plain_is_source(self):
        assert StyledText("# x").plain == "# x"
        assert len(StyledText("# x")) == 3


class TestBuilder:
    def test_clamps_out_of_range(self):
        builder = StyledTextBuilder("abc")
        builder.add_style(SpanStyle(color="#111111"), -4, 40)
        (span,) = builder.build().spans
        assert (span.start, span.end) == (0, 3)

    def test_drops_empty_and_inverted(self):
        builder = StyledTextBuilder("abc")
        builder.add_style(SpanStyle(color="#111111"), 2, 2)
        builder.add_style(SpanStyle(color="#111111"), 3, 1)
        builder.add_style(SpanStyle(), 0, 3)
        assert builder.build().spans == ()

    def test_keeps_application_order(self):
        builder = StyledTextBuilder("abc")
        builder.add_style(SpanStyle(color="#111111"), 0, 3)
        builder.add_style(SpanStyle(color="#222222"), 0, 1)
        colors = [s.style.color for s in builder.build().spans]
        assert colors == ["#111111", "#222222"]
