#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for greedy code-point line wrapping."""

import pytest
from hypothesis import given
from hypothesis import strategies as st
from utils import RecordingSurface

from mdcard.rendering.measure import TextMeasureCache
from mdcard.rendering.wrapping import TextLine, wrap_text

# 10px font with the recording surface: 5 px per code point
FONT = "10px sans-serif"
ADVANCE = 5


def wrap(text: str, max_width: float = 500, y: float = 20, line_height: float = 24) -> list[TextLine]:
    return wrap_text(RecordingSurface(), TextMeasureCache(), text, 0, y, max_width, line_height, FONT)


@pytest.mark.unit
class TestWrapText:
    """Test line breaking rules."""

    def test_explicit_newline(self) -> None:
        """Test that a newline ends the line and advances by one line height."""
        lines = wrap("Hello\nWorld")
        assert [(line.text, line.y) for line in lines] == [("Hello", 20), ("World", 44)]

    def test_empty_text_has_no_lines(self) -> None:
        """Test that empty input produces nothing."""
        assert wrap("") == []

    def test_consecutive_newlines_emit_empty_lines(self) -> None:
        """Test that blank lines occupy vertical space."""
        lines = wrap("a\n\nb")
        assert [line.text for line in lines] == ["a", "", "b"]
        assert [line.y for line in lines] == [20, 44, 68]

    def test_trailing_newline_emits_no_extra_line(self) -> None:
        """Test that a final newline does not produce a trailing empty line."""
        assert [line.text for line in wrap("a\n")] == ["a"]

    def test_breaks_at_code_points(self) -> None:
        """Test greedy breaking when the width is exceeded."""
        lines = wrap("abcdefg", max_width=3 * ADVANCE)
        assert [line.text for line in lines] == ["abc", "def", "g"]
        assert [line.width for line in lines] == [15, 15, 5]

    def test_cjk_text_wraps_per_character(self) -> None:
        """Test that text without spaces wraps anywhere."""
        lines = wrap("你好世界", max_width=2 * ADVANCE)
        assert [line.text for line in lines] == ["你好", "世界"]

    def test_single_character_wider_than_limit(self) -> None:
        """Test that an oversized code point gets a line of its own instead of looping."""
        lines = wrap("ab", max_width=1)
        assert [line.text for line in lines] == ["a", "b"]
        assert all(line.width > 1 for line in lines)

    def test_lines_start_at_x(self) -> None:
        """Test that every line starts at the given x."""
        lines = wrap_text(RecordingSurface(), TextMeasureCache(), "abcdef", 42, 0, 10, 12, FONT)
        assert {line.x for line in lines} == {42}

    def test_surface_font_untouched(self) -> None:
        """Test that wrapping leaves the surface font as it was."""
        surface = RecordingSurface(font="bold 30px serif")
        wrap_text(surface, TextMeasureCache(), "abc def", 0, 0, 10, 12, FONT)
        assert surface.font == "bold 30px serif"

    @given(
        st.text(alphabet=st.characters(blacklist_categories=("Cs",)), max_size=80),
        st.integers(min_value=1, max_value=200),
    )
    def test_lines_fit_unless_single_code_point(self, text: str, max_width: int) -> None:
        """Test that only single-code-point lines may exceed the width."""
        for line in wrap(text, max_width=max_width):
            assert line.width <= max_width or len(line.text) == 1

    @given(st.text(max_size=80), st.integers(min_value=1, max_value=200))
    def test_baselines_strictly_increase_by_line_height(self, text: str, max_width: int) -> None:
        """Test that consecutive lines are exactly one line height apart."""
        lines = wrap(text, max_width=max_width, y=7, line_height=11)
        for index, line in enumerate(lines):
            assert line.y == 7 + index * 11

    @given(st.text(alphabet=st.characters(blacklist_characters="\n"), max_size=80))
    def test_text_is_preserved(self, text: str) -> None:
        """Test that wrapping without newlines only splits, never drops code points."""
        assert "".join(line.text for line in wrap(text, max_width=17)) == text
