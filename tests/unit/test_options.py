#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for option dataclasses."""

import dataclasses

import pytest

from mdcard.ast import Paragraph, Text
from mdcard.options import MarkdownParserOptions, RenderOptions, create_updated_options
from mdcard.parsers.markdown import parse_markdown


@pytest.mark.unit
class TestRenderOptions:
    """Test render option defaults, cloning and validation."""

    def test_defaults(self) -> None:
        """Test the default card geometry."""
        options = RenderOptions()
        assert (options.template, options.width, options.viewport_height, options.pixel_ratio) == (
            "default",
            375,
            467,
            2.0,
        )
        assert options.watermark is False
        assert options.watermark_text == "Made with mdcard"

    def test_create_updated(self) -> None:
        """Test that cloning leaves the original untouched."""
        options = RenderOptions()
        updated = options.create_updated(template="book", width=600)
        assert (updated.template, updated.width) == ("book", 600)
        assert (options.template, options.width) == ("default", 375)

    def test_frozen(self) -> None:
        """Test immutability."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            RenderOptions().width = 10  # type: ignore[misc]

    @pytest.mark.parametrize("field_name", ["width", "viewport_height", "pixel_ratio"])
    @pytest.mark.parametrize("value", [0, -1])
    def test_sizes_must_be_positive(self, field_name: str, value: int) -> None:
        """Test numeric validation."""
        with pytest.raises(ValueError, match=field_name):
            RenderOptions(**{field_name: value})

    def test_create_updated_validates(self) -> None:
        """Test that cloned options are validated too."""
        with pytest.raises(ValueError):
            RenderOptions().create_updated(pixel_ratio=0)

    def test_field_names_and_to_dict(self) -> None:
        """Test option introspection."""
        names = RenderOptions.field_names()
        assert names[0] == "template"
        assert "percent_encoded" in names
        assert RenderOptions(title="Deck").to_dict()["title"] == "Deck"

    def test_options_are_hashable(self) -> None:
        """Test that equal options hash equally, font overrides included."""
        fonts = {"serif": "/fonts/serif.ttf", "sans-serif": "/fonts/cjk.ttc"}
        first = RenderOptions(font_paths=fonts)
        second = RenderOptions(font_paths=dict(reversed(list(fonts.items()))))
        assert hash(RenderOptions()) == hash(RenderOptions())
        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second, RenderOptions()}) == 2

    def test_font_paths_are_normalized(self) -> None:
        """Test that a mapping is stored as sorted pairs and exposed as a dict."""
        options = RenderOptions(font_paths={"serif": "/fonts/serif.ttf", "monospace": "/fonts/mono.ttf"})
        assert options.font_paths == (("monospace", "/fonts/mono.ttf"), ("serif", "/fonts/serif.ttf"))
        assert options.font_map == {"monospace": "/fonts/mono.ttf", "serif": "/fonts/serif.ttf"}
        assert options.create_updated(width=400).font_paths == options.font_paths
        assert RenderOptions().font_map == {}


@pytest.mark.unit
class TestMarkdownParserOptions:
    """Test parser option validation."""

    def test_defaults(self) -> None:
        """Test the default soft break handling."""
        options = MarkdownParserOptions()
        assert options.preserve_soft_breaks is True
        assert MarkdownParserOptions.field_names() == ["preserve_soft_breaks"]

    def test_block_separator_is_not_an_option(self) -> None:
        """Test that the separator appended before tokenizing cannot be configured."""
        with pytest.raises(TypeError):
            MarkdownParserOptions(block_separator=" injected\n\n")
        with pytest.raises(TypeError):
            MarkdownParserOptions().create_updated(block_separator="\n\n\n")

    @pytest.mark.parametrize("preserve_soft_breaks", [True, False])
    def test_parsing_appends_only_a_blank_line(self, preserve_soft_breaks: bool) -> None:
        """Test that no text beyond the user's input reaches the final block."""
        options = MarkdownParserOptions(preserve_soft_breaks=preserve_soft_breaks)
        assert parse_markdown("Hello", options) == (Paragraph(content=(Text(content="Hello"),)),)

    def test_module_level_update_helper(self) -> None:
        """Test the helper for deriving options of either class."""
        options = create_updated_options(MarkdownParserOptions(), preserve_soft_breaks=False)
        assert isinstance(options, MarkdownParserOptions)
        assert options.preserve_soft_breaks is False
