#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for the Markdown to node-tree parser."""

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mdcard.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    Heading,
    Link,
    List,
    Paragraph,
    Strong,
    Text,
    ThematicBreak,
    fallback_document,
)
from mdcard.options import MarkdownParserOptions
from mdcard.parsers.markdown import MarkdownParser, parse_markdown


@pytest.mark.unit
class TestBlockParsing:
    """Test block-level conversion."""

    def test_heading_and_paragraph(self) -> None:
        """Test a heading followed by a paragraph."""
        nodes = parse_markdown("# Hello\n\nWorld")
        assert nodes == (Heading(level=1, content=(Text("Hello"),)), Paragraph((Text("World"),)))

    def test_heading_levels(self) -> None:
        """Test all six heading levels."""
        nodes = parse_markdown("\n".join(f"{'#' * level} H{level}" for level in range(1, 7)))
        assert [node.level for node in nodes] == [1, 2, 3, 4, 5, 6]

    def test_fenced_code_block(self) -> None:
        """Test that fenced code keeps its body and language, without the trailing newline."""
        nodes = parse_markdown("```python\nx = 1\ny = 2\n```")
        assert nodes == (CodeBlock(content="x = 1\ny = 2", language="python"),)

    def test_code_block_without_language(self) -> None:
        """Test a fence with no info string."""
        (node,) = parse_markdown("```\nplain\n```")
        assert isinstance(node, CodeBlock)
        assert node.language is None

    def test_blockquote(self) -> None:
        """Test that quoted content nests as blocks."""
        assert parse_markdown("> quoted") == (BlockQuote((Paragraph((Text("quoted"),)),)),)

    def test_unordered_list(self) -> None:
        """Test that each item becomes its own node sequence."""
        (node,) = parse_markdown("- a\n- b")
        assert isinstance(node, List)
        assert not node.ordered
        assert node.items == ((Paragraph((Text("a"),)),), (Paragraph((Text("b"),)),))

    def test_ordered_list_start(self) -> None:
        """Test that ordered lists keep their start number."""
        (node,) = parse_markdown("3. three\n4. four")
        assert isinstance(node, List)
        assert node.ordered
        assert node.start == 3
        assert len(node.items) == 2

    def test_nested_list(self) -> None:
        """Test that a nested list lives inside its parent item."""
        (node,) = parse_markdown("- outer\n  - inner")
        assert isinstance(node, List)
        assert any(isinstance(child, List) for child in node.items[0])

    def test_thematic_break(self) -> None:
        """Test a rule between paragraphs."""
        nodes = parse_markdown("before\n\n---\n\nafter")
        assert nodes == (Paragraph((Text("before"),)), ThematicBreak(), Paragraph((Text("after"),)))

    def test_unsupported_block_degrades_to_paragraph(self) -> None:
        """Test that block HTML is painted as its raw text."""
        (node,) = parse_markdown("<div>hi</div>")
        assert node == Paragraph((Text("<div>hi</div>"),))


@pytest.mark.unit
class TestInlineParsing:
    """Test inline conversion."""

    def test_strong_then_text(self) -> None:
        """Test bold followed by plain text."""
        assert parse_markdown("**bold** text") == (Paragraph((Strong((Text("bold"),)), Text(" text"))),)

    def test_emphasis_and_code(self) -> None:
        """Test emphasis and a code span."""
        (para,) = parse_markdown("*em* and `code`")
        assert para.content == (Emphasis((Text("em"),)), Text(" and "), Code("code"))

    def test_nested_inline(self) -> None:
        """Test emphasis inside strong."""
        (para,) = parse_markdown("**bold *both***")
        (strong,) = para.content
        assert isinstance(strong, Strong)
        assert strong.content == (Text("bold "), Emphasis((Text("both"),)))

    def test_link(self) -> None:
        """Test link label, target and title."""
        (para,) = parse_markdown('[docs](https://example.com "Title")')
        assert para.content == (Link((Text("docs"),), target="https://example.com", title="Title"),)

    def test_image_becomes_link_with_alt(self) -> None:
        """Test that images are reduced to their alt text."""
        (para,) = parse_markdown("![a cat](cat.png)")
        (link,) = para.content
        assert isinstance(link, Link)
        assert link.alt == "a cat"
        assert link.target == "cat.png"
        assert link.content == (Text("a cat"),)

    def test_soft_break_kept_as_newline(self) -> None:
        """Test that a single newline stays a line break and text runs merge."""
        assert parse_markdown("line one\nline two") == (Paragraph((Text("line one\nline two"),)),)

    def test_soft_break_as_space(self) -> None:
        """Test soft breaks collapsing to spaces when configured."""
        options = MarkdownParserOptions(preserve_soft_breaks=False)
        assert parse_markdown("line one\nline two", options) == (Paragraph((Text("line one line two"),)),)

    def test_hard_break(self) -> None:
        """Test that a backslash break becomes a newline."""
        options = MarkdownParserOptions(preserve_soft_breaks=False)
        assert parse_markdown("a\\\nb", options) == (Paragraph((Text("a\nb"),)),)


@pytest.mark.unit
class TestParserRobustness:
    """Test that parsing never raises."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\t"])
    def test_blank_input(self, text: str) -> None:
        """Test that blank input yields no nodes."""
        assert parse_markdown(text) == ()

    def test_conversion_failure_falls_back(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that a failure inside conversion yields the single-paragraph fallback."""

        def explode(self, tokens):
            raise RuntimeError("boom")

        monkeypatch.setattr(MarkdownParser, "_process_tokens", explode)
        with caplog.at_level(logging.WARNING, logger="mdcard.parsers.markdown"):
            nodes = parse_markdown("**unbalanced")
        assert nodes == fallback_document("**unbalanced")
        assert "boom" in caplog.text

    def test_unexpected_token_stream_falls_back(self) -> None:
        """Test that a non-list token stream is treated as a failure."""
        parser = MarkdownParser()
        parser._markdown = type("Broken", (), {"parse": lambda self, text: ("<p>html</p>", None)})()
        assert parser.parse("hello") == fallback_document("hello")

    @given(st.text(max_size=200))
    def test_parse_is_deterministic(self, text: str) -> None:
        """Test that parsing the same text twice gives equal trees."""
        assert parse_markdown(text) == parse_markdown(text)

    @given(
        st.lists(
            st.sampled_from(["# ", "**", "*", "`", "> ", "- ", "1. ", "[", "](", ")", "\n", "---", "```", "text", " "]),
            max_size=40,
        )
    )
    def test_markdown_fragments_never_raise(self, parts: list[str]) -> None:
        """Test that syntax fragments in any order produce a tuple of nodes."""
        nodes = parse_markdown("".join(parts))
        assert isinstance(nodes, tuple)
