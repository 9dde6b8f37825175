#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for node tree utilities."""

import pytest

from mdcard.ast import BlockQuote, Code, Emphasis, Heading, Link, List, NodeKind, Paragraph, Strong, Text
from mdcard.ast.utils import extract_text, iter_nodes


@pytest.mark.unit
class TestExtractText:
    """Test plain text extraction."""

    def test_link_with_nested_strong(self) -> None:
        """Test that nested inline runs are concatenated."""
        link = Link(content=(Text("see "), Strong((Text("docs"),))), target="https://example.com")
        assert extract_text(link) == "see docs"

    def test_terminal_kinds_return_their_string(self) -> None:
        """Test text and code spans."""
        assert extract_text(Text("plain")) == "plain"
        assert extract_text(Code("x = 1")) == "x = 1"

    def test_list_items_are_joined(self) -> None:
        """Test that list text covers every item."""
        tree = List(items=((Paragraph((Text("one"),)),), (Paragraph((Text("two"),)),)))
        assert extract_text(tree) == "onetwo"
        assert extract_text(tree, joiner=" ") == "one two"

    def test_sequence_of_nodes(self) -> None:
        """Test extraction from a node sequence."""
        nodes = (Heading(1, (Text("Title"),)), Paragraph((Emphasis((Text("body"),)),)))
        assert extract_text(nodes, joiner="\n") == "Title\nbody"

    def test_empty_input(self) -> None:
        """Test that an empty sequence extracts to an empty string."""
        assert extract_text(()) == ""


@pytest.mark.unit
class TestIterNodes:
    """Test depth-first traversal."""

    def test_parents_before_children(self) -> None:
        """Test document order of a nested tree."""
        tree = (
            BlockQuote((Paragraph((Text("a"), Strong((Text("b"),)))),)),
            List(items=((Paragraph((Code("c"),)),),)),
        )
        kinds = [node.type for node in iter_nodes(tree)]
        assert kinds == [
            NodeKind.BLOCKQUOTE,
            NodeKind.PARAGRAPH,
            NodeKind.TEXT,
            NodeKind.STRONG,
            NodeKind.TEXT,
            NodeKind.LIST,
            NodeKind.PARAGRAPH,
            NodeKind.CODE,
        ]

    def test_terminal_content_is_not_iterated(self) -> None:
        """Test that string content is not walked character by character."""
        assert list(iter_nodes((Text("abc"),))) == [Text("abc")]
