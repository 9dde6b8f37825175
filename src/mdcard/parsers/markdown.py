#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/parsers/markdown.py
"""Markdown to node-tree converter.

This module turns the raw text of one card section into the closed node set
of ``mdcard.ast`` using the mistune tokenizer. The conversion never raises:
any failure degrades to a single paragraph holding the original text, so
the layout engine always receives a valid tree.

"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import mistune

from mdcard.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    Heading,
    Link,
    List,
    Node,
    Paragraph,
    Strong,
    Text,
    ThematicBreak,
    fallback_document,
)
from mdcard.constants import BLOCK_SEPARATOR
from mdcard.exceptions import ParsingError
from mdcard.options.markdown import MarkdownParserOptions

logger = logging.getLogger(__name__)


class MarkdownParser:
    r"""Convert Markdown text to a tuple of block nodes.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = MarkdownParser()
        >>> nodes = parser.parse("# Hello\\n\\nThis is **bold**.")
        >>> [node.type.value for node in nodes]
        ['heading', 'paragraph']

    Failures never propagate:

        >>> parser.parse("") == ()
        True

    """

    def __init__(self, options: Optional[MarkdownParserOptions] = None):
        """Initialize the parser with options."""
        self.options: MarkdownParserOptions = options or MarkdownParserOptions()
        self._markdown = mistune.create_markdown(renderer=None)

    def parse(self, text: str) -> tuple[Node, ...]:
        """Parse Markdown text into block nodes.

        Parameters
        ----------
        text : str
            Raw Markdown for one card section

        Returns
        -------
        tuple of Node
            Block nodes in document order. Empty for empty or whitespace-only
            input; a single fallback paragraph if conversion fails.

        """
        if not text or not text.strip():
            return ()

        try:
            tokens, _state = self._markdown.parse(text + BLOCK_SEPARATOR)
            if not isinstance(tokens, list):
                raise ParsingError(
                    f"Unexpected token stream of type {type(tokens).__name__}", parsing_stage="tokenizing"
                )
            return tuple(self._process_tokens(tokens))
        except Exception as e:
            logger.warning("Markdown parsing failed, rendering raw text instead: %s", e)
            return fallback_document(text)

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process a list of mistune block tokens into nodes."""
        nodes: list[Node] = []

        for token in tokens:
            node = self._process_token(token)
            if node is not None:
                nodes.append(node)

        return nodes

    def _process_token(self, token: dict[str, Any]) -> Optional[Node]:
        """Process a single mistune block token.

        Parameters
        ----------
        token : dict
            Mistune token dictionary with 'type' and other fields

        Returns
        -------
        Node or None
            Resulting node, or None for tokens that produce no output

        """
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is used for tight list items
            return self._process_paragraph(token)
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(content=tuple(self._process_tokens(token.get("children", []))))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "blank_line":
            return None

        # Anything outside the node set is painted as its raw text
        raw = token.get("raw") or self._collect_raw(token.get("children", []))
        if not raw.strip():
            return None
        logger.debug("Degrading unsupported block token %r to a paragraph", token_type)
        return Paragraph(content=(Text(content=raw.strip("\n")),))

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        """Process heading token."""
        attrs = token.get("attrs", {})
        level = attrs.get("level", 1) if isinstance(attrs, dict) else 1
        return Heading(level=level, content=tuple(self._process_inline_tokens(token.get("children", []))))

    def _process_paragraph(self, token: dict[str, Any]) -> Paragraph:
        """Process paragraph token."""
        return Paragraph(content=tuple(self._process_inline_tokens(token.get("children", []))))

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process code block token.

        The trailing newline mistune keeps on fenced blocks is dropped so the
        block does not paint an empty last line.

        """
        code_content = token.get("raw", "")
        if code_content.endswith("\n"):
            code_content = code_content[:-1]

        attrs = token.get("attrs", {})
        info_string = attrs.get("info") if isinstance(attrs, dict) else None
        language = None
        if info_string and info_string.strip():
            language = info_string.strip().split(maxsplit=1)[0]

        return CodeBlock(content=code_content, language=language)

    def _process_list(self, token: dict[str, Any]) -> List:
        """Process list token."""
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}

        children = token.get("children", [])
        if not isinstance(children, list):
            children = []

        items = tuple(
            tuple(self._process_tokens(child.get("children", []))) for child in children if isinstance(child, dict)
        )
        return List(items=items, ordered=bool(attrs.get("ordered", False)), start=attrs.get("start", 1))

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process inline tokens, merging adjacent text runs.

        Parameters
        ----------
        tokens : list of dict
            Inline token dictionaries

        Returns
        -------
        list of Node
            Inline nodes

        """
        nodes: list[Node] = []

        for token in tokens:
            node = self._process_inline_token(token)
            if node is None:
                continue
            if isinstance(node, Text) and nodes and isinstance(nodes[-1], Text):
                nodes[-1] = Text(content=nodes[-1].content + node.content)
            else:
                nodes.append(node)

        return nodes

    def _handle_text_token(self, token: dict[str, Any]) -> Text:
        """Handle text token."""
        return Text(content=token.get("raw", ""))

    def _handle_strong_token(self, token: dict[str, Any]) -> Strong:
        """Handle strong token."""
        return Strong(content=tuple(self._process_inline_tokens(token.get("children", []))))

    def _handle_emphasis_token(self, token: dict[str, Any]) -> Emphasis:
        """Handle emphasis token."""
        return Emphasis(content=tuple(self._process_inline_tokens(token.get("children", []))))

    def _handle_codespan_token(self, token: dict[str, Any]) -> Code:
        """Handle codespan token."""
        return Code(content=token.get("raw", ""))

    def _handle_link_token(self, token: dict[str, Any]) -> Link:
        """Handle link token."""
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        content = tuple(self._process_inline_tokens(token.get("children", [])))
        return Link(content=content, target=attrs.get("url"), title=attrs.get("title"))

    def _handle_image_token(self, token: dict[str, Any]) -> Link:
        """Handle image token.

        Images cannot be painted, so they become links whose label is the
        alt text.

        """
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        alt_text = self._collect_raw(token.get("children", []))
        return Link(
            content=(Text(content=alt_text),) if alt_text else (),
            target=attrs.get("url"),
            title=attrs.get("title"),
            alt=alt_text,
        )

    def _handle_linebreak_token(self, token: dict[str, Any]) -> Text:
        """Handle hard line break token."""
        return Text(content="\n")

    def _handle_softbreak_token(self, token: dict[str, Any]) -> Text:
        """Handle soft line break token."""
        return Text(content="\n" if self.options.preserve_soft_breaks else " ")

    def _process_inline_token(self, token: dict[str, Any]) -> Optional[Node]:
        """Process a single inline token.

        Unknown inline tokens contribute their raw text.

        """
        token_type = token.get("type", "")

        handler_map: dict[str, Callable[[dict[str, Any]], Node]] = {
            "text": self._handle_text_token,
            "strong": self._handle_strong_token,
            "emphasis": self._handle_emphasis_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "linebreak": self._handle_linebreak_token,
            "softbreak": self._handle_softbreak_token,
        }

        handler = handler_map.get(token_type)
        if handler:
            return handler(token)

        raw = token.get("raw") or self._collect_raw(token.get("children", []))
        return Text(content=raw) if raw else None

    def _collect_raw(self, tokens: Any) -> str:
        """Concatenate the raw text of a token subtree."""
        if not isinstance(tokens, list):
            return ""
        parts = []
        for token in tokens:
            if not isinstance(token, dict):
                continue
            if "raw" in token:
                parts.append(str(token["raw"]))
            else:
                parts.append(self._collect_raw(token.get("children", [])))
        return "".join(parts)


def parse_markdown(text: str, options: Optional[MarkdownParserOptions] = None) -> tuple[Node, ...]:
    """Parse Markdown text into block nodes.

    Parameters
    ----------
    text : str
        Raw Markdown text
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Returns
    -------
    tuple of Node
        Parsed block nodes; never raises

    Examples
    --------
        >>> parse_markdown("**bold** text")
        (Paragraph(content=(Strong(content=(Text(content='bold'),)), Text(content=' text'))),)

    """
    return MarkdownParser(options).parse(text)
