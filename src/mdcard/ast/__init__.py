#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/ast/__init__.py
"""Document tree for question/answer cards.

The module consists of three components:

- nodes: immutable node classes for the closed set of block and inline kinds
- visitors: visitor base class used by the painter and the height estimator
- utils: text extraction and tree traversal helpers

Examples
--------
    >>> from mdcard.ast import Heading, Paragraph, Text
    >>> nodes = (
    ...     Heading(level=1, content=(Text("Title"),)),
    ...     Paragraph(content=(Text("Hello world"),)),
    ... )

"""

from __future__ import annotations

from mdcard.ast.nodes import (
    BLOCK_KINDS,
    INLINE_KINDS,
    NODE_CLASSES,
    TERMINAL_KINDS,
    BlockNode,
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    Heading,
    InlineNode,
    Link,
    List,
    Node,
    NodeKind,
    Paragraph,
    Strong,
    Text,
    ThematicBreak,
    fallback_document,
)
from mdcard.ast.utils import extract_text, iter_nodes
from mdcard.ast.visitors import VISIT_METHODS, NodeVisitor

__all__ = [
    "BLOCK_KINDS",
    "INLINE_KINDS",
    "NODE_CLASSES",
    "TERMINAL_KINDS",
    "VISIT_METHODS",
    "BlockNode",
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Emphasis",
    "Heading",
    "InlineNode",
    "Link",
    "List",
    "Node",
    "NodeKind",
    "NodeVisitor",
    "Paragraph",
    "Strong",
    "Text",
    "ThematicBreak",
    "extract_text",
    "fallback_document",
    "iter_nodes",
]
