#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/ast/visitors.py
"""Visitor pattern implementation for node-tree traversal.

This module provides the visitor base class used by both the paint engine
and the height estimator. Every node kind has exactly one abstract
``visit_<kind>(node, context)`` method, so a visitor that forgets a kind
cannot be instantiated: adding a kind to ``NodeKind`` without handling it
everywhere fails loudly instead of falling through to the unknown-node path.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from mdcard.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    Heading,
    Link,
    List,
    Node,
    NodeKind,
    Paragraph,
    Strong,
    Text,
    ThematicBreak,
)

logger = logging.getLogger(__name__)

ContextT = TypeVar("ContextT")
ResultT = TypeVar("ResultT")

# Visit method name for every node kind
VISIT_METHODS: dict[NodeKind, str] = {kind: f"visit_{kind.value}" for kind in NodeKind}


class NodeVisitor(ABC, Generic[ContextT, ResultT]):
    """Abstract base class for node visitors.

    Subclasses implement one ``visit_<kind>`` method per node kind. Each
    method receives the node and a visitor-specific context and returns a
    result; for the layout visitors the context is a ``RenderContext`` and
    the result is the next vertical offset.

    Examples
    --------
    Counting visited kinds:

        >>> class KindCounter(NodeVisitor[None, None]):
        ...     def __init__(self):
        ...         self.seen = []
        ...     def visit_text(self, node, context):
        ...         self.seen.append(node.type)
        ...     # ... one method per kind ...

    """

    def visit(self, node: Any, context: ContextT) -> Optional[ResultT]:
        """Dispatch ``node`` to its visit method.

        Objects that are not document nodes are reported through
        ``unknown_node`` instead of raising.

        Parameters
        ----------
        node : Any
            The node to visit
        context : ContextT
            Visitor-specific state

        Returns
        -------
        ResultT or None
            Result of the matching visit method

        """
        if not isinstance(node, Node):
            return self.unknown_node(node, context)
        return node.accept(self, context)

    def unknown_node(self, node: Any, context: ContextT) -> Optional[ResultT]:
        """Handle an object outside the closed node set.

        The default logs a warning and returns None. Layout visitors
        override this to return the unchanged cursor position.

        """
        kind = getattr(node, "type", None) or type(node).__name__
        logger.warning("Skipping unsupported node kind: %s", kind)
        return None

    @abstractmethod
    def visit_heading(self, node: Heading, context: ContextT) -> ResultT:
        """Visit a Heading node."""

    @abstractmethod
    def visit_paragraph(self, node: Paragraph, context: ContextT) -> ResultT:
        """Visit a Paragraph node."""

    @abstractmethod
    def visit_list(self, node: List, context: ContextT) -> ResultT:
        """Visit a List node."""

    @abstractmethod
    def visit_hr(self, node: ThematicBreak, context: ContextT) -> ResultT:
        """Visit a ThematicBreak node."""

    @abstractmethod
    def visit_blockquote(self, node: BlockQuote, context: ContextT) -> ResultT:
        """Visit a BlockQuote node."""

    @abstractmethod
    def visit_code_block(self, node: CodeBlock, context: ContextT) -> ResultT:
        """Visit a CodeBlock node."""

    @abstractmethod
    def visit_text(self, node: Text, context: ContextT) -> ResultT:
        """Visit a Text node."""

    @abstractmethod
    def visit_strong(self, node: Strong, context: ContextT) -> ResultT:
        """Visit a Strong node."""

    @abstractmethod
    def visit_em(self, node: Emphasis, context: ContextT) -> ResultT:
        """Visit an Emphasis node."""

    @abstractmethod
    def visit_link(self, node: Link, context: ContextT) -> ResultT:
        """Visit a Link node."""

    @abstractmethod
    def visit_code(self, node: Code, context: ContextT) -> ResultT:
        """Visit an inline Code node."""
