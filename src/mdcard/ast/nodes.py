#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/ast/nodes.py
"""Node classes for the question/answer document tree.

This module defines the closed set of node kinds the layout engine knows
how to paint. Every node is an immutable value: it is built once by the
parser and never mutated afterwards, so two parses of the same text compare
equal and a parsed tree can be repainted under any theme.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern
through ``accept(visitor, context)``.

Block-level nodes represent vertical document units:
    - Heading, Paragraph, List, ThematicBreak (``hr``), BlockQuote, CodeBlock

Inline nodes represent content within a block:
    - Text, Strong, Emphasis (``em``), Link, Code

Terminal kinds (``text``, ``code``, ``code_block``) carry a string in
``content``; every other kind carries a tuple of child nodes.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Iterable, Optional, Union

if TYPE_CHECKING:
    from mdcard.ast.visitors import NodeVisitor


class NodeKind(str, Enum):
    """Discriminant of the node tagged union."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    HR = "hr"
    BLOCKQUOTE = "blockquote"
    CODE_BLOCK = "code_block"
    TEXT = "text"
    STRONG = "strong"
    EM = "em"
    LINK = "link"
    CODE = "code"

    def __str__(self) -> str:
        return self.value


BLOCK_KINDS = frozenset(
    {NodeKind.HEADING, NodeKind.PARAGRAPH, NodeKind.LIST, NodeKind.HR, NodeKind.BLOCKQUOTE, NodeKind.CODE_BLOCK}
)
INLINE_KINDS = frozenset({NodeKind.TEXT, NodeKind.STRONG, NodeKind.EM, NodeKind.LINK, NodeKind.CODE})
TERMINAL_KINDS = frozenset({NodeKind.TEXT, NodeKind.CODE, NodeKind.CODE_BLOCK})


def _freeze_children(children: Iterable[Node]) -> tuple[Node, ...]:
    return children if isinstance(children, tuple) else tuple(children)


class Node(ABC):
    """Base class for all document nodes.

    Subclasses set the class-level ``type`` discriminant and implement
    ``accept`` by calling the matching ``visit_<kind>`` method.

    """

    type: ClassVar[NodeKind]

    @property
    def is_block(self) -> bool:
        """Whether this node is a block-level node."""
        return self.type in BLOCK_KINDS

    @abstractmethod
    def accept(self, visitor: NodeVisitor[Any, Any], context: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : NodeVisitor
            A visitor implementing one ``visit_<kind>`` method per node kind
        context : Any
            Visitor-specific state threaded through the walk

        Returns
        -------
        Any
            Result from the visitor's processing

        """


class _ContainerNode(Node):
    """Node whose ``content`` is a tuple of child nodes."""

    content: tuple[Node, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "content", _freeze_children(self.content))


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass(frozen=True)
class Heading(_ContainerNode):
    """Heading with a level and inline content.

    Parameters
    ----------
    level : int, default = 1
        Heading level. Values outside 1-6 are accepted here and clamped by
        the consumers that resolve a style for them.
    content : tuple of Node
        Inline nodes forming the heading text

    """

    type: ClassVar[NodeKind] = NodeKind.HEADING

    level: int = 1
    content: tuple[Node, ...] = ()

    def accept(self, visitor: NodeVisitor[Any, Any], context: Any) -> Any:
        """Accept a visitor for processing this heading."""
        return visitor.visit_heading(self, context)


@dataclass(frozen=True)
class Paragraph(_ContainerNode):
    """Paragraph of inline content."""

    type: ClassVar[NodeKind] = NodeKind.PARAGRAPH

    content: tuple[Node, ...] = ()

    def accept(self, visitor: NodeVisitor[Any, Any], context: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self, context)


@dataclass(frozen=True)
class List(Node):
    """Ordered or unordered list.

    Parameters
    ----------
    items : tuple of tuple of Node
        One node sequence per list item. Items may hold nested block
        content, including further lists.
    ordered : bool, default = False
        Whether the source list was numbered
    start : int, default = 1
        First number of an ordered list

    """

    type: ClassVar[NodeKind] = NodeKind.LIST

    items: tuple[tuple[Node, ...], ...] = ()
    ordered: bool = False
    start: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(_freeze_children(item) for item in self.items))

    @property
    def content(self) -> tuple[Node, ...]:
        """All item nodes, flattened in document order."""
        return tuple(node for item in self.items for node in item)

    def accept(self, visitor: NodeVisitor[Any, Any], context: Any) -> Any:
        """Accept a visitor for processing this list."""
        return visitor.visit_list(self, context)


@dataclass(frozen=True)
class ThematicBreak(Node):
    """Horizontal rule (``hr``)."""

    type: ClassVar[NodeKind] = NodeKind.HR

    @property
    def content(self) -> tuple[Node, ...]:
        """A rule has no children."""
        return ()

    def accept(self, visitor: NodeVisitor[Any, Any], context: Any) -> Any:
        """Accept a visitor for processing this rule."""
        return visitor.visit_hr(self, context)


@dataclass(frozen=True)
class BlockQuote(_ContainerNode):
    """Block quote holding nested block content."""

    type: ClassVar[NodeKind] = NodeKind.BLOCKQUOTE

    content: tuple[Node, ...] = ()

    def accept(self, visitor: NodeVisitor[Any, Any], context: Any) -> Any:
        """Accept a visitor for processing this block quote."""
        return visitor.visit_blockquote(self, context)


@dataclass(frozen=True)
class CodeBlock(Node):
    """Fenced or indented code block.

    Parameters
    ----------
    content : str
        Raw code, lines separated by ``"\\n"``
    language : str or None, default = None
        Language taken from the fence info string

    """

    type: ClassVar[NodeKind] = NodeKind.CODE_BLOCK

    content: str = ""
    language: Optional[str] = None

    def accept(self, visitor: NodeVisitor[Any, Any], context: Any) -> Any:
        """Accept a visitor for processing this code block."""
        return visitor.visit_code_block(self, context)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass(frozen=True)
class Text(Node):
    """Plain text run. May contain ``"\\n"`` for explicit line breaks."""

    type: ClassVar[NodeKind] = NodeKind.TEXT

    content: str = ""

    def accept(self, visitor: NodeVisitor[Any, Any], context: Any) -> Any:
        """Accept a visitor for processing this text run."""
        return visitor.visit_text(self, context)


@dataclass(frozen=True)
class Strong(_ContainerNode):
    """Bold inline content."""

    type: ClassVar[NodeKind] = NodeKind.STRONG

    content: tuple[Node, ...] = ()

    def accept(self, visitor: NodeVisitor[Any, Any], context: Any) -> Any:
        """Accept a visitor for processing this strong run."""
        return visitor.visit_strong(self, context)


@dataclass(frozen=True)
class Emphasis(_ContainerNode):
    """Italic inline content (``em``)."""

    type: ClassVar[NodeKind] = NodeKind.EM

    content: tuple[Node, ...] = ()

    def accept(self, visitor: NodeVisitor[Any, Any], context: Any) -> Any:
        """Accept a visitor for processing this emphasis run."""
        return visitor.visit_em(self, context)


@dataclass(frozen=True)
class Link(_ContainerNode):
    """Hyperlink, or an image reduced to its alt text.

    Parameters
    ----------
    content : tuple of Node
        Inline nodes forming the link label
    target : str or None, default = None
        Link destination
    title : str or None, default = None
        Optional link title
    alt : str or None, default = None
        Alternative text; only set for image-like links

    """

    type: ClassVar[NodeKind] = NodeKind.LINK

    content: tuple[Node, ...] = ()
    target: Optional[str] = None
    title: Optional[str] = None
    alt: Optional[str] = None

    def accept(self, visitor: NodeVisitor[Any, Any], context: Any) -> Any:
        """Accept a visitor for processing this link."""
        return visitor.visit_link(self, context)


@dataclass(frozen=True)
class Code(Node):
    """Inline code span."""

    type: ClassVar[NodeKind] = NodeKind.CODE

    content: str = ""

    def accept(self, visitor: NodeVisitor[Any, Any], context: Any) -> Any:
        """Accept a visitor for processing this code span."""
        return visitor.visit_code(self, context)


BlockNode = Union[Heading, Paragraph, List, ThematicBreak, BlockQuote, CodeBlock]
InlineNode = Union[Text, Strong, Emphasis, Link, Code]

NODE_CLASSES: dict[NodeKind, type[Node]] = {
    NodeKind.HEADING: Heading,
    NodeKind.PARAGRAPH: Paragraph,
    NodeKind.LIST: List,
    NodeKind.HR: ThematicBreak,
    NodeKind.BLOCKQUOTE: BlockQuote,
    NodeKind.CODE_BLOCK: CodeBlock,
    NodeKind.TEXT: Text,
    NodeKind.STRONG: Strong,
    NodeKind.EM: Emphasis,
    NodeKind.LINK: Link,
    NodeKind.CODE: Code,
}


def fallback_document(text: str) -> tuple[Node, ...]:
    """Build the degraded tree used when parsing fails.

    Parameters
    ----------
    text : str
        The original, unparsed input

    Returns
    -------
    tuple of Node
        A single paragraph wrapping the raw text as one text node

    """
    return (Paragraph(content=(Text(content=text),)),)


__all__ = [
    "BLOCK_KINDS",
    "INLINE_KINDS",
    "NODE_CLASSES",
    "TERMINAL_KINDS",
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
    "Paragraph",
    "Strong",
    "Text",
    "ThematicBreak",
    "fallback_document",
]
