#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/ast/utils.py
"""Utility functions for working with document nodes.

Functions
---------
extract_text : Concatenate the text content of a node tree
iter_nodes : Walk a node tree depth-first

Examples
--------
Extract the label of a link:

    >>> from mdcard.ast import Link, Strong, Text
    >>> from mdcard.ast.utils import extract_text
    >>>
    >>> link = Link(content=(Text("see "), Strong((Text("docs"),))), target="https://example.com")
    >>> extract_text(link)
    'see docs'

"""

from __future__ import annotations

from typing import Iterable, Iterator, Union

from mdcard.ast.nodes import List, Node, TERMINAL_KINDS


def extract_text(node_or_nodes: Union[Node, Iterable[Node]], joiner: str = "") -> str:
    """Extract plain text from a node or a sequence of nodes.

    Terminal nodes (text, inline code, code blocks) contribute their string
    content verbatim; container nodes contribute the text of their children.

    Parameters
    ----------
    node_or_nodes : Node or iterable of Node
        A single node or a sequence of nodes
    joiner : str, default = ""
        String placed between sibling parts. The default keeps inline runs
        glued together the way they appear on screen.

    Returns
    -------
    str
        Concatenated text content

    """
    if isinstance(node_or_nodes, Node):
        node = node_or_nodes
        if node.type in TERMINAL_KINDS:
            return str(node.content)
        if isinstance(node, List):
            return joiner.join(extract_text(item, joiner) for item in node.items)
        return extract_text(node.content, joiner)

    return joiner.join(extract_text(child, joiner) for child in node_or_nodes)


def iter_nodes(nodes: Iterable[Node]) -> Iterator[Node]:
    """Yield every node of a tree in depth-first document order.

    Parameters
    ----------
    nodes : iterable of Node
        Top-level node sequence

    Yields
    ------
    Node
        Each node, parents before their children

    """
    for node in nodes:
        yield node
        if node.type not in TERMINAL_KINDS:
            yield from iter_nodes(node.content)
