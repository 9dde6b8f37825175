#  Copyright (c) 2025 Tom Villani, Ph.D.
# mdcard/options/markdown.py
"""Configuration options for Markdown parsing.

This module defines options for turning raw question/answer text into
the block/inline node tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mdcard.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class MarkdownParserOptions(CloneFrozenMixin):
    r"""Configuration options for Markdown-to-node parsing.

    Parameters
    ----------
    preserve_soft_breaks : bool, default True
        Keep single newlines inside a paragraph as ``"\n"`` so the
        line-wrapping engine breaks there. When False, soft breaks become
        spaces as in HTML rendering. Hard breaks (two trailing spaces or a
        backslash) always become ``"\n"``.

    """

    preserve_soft_breaks: bool = field(
        default=True,
        metadata={
            "help": "Keep single newlines inside paragraphs as line breaks",
            "type": bool,
            "importance": "core",
        },
    )
