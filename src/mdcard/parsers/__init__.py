#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/parsers/__init__.py
"""Parsers turning card section text into node trees."""

from mdcard.parsers.markdown import MarkdownParser, parse_markdown

__all__ = ["MarkdownParser", "parse_markdown"]
