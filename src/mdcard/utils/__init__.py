#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/utils/__init__.py
"""Utility modules for the mdcard package.

This package contains text helpers shared by the session, the public API
and the command-line interface.
"""

from mdcard.utils.text import decode_field, remove_markdown

__all__ = [
    "decode_field",
    "remove_markdown",
]
