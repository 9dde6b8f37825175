#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the mdcard parser and renderer.

Using frozen dataclasses provides type safety, default values, and a
clean API for configuring behavior. Use ``create_updated`` (or the
module-level helper) to derive modified copies.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from mdcard.options.base import CloneFrozenMixin
from mdcard.options.markdown import MarkdownParserOptions
from mdcard.options.render import RenderOptions


def create_updated_options(options: Any, **kwargs: Any) -> Any:
    """Create a new options instance with updated values.

    Parameters
    ----------
    options : Any
        The original options instance (must be a dataclass)
    **kwargs
        Field values to update

    Returns
    -------
    Any
        New options instance with updated values

    """
    return replace(options, **kwargs)


__all__ = [
    "CloneFrozenMixin",
    "MarkdownParserOptions",
    "RenderOptions",
    "create_updated_options",
]
