"""mdcard - Render Markdown question/answer cards to images.

mdcard parses two short Markdown texts (a question and an answer) into a
small closed AST, lays the nodes out with greedy line wrapping, and paints
them onto a drawing surface using one of four themes.

The pipeline estimates the content height first, grows the surface when the
card is taller than the viewport, then paints background, question, answer
and watermark as prioritized tasks on a cooperative render queue.

Key Features
------------
- Never-failing Markdown parsing (falls back to a single paragraph)
- Memoized text measurement shared across a render pass
- Code-point line wrapping suitable for CJK text
- Themes: default, simple, book, dialog
- Pillow-backed drawing surface with HiDPI pixel ratio support
- Plain-text reduction of Markdown for previews

Examples
--------
Render a card to an image:

    >>> from mdcard import RenderOptions, render_card
    >>> image = render_card("What is **2 + 2**?", "`4`", options=RenderOptions(template="simple"))
    >>> image.save("card.png")

Strip Markdown for a preview:

    >>> from mdcard import remove_markdown
    >>> remove_markdown("# Title")
    'Title'

See Also
--------
mdcard.session : render session and pipeline
mdcard.ast : AST node definitions and visitors

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "mdcard requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from mdcard.api import render_card, save_card
from mdcard.exceptions import (
    MdCardError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    SurfaceUnavailableError,
    ValidationError,
)
from mdcard.options import MarkdownParserOptions, RenderOptions
from mdcard.parsers import parse_markdown
from mdcard.rendering.themes import get_theme, list_themes
from mdcard.session import RenderResult, RenderSession
from mdcard.utils.text import decode_field, remove_markdown

__all__ = [
    "__version__",
    "render_card",
    "save_card",
    "parse_markdown",
    "remove_markdown",
    "decode_field",
    # Session
    "RenderSession",
    "RenderResult",
    # Options
    "MarkdownParserOptions",
    "RenderOptions",
    # Themes
    "get_theme",
    "list_themes",
    # Exceptions
    "MdCardError",
    "ValidationError",
    "ParsingError",
    "RenderingError",
    "SurfaceUnavailableError",
    "OutputWriteError",
]
