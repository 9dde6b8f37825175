#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/api.py
"""The major exported API functions for card rendering."""

import logging
from pathlib import Path
from typing import IO, Optional, Union

from PIL import Image

from mdcard.exceptions import OutputWriteError
from mdcard.options.markdown import MarkdownParserOptions
from mdcard.options.render import RenderOptions
from mdcard.rendering.surface import SurfaceProvider
from mdcard.session import RenderSession
from mdcard.utils.decorators import debug_timer
from mdcard.utils.text import decode_field, remove_markdown

logger = logging.getLogger(__name__)

__all__ = ["decode_field", "remove_markdown", "render_card", "save_card"]


def render_card(
    question: str,
    answer: str,
    *,
    watermark: Optional[bool] = None,
    options: Optional[RenderOptions] = None,
    parser_options: Optional[MarkdownParserOptions] = None,
    provider: Optional[SurfaceProvider] = None,
) -> Image.Image:
    """Render a question/answer card to a Pillow image.

    Parameters
    ----------
    question : str
        Markdown text of the question section
    answer : str
        Markdown text of the answer section
    watermark : bool, optional
        Paint the watermark; defaults to ``options.watermark``
    options : RenderOptions, optional
        Card geometry, template and labels
    parser_options : MarkdownParserOptions, optional
        Markdown parsing options
    provider : SurfaceProvider, optional
        Surface source; defaults to Pillow surfaces

    Returns
    -------
    PIL.Image.Image
        RGBA image at ``width * pixel_ratio`` device pixels wide

    Raises
    ------
    SurfaceUnavailableError
        If no drawing surface could be acquired
    ValidationError
        If the configured template is unknown

    Examples
    --------
        >>> image = render_card("What is **2 + 2**?", "`4`", options=RenderOptions(template="book"))
        >>> image.mode
        'RGBA'

    """
    session = RenderSession(options, parser_options)
    card = session.parse(question, answer, watermark=watermark)
    with debug_timer(logger, f"Rendering {session.theme.name} card"):
        result = session.render_sync(card, provider)
    if not result.ok:
        logger.warning("Card rendered with failed paint steps: %s", ", ".join(result.failed_tasks))
    return result.to_image()


def save_card(
    question: str,
    answer: str,
    output: Union[str, Path, IO[bytes]],
    *,
    watermark: Optional[bool] = None,
    options: Optional[RenderOptions] = None,
    parser_options: Optional[MarkdownParserOptions] = None,
    image_format: str = "PNG",
) -> Optional[Path]:
    """Render a card and write it as an image.

    Parameters
    ----------
    question, answer : str
        Markdown text of the two sections
    output : str, Path or binary file-like
        Destination path or writable binary stream
    watermark, options, parser_options
        As for ``render_card``
    image_format : str, default "PNG"
        Pillow format name

    Returns
    -------
    Path or None
        The written path, or None when writing to a stream

    Raises
    ------
    OutputWriteError
        If the image could not be written

    """
    image = render_card(question, answer, watermark=watermark, options=options, parser_options=parser_options)

    if isinstance(output, (str, Path)):
        path = Path(output)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            image.save(path, format=image_format)
        except (OSError, ValueError, KeyError) as e:
            raise OutputWriteError(str(path), original_error=e) from e
        logger.info("Wrote card to %s", path)
        return path

    try:
        image.save(output, format=image_format)
    except (OSError, ValueError, KeyError) as e:
        raise OutputWriteError(repr(output), original_error=e) from e
    return None
