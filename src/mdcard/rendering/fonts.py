#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/rendering/fonts.py
"""Font descriptors and font file resolution.

Styles describe fonts with the CSS shorthand used by 2D canvas APIs
(``"italic bold 14px serif"``). This module parses that shorthand,
rewrites it for strong/emphasis runs, and resolves it to a Pillow font.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Mapping, Optional

from PIL import ImageFont

from mdcard.constants import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE, FONT_FILE_CANDIDATES, GENERIC_FAMILIES

logger = logging.getLogger(__name__)

_SIZE_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)px$")
_STYLE_KEYWORDS = {"italic", "oblique"}
_BOLD_KEYWORDS = {"bold", "bolder", "600", "700", "800", "900"}
_NEUTRAL_KEYWORDS = {"normal", "regular", "light", "lighter", "thin", "100", "200", "300", "400", "500"}


@dataclass(frozen=True)
class FontDescriptor:
    """Parsed CSS font shorthand.

    Parameters
    ----------
    size : float
        Font size in CSS pixels
    families : tuple of str
        Font families in preference order
    bold : bool, default False
        Bold weight
    italic : bool, default False
        Italic style

    """

    size: float = DEFAULT_FONT_SIZE
    families: tuple[str, ...] = (DEFAULT_FONT_FAMILY,)
    bold: bool = False
    italic: bool = False

    @property
    def family(self) -> str:
        """First-choice family."""
        return self.families[0] if self.families else DEFAULT_FONT_FAMILY

    def __str__(self) -> str:
        parts = []
        if self.italic:
            parts.append("italic")
        if self.bold:
            parts.append("bold")
        size = int(self.size) if float(self.size).is_integer() else self.size
        parts.append(f"{size}px")
        parts.append(", ".join(self.families))
        return " ".join(parts)


@lru_cache(maxsize=512)
def parse_font(font: str) -> FontDescriptor:
    """Parse a CSS font shorthand string.

    Unknown keywords before the size are ignored. A string without a pixel
    size keeps the default size.

    Parameters
    ----------
    font : str
        Font shorthand such as ``"bold 24px sans-serif"``

    Returns
    -------
    FontDescriptor
        Parsed descriptor

    Examples
    --------
        >>> parse_font("italic bold 14px serif")
        FontDescriptor(size=14.0, families=('serif',), bold=True, italic=True)

    """
    tokens = font.split()
    bold = False
    italic = False
    size: float = DEFAULT_FONT_SIZE
    family_tokens: list[str] = []

    for index, token in enumerate(tokens):
        lowered = token.lower()
        size_match = _SIZE_PATTERN.match(lowered.split("/", 1)[0])
        if size_match:
            size = float(size_match.group(1))
            family_tokens = tokens[index + 1 :]
            break
        if lowered in _STYLE_KEYWORDS:
            italic = True
        elif lowered in _BOLD_KEYWORDS:
            bold = True
        elif lowered not in _NEUTRAL_KEYWORDS:
            logger.debug("Ignoring unknown font keyword %r in %r", token, font)

    families = tuple(
        name.strip().strip("\"'") for name in " ".join(family_tokens).split(",") if name.strip().strip("\"'")
    )
    return FontDescriptor(size=size, families=families or (DEFAULT_FONT_FAMILY,), bold=bold, italic=italic)


def embolden(font: str) -> str:
    """Return ``font`` with a bold weight. Idempotent."""
    return str(replace(parse_font(font), bold=True))


def italicize(font: str) -> str:
    """Return ``font`` with an italic style. Idempotent."""
    return str(replace(parse_font(font), italic=True))


def _try_truetype(path: str, size: int) -> Optional[ImageFont.FreeTypeFont]:
    try:
        return ImageFont.truetype(path, size)
    except OSError:
        return None


@lru_cache(maxsize=256)
def load_font(
    families: tuple[str, ...],
    bold: bool,
    italic: bool,
    pixel_size: int,
    overrides: tuple[tuple[str, str], ...] = (),
) -> ImageFont.FreeTypeFont:
    """Load a Pillow font for the given family list and style.

    Parameters
    ----------
    families : tuple of str
        Families in preference order. Families present in ``overrides`` use
        the configured file; generic families use the built-in candidate
        table. Other names are skipped.
    bold, italic : bool
        Requested style
    pixel_size : int
        Size in device pixels
    overrides : tuple of (family, path) pairs
        Font file overrides from configuration

    Returns
    -------
    ImageFont.FreeTypeFont
        The first font that loads, or Pillow's built-in scalable font

    """
    override_map = dict(overrides)
    for family in (*families, DEFAULT_FONT_FAMILY):
        if family in override_map:
            font = _try_truetype(override_map[family], pixel_size)
            if font is not None:
                return font
            logger.warning("Configured font file for %r could not be loaded: %s", family, override_map[family])
        if family in GENERIC_FAMILIES:
            for candidate in FONT_FILE_CANDIDATES.get((family, bold, italic), ()):
                font = _try_truetype(candidate, pixel_size)
                if font is not None:
                    return font

    logger.debug("No font file found for %s, using Pillow default font", families)
    return ImageFont.load_default(size=pixel_size)


def resolve_font(
    font: str, scale: float = 1.0, font_paths: Optional[Mapping[str, str]] = None
) -> ImageFont.FreeTypeFont:
    """Resolve a CSS font shorthand to a Pillow font at a device scale.

    Parameters
    ----------
    font : str
        Font shorthand
    scale : float, default 1.0
        Device pixel multiplier applied to the CSS size
    font_paths : mapping, optional
        Font file overrides keyed by family name

    Returns
    -------
    ImageFont.FreeTypeFont
        Loaded font

    """
    descriptor = parse_font(font)
    pixel_size = max(1, round(descriptor.size * scale))
    overrides = tuple(sorted((font_paths or {}).items()))
    return load_font(descriptor.families, descriptor.bold, descriptor.italic, pixel_size, overrides)
