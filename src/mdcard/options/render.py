#  Copyright (c) 2025 Tom Villani, Ph.D.
# mdcard/options/render.py
"""Configuration options for card rendering.

This module defines the options that control how a parsed question/answer
pair is laid out and painted: the template, the surface geometry, the
labels painted around the two sections, and font overrides.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Union

from mdcard.constants import (
    DEFAULT_ANSWER_LABEL,
    DEFAULT_CARD_TITLE,
    DEFAULT_CARD_WIDTH,
    DEFAULT_PIXEL_RATIO,
    DEFAULT_QUESTION_LABEL,
    DEFAULT_TEMPLATE,
    DEFAULT_VIEWPORT_HEIGHT,
    DEFAULT_WATERMARK_TEXT,
)
from mdcard.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class RenderOptions(CloneFrozenMixin):
    """Configuration options for painting a question/answer card.

    Parameters
    ----------
    template : str, default "default"
        Name of the visual theme (see ``mdcard.rendering.themes.THEMES``).
    watermark : bool, default False
        Paint the watermark text in the lower right corner.
    width : int, default 375
        Logical surface width in pixels.
    viewport_height : int, default 467
        Minimum logical surface height. The surface grows past this when
        the height estimate says the content needs more room.
    pixel_ratio : float, default 2.0
        Device pixel density multiplier applied once to the surface.
    title : str, default "Q&A"
        Card title painted in the page chrome.
    question_label, answer_label : str
        Section labels painted above each half of the card.
    watermark_text : str
        Text painted when ``watermark`` is enabled.
    font_paths : mapping or tuple of (family, path), default empty
        Font file overrides keyed by family name (``"sans-serif"``,
        ``"serif"``, ``"monospace"`` or a custom family). Useful for CJK
        content, which the default fonts do not cover. Stored as a sorted
        tuple of pairs so options stay hashable; ``font_map`` gives a dict.
    percent_encoded : bool, default False
        Question/answer strings arrive percent-encoded and must be decoded
        before parsing.

    Examples
    --------
        >>> options = RenderOptions(template="book", watermark=True)
        >>> wider = options.create_updated(width=600)

    """

    template: str = field(
        default=DEFAULT_TEMPLATE,
        metadata={"help": "Visual theme: default, simple, book or dialog", "importance": "core"},
    )
    watermark: bool = field(
        default=False,
        metadata={"help": "Paint the watermark in the lower right corner", "type": bool, "importance": "core"},
    )
    width: int = field(
        default=DEFAULT_CARD_WIDTH,
        metadata={"help": "Logical surface width in pixels", "type": int, "importance": "core"},
    )
    viewport_height: int = field(
        default=DEFAULT_VIEWPORT_HEIGHT,
        metadata={"help": "Minimum logical surface height in pixels", "type": int, "importance": "advanced"},
    )
    pixel_ratio: float = field(
        default=DEFAULT_PIXEL_RATIO,
        metadata={"help": "Device pixel density multiplier", "type": float, "importance": "advanced"},
    )
    title: str = field(
        default=DEFAULT_CARD_TITLE,
        metadata={"help": "Card title painted in the page chrome", "importance": "core"},
    )
    question_label: str = field(
        default=DEFAULT_QUESTION_LABEL,
        metadata={"help": "Label painted above the question", "importance": "advanced"},
    )
    answer_label: str = field(
        default=DEFAULT_ANSWER_LABEL,
        metadata={"help": "Label painted above the answer", "importance": "advanced"},
    )
    watermark_text: str = field(
        default=DEFAULT_WATERMARK_TEXT,
        metadata={"help": "Watermark text", "importance": "advanced"},
    )
    font_paths: Union[Mapping[str, str], tuple[tuple[str, str], ...]] = field(
        default=(),
        metadata={"help": "Font file overrides keyed by family name", "importance": "advanced"},
    )
    percent_encoded: bool = field(
        default=False,
        metadata={"help": "Question/answer text is percent-encoded", "type": bool, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges and normalize ``font_paths``.

        Raises
        ------
        ValueError
            If any size or ratio is not positive.

        """
        pairs = self.font_paths.items() if isinstance(self.font_paths, Mapping) else self.font_paths
        object.__setattr__(self, "font_paths", tuple(sorted((str(k), str(v)) for k, v in pairs)))

        if self.width <= 0:
            raise ValueError(f"width must be positive, got {self.width}")
        if self.viewport_height <= 0:
            raise ValueError(f"viewport_height must be positive, got {self.viewport_height}")
        if self.pixel_ratio <= 0:
            raise ValueError(f"pixel_ratio must be positive, got {self.pixel_ratio}")

    @property
    def font_map(self) -> dict[str, str]:
        """Font file overrides as a family to path dictionary."""
        return dict(self.font_paths)
