#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/rendering/wrapping.py
"""Greedy line wrapping over Unicode code points.

Lines are broken at whichever code point would push the running line past
the maximum width; word boundaries are not considered, and combining
sequences may be split. An explicit ``"\\n"`` always ends the current line.

"""

from __future__ import annotations

from dataclasses import dataclass

from mdcard.rendering.measure import TextMeasureCache
from mdcard.rendering.surface import DrawingSurface


@dataclass(frozen=True)
class TextLine:
    """One wrapped physical line.

    Parameters
    ----------
    text : str
        Line content, without any newline
    width : float
        Measured width of ``text`` in the wrapping font
    x : float
        Left edge of the line
    y : float
        Alphabetic baseline of the line

    """

    text: str
    width: float
    x: float
    y: float


def wrap_text(
    surface: DrawingSurface,
    cache: TextMeasureCache,
    text: str,
    x: float,
    y: float,
    max_width: float,
    line_height: float,
    font: str,
) -> list[TextLine]:
    r"""Wrap ``text`` into lines no wider than ``max_width``.

    Parameters
    ----------
    surface : DrawingSurface
        Surface used for measurement; its font is left unchanged
    cache : TextMeasureCache
        Measurement cache
    text : str
        Text to wrap
    x, y : float
        Origin of the first line (``y`` is its baseline)
    max_width : float
        Maximum line width
    line_height : float
        Baseline advance between lines
    font : str
        CSS font shorthand used for measuring

    Returns
    -------
    list of TextLine
        Lines in order, ``y`` increasing by ``line_height`` per line. Empty
        for empty text. A line is wider than ``max_width`` only when it
        holds a single code point.

    Examples
    --------
        >>> lines = wrap_text(surface, cache, "Hello\nWorld", 0, 20, 500, 24, "14px sans-serif")  # doctest: +SKIP
        >>> [(line.text, line.y) for line in lines]  # doctest: +SKIP
        [('Hello', 20), ('World', 44)]

    """
    lines: list[TextLine] = []
    current = ""
    current_y = y

    def emit(line_text: str) -> None:
        lines.append(TextLine(line_text, cache.measure(surface, line_text, font).width, x, current_y))

    for char in text:
        if char == "\n":
            emit(current)
            current = ""
            current_y += line_height
            continue

        candidate = current + char
        if current and cache.measure(surface, candidate, font).width > max_width:
            emit(current)
            current = char
            current_y += line_height
        else:
            current = candidate

    if current:
        emit(current)

    return lines
