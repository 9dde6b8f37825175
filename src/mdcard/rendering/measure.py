#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/rendering/measure.py
"""Memoized text measurement.

Measuring text is the dominant cost of layout: the wrapping engine measures
every growing prefix of every line. ``TextMeasureCache`` memoizes widths by
``(text, font)`` for the lifetime of one render session.

"""

from __future__ import annotations

import logging

from mdcard.rendering.surface import DrawingSurface, TextMetrics

logger = logging.getLogger(__name__)


class TextMeasureCache:
    """Cache of text widths keyed by ``(text, font)``.

    The surface font is switched to ``font`` for the measurement and always
    restored afterwards, since the painter shares that state.

    The cache is unbounded; call ``clear()`` between unrelated documents
    when one session renders many of them.

    Examples
    --------
        >>> cache = TextMeasureCache()
        >>> cache.measure(surface, "Hello", "14px sans-serif").width  # doctest: +SKIP
        33.0

    """

    def __init__(self) -> None:
        """Create an empty cache."""
        self._entries: dict[tuple[str, str], TextMetrics] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def measure(self, surface: DrawingSurface, text: str, font: str) -> TextMetrics:
        """Measure ``text`` rendered in ``font``.

        Parameters
        ----------
        surface : DrawingSurface
            Surface providing the measurement primitive
        text : str
            Text to measure
        font : str
            CSS font shorthand

        Returns
        -------
        TextMetrics
            Measured width in logical pixels; zero for empty text

        """
        if not text:
            return TextMetrics(width=0.0)

        key = (text, font)
        cached = self._entries.get(key)
        if cached is not None:
            self.hits += 1
            return cached

        self.misses += 1
        original_font = surface.font
        surface.font = font
        try:
            metrics = surface.measure_text(text)
        finally:
            surface.font = original_font

        self._entries[key] = metrics
        return metrics

    def clear(self) -> None:
        """Drop every cached measurement and reset the counters."""
        logger.debug("Clearing measurement cache (%d entries, %d hits, %d misses)", len(self), self.hits, self.misses)
        self._entries.clear()
        self.hits = 0
        self.misses = 0
