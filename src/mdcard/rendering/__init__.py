#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/rendering/__init__.py
"""Layout and paint engine.

- surface: drawing surface protocol and the Pillow implementation
- fonts: CSS font shorthand parsing and font file resolution
- measure: memoized text measurement
- wrapping: greedy code-point line wrapping
- themes: theme registry
- painter: node layout/paint visitor
- estimate: content height estimator
- templates: question/answer card layouts
- scheduling: cooperative priority queue for paint tasks

"""

from mdcard.rendering.estimate import HeightEstimator, estimate_height
from mdcard.rendering.measure import TextMeasureCache
from mdcard.rendering.painter import MarkdownPainter, RenderContext
from mdcard.rendering.scheduling import RenderQueue
from mdcard.rendering.surface import (
    DrawingSurface,
    PillowSurface,
    PillowSurfaceProvider,
    SurfaceProvider,
    TextMetrics,
    parse_color,
)
from mdcard.rendering.templates import CardContent, CardTemplate, DialogTemplate, PanelTemplate, create_template
from mdcard.rendering.themes import THEMES, PageChrome, TextStyle, Theme, get_theme, list_themes
from mdcard.rendering.wrapping import TextLine, wrap_text

__all__ = [
    "THEMES",
    "CardContent",
    "CardTemplate",
    "DialogTemplate",
    "DrawingSurface",
    "HeightEstimator",
    "MarkdownPainter",
    "PageChrome",
    "PanelTemplate",
    "PillowSurface",
    "PillowSurfaceProvider",
    "RenderContext",
    "RenderQueue",
    "SurfaceProvider",
    "TextLine",
    "TextMeasureCache",
    "TextMetrics",
    "TextStyle",
    "Theme",
    "create_template",
    "estimate_height",
    "get_theme",
    "list_themes",
    "parse_color",
    "wrap_text",
]
