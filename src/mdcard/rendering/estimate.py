#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/rendering/estimate.py
"""Content height estimation.

The estimator walks the same node tree as the painter, with the same
per-kind dispatch, but never draws. Text-bearing kinds run the real
wrapping engine against a measurement surface, so their line counts are
exact; headings and lists add fixed heuristic floors on top, so the
estimate stays at or above the painted height. The result sizes the
drawing surface before painting; an under-estimate would clip the card.

"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Iterable, Optional

from mdcard.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    Heading,
    Link,
    List,
    Node,
    Paragraph,
    Strong,
    Text,
    ThematicBreak,
)
from mdcard.ast.utils import extract_text
from mdcard.ast.visitors import NodeVisitor
from mdcard.constants import (
    BLOCKQUOTE_INDENT,
    BLOCKQUOTE_PADDING,
    CODE_BLOCK_PADDING,
    ESTIMATE_HEADING_HEIGHT,
    ESTIMATE_HR_HEIGHT,
    ESTIMATE_LIST_ITEM_HEIGHT,
    ESTIMATE_SAFETY_MARGIN,
    HEADING_BASELINE_RATIO,
    HEADING_BOTTOM_MARGIN,
    LIST_INDENT,
    LIST_ITEM_SPACING,
    NODE_SPACING,
)
from mdcard.rendering.fonts import embolden, italicize
from mdcard.rendering.measure import TextMeasureCache
from mdcard.rendering.painter import RenderContext, end_of_lines
from mdcard.rendering.surface import DrawingSurface, PillowSurface
from mdcard.rendering.themes import Theme

logger = logging.getLogger(__name__)


class HeightEstimator(NodeVisitor[RenderContext, float]):
    """Predict where the painter's cursor ends without painting.

    Every ``visit_<kind>`` returns the estimated cursor after the node,
    mirroring ``MarkdownPainter``.

    """

    def visit(self, node: Any, context: RenderContext) -> float:
        """Dispatch ``node``; unsupported objects leave the cursor unchanged."""
        result = super().visit(node, context)
        return context.y if result is None else result

    def unknown_node(self, node: Any, context: RenderContext) -> float:
        """Treat an unsupported node as zero height."""
        super().unknown_node(node, context)
        return context.y

    def estimate_nodes(self, context: RenderContext, nodes: Iterable[Any]) -> float:
        """Estimate the cursor after a node sequence, spacing included."""
        y = context.y
        for node in nodes:
            if not isinstance(node, Node):
                self.unknown_node(node, context.at(y))
                continue
            y = self.visit(node, context.at(y)) + NODE_SPACING
        return y

    def visit_heading(self, node: Heading, context: RenderContext) -> float:
        """Wrapped heading height, never below the fixed heading floor."""
        style = context.theme.heading_style(node.level)
        first_baseline = context.y + style.line_height * HEADING_BASELINE_RATIO
        lines = context.wrap(extract_text(node.content), first_baseline, style)
        end = (lines[-1].y + style.line_height if lines else first_baseline) + HEADING_BOTTOM_MARGIN
        return max(end, context.y + ESTIMATE_HEADING_HEIGHT)

    def visit_paragraph(self, node: Paragraph, context: RenderContext) -> float:
        """Sum of the inline runs."""
        y = context.y
        for child in node.content:
            y = self.visit(child, context.at(y))
        return y

    def visit_list(self, node: List, context: RenderContext) -> float:
        """Per item, the larger of the fixed item floor and the nested estimate."""
        style = context.theme.list
        item_context = context.narrowed(LIST_INDENT)
        y = context.y

        for item in node.items:
            item_start = y
            for child in item:
                y = self.visit(child, item_context.at(y))
            nested = max(y, item_start + style.line_height) + LIST_ITEM_SPACING
            y = max(nested, item_start + ESTIMATE_LIST_ITEM_HEIGHT)

        return y

    def visit_hr(self, node: ThematicBreak, context: RenderContext) -> float:
        """Fixed rule height."""
        return context.y + ESTIMATE_HR_HEIGHT

    def visit_blockquote(self, node: BlockQuote, context: RenderContext) -> float:
        """Nested estimate plus top and bottom padding."""
        inner = context.narrowed(BLOCKQUOTE_INDENT).with_style(context.theme.blockquote)
        y = context.y + BLOCKQUOTE_PADDING
        for child in node.content:
            y = self.visit(child, inner.at(y))
        return y + BLOCKQUOTE_PADDING

    def visit_code_block(self, node: CodeBlock, context: RenderContext) -> float:
        """One code line per source line plus padding."""
        line_count = len(node.content.split("\n"))
        return context.y + line_count * context.theme.code.line_height + CODE_BLOCK_PADDING * 2

    def visit_text(self, node: Text, context: RenderContext) -> float:
        """Exact wrapped height of a text run."""
        style = context.inline_style
        return end_of_lines(context.wrap(node.content, context.y, style), context.y, style.line_height)

    def visit_strong(self, node: Strong, context: RenderContext) -> float:
        """Children measured in bold."""
        style = context.inline_style
        return self._estimate_run(node.content, context.with_style(replace(style, font=embolden(style.font))))

    def visit_em(self, node: Emphasis, context: RenderContext) -> float:
        """Children measured in italic."""
        style = context.inline_style
        return self._estimate_run(node.content, context.with_style(replace(style, font=italicize(style.font))))

    def visit_link(self, node: Link, context: RenderContext) -> float:
        """Wrapped height of the link label."""
        style = context.theme.link
        return end_of_lines(context.wrap(extract_text(node.content), context.y, style), context.y, style.line_height)

    def visit_code(self, node: Code, context: RenderContext) -> float:
        """Wrapped height of an inline code span."""
        style = context.theme.code
        return end_of_lines(context.wrap(node.content, context.y, style), context.y, style.line_height)

    def _estimate_run(self, children: tuple[Node, ...], context: RenderContext) -> float:
        """Estimate a run of inline children in sequence."""
        y = context.y
        for child in children:
            y = self.visit(child, context.at(y))
        return y


def estimate_height(
    nodes: Iterable[Any],
    x: float,
    y: float,
    max_width: float,
    theme: Theme,
    surface: Optional[DrawingSurface] = None,
    cache: Optional[TextMeasureCache] = None,
) -> float:
    """Estimate the painted height of a node sequence.

    Parameters
    ----------
    nodes : iterable of Node
        Nodes to estimate
    x, y : float
        Where painting would start
    max_width : float
        Wrap width
    theme : Theme
        Theme supplying styles
    surface : DrawingSurface, optional
        Measurement surface; a scratch Pillow surface is created when omitted
    cache : TextMeasureCache, optional
        Measurement cache; a private one is used when omitted

    Returns
    -------
    float
        Estimated height from ``y`` to the cursor after the last node,
        plus a small safety margin

    """
    measuring_surface = surface if surface is not None else PillowSurface(1, 1)
    measuring_cache = cache if cache is not None else TextMeasureCache()
    context = RenderContext(measuring_surface, measuring_cache, x, y, max_width, theme)
    end = HeightEstimator().estimate_nodes(context, nodes)
    return end - y + ESTIMATE_SAFETY_MARGIN
