#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/rendering/painter.py
"""Node layout and paint engine.

``MarkdownPainter`` walks a node tree and paints it onto a drawing surface
under a theme. Every ``visit_<kind>`` method takes a ``RenderContext`` and
returns the new vertical cursor; callers always continue from the returned
value.

Paint state discipline
----------------------
Each routine sets ``fill_style``, ``font``, ``stroke_style`` and
``line_width`` immediately before it draws and never relies on a callee to
restore them.

"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, replace
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
    NodeKind,
    Paragraph,
    Strong,
    Text,
    ThematicBreak,
)
from mdcard.ast.utils import extract_text
from mdcard.ast.visitors import NodeVisitor
from mdcard.constants import (
    BLOCKQUOTE_BAR_OFFSET,
    BLOCKQUOTE_BAR_WIDTH,
    BLOCKQUOTE_INDENT,
    BLOCKQUOTE_PADDING,
    CODE_BLOCK_PADDING,
    HEADING_BASELINE_RATIO,
    HEADING_BOTTOM_MARGIN,
    HR_OFFSET,
    HR_TRAILING,
    INLINE_CODE_BACKGROUND_RATIO,
    INLINE_CODE_BACKGROUND_SHIFT,
    INLINE_CODE_PADDING,
    LINK_UNDERLINE_OFFSET,
    LINK_UNDERLINE_WIDTH,
    LIST_BULLET,
    LIST_BULLET_BASELINE_RATIO,
    LIST_INDENT,
    LIST_ITEM_SPACING,
    NODE_SPACING,
)
from mdcard.rendering.fonts import embolden, italicize
from mdcard.rendering.measure import TextMeasureCache
from mdcard.rendering.surface import DrawingSurface
from mdcard.rendering.themes import TextStyle, Theme
from mdcard.rendering.wrapping import TextLine, wrap_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderContext:
    """Cursor state threaded through one layout walk.

    Parameters
    ----------
    surface : DrawingSurface
        Surface painted on (or measured against)
    cache : TextMeasureCache
        Measurement cache shared by the whole session
    x : float
        Left edge for the current node
    y : float
        Vertical cursor; the next node starts here
    max_width : float
        Wrap width at the current indent
    theme : Theme
        Active theme
    text_style : TextStyle, optional
        Style for inline text runs. None means ``theme.text``; block quotes
        and strong/emphasis runs narrow it.

    """

    surface: DrawingSurface
    cache: TextMeasureCache
    x: float
    y: float
    max_width: float
    theme: Theme
    text_style: Optional[TextStyle] = None

    @property
    def inline_style(self) -> TextStyle:
        """Style used for text runs at this point of the walk."""
        return self.text_style or self.theme.text

    def at(self, y: float) -> RenderContext:
        """Copy with the cursor moved to ``y``."""
        return replace(self, y=y)

    def narrowed(self, indent: float) -> RenderContext:
        """Copy indented by ``indent`` with the wrap width reduced to match."""
        return replace(self, x=self.x + indent, max_width=self.max_width - indent)

    def with_style(self, style: TextStyle) -> RenderContext:
        """Copy with a different inline text style."""
        return replace(self, text_style=style)

    def wrap(self, text: str, y: float, style: TextStyle) -> list[TextLine]:
        """Wrap ``text`` at this context's indent and width."""
        return wrap_text(self.surface, self.cache, text, self.x, y, self.max_width, style.line_height, style.font)


def end_of_lines(lines: list[TextLine], y: float, line_height: float) -> float:
    """Cursor after a wrapped run: one line below the last line, or one line below ``y``."""
    return lines[-1].y + line_height if lines else y + line_height


class MarkdownPainter(NodeVisitor[RenderContext, float]):
    """Paint node trees onto a drawing surface.

    Parameters
    ----------
    instrument : bool, default False
        Record every visited node kind in ``visit_counts`` and
        ``visit_order``

    Examples
    --------
        >>> painter = MarkdownPainter()
        >>> context = RenderContext(surface, TextMeasureCache(), 30, 120, 295, get_theme("default"))  # doctest: +SKIP
        >>> end_y = painter.render_nodes(context, parse_markdown("# Title\\n\\nBody"))  # doctest: +SKIP

    """

    def __init__(self, instrument: bool = False):
        """Initialize the painter."""
        self.instrument = instrument
        self.visit_counts: Counter[NodeKind] = Counter()
        self.visit_order: list[NodeKind] = []

    def visit(self, node: Any, context: RenderContext) -> float:
        """Dispatch ``node`` and record it when instrumented."""
        if self.instrument and isinstance(node, Node):
            self.visit_counts[node.type] += 1
            self.visit_order.append(node.type)
        result = super().visit(node, context)
        return context.y if result is None else result

    def unknown_node(self, node: Any, context: RenderContext) -> float:
        """Skip an unsupported node without moving the cursor."""
        super().unknown_node(node, context)
        return context.y

    def render_nodes(self, context: RenderContext, nodes: Iterable[Any]) -> float:
        """Paint a node sequence top to bottom.

        Parameters
        ----------
        context : RenderContext
            Starting cursor
        nodes : iterable of Node
            Nodes to paint in order

        Returns
        -------
        float
            Cursor after the last node, including the spacing that follows
            every painted node

        """
        y = context.y
        for node in nodes:
            if not isinstance(node, Node):
                self.unknown_node(node, context.at(y))
                continue
            y = self.visit(node, context.at(y)) + NODE_SPACING
        return y

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_heading(self, node: Heading, context: RenderContext) -> float:
        """Paint a heading in its level's style."""
        style = context.theme.heading_style(node.level)
        y = context.y + style.line_height * HEADING_BASELINE_RATIO

        lines = context.wrap(extract_text(node.content), y, style)
        self._fill_lines(context.surface, lines, style)
        if lines:
            y = lines[-1].y + style.line_height
        return y + HEADING_BOTTOM_MARGIN

    def visit_paragraph(self, node: Paragraph, context: RenderContext) -> float:
        """Paint each inline child, one after the other."""
        y = context.y
        for child in node.content:
            y = self.visit(child, context.at(y))
        return y

    def visit_list(self, node: List, context: RenderContext) -> float:
        """Paint list items with a bullet and indented content."""
        style = context.theme.list
        surface = context.surface
        item_context = context.narrowed(LIST_INDENT)
        y = context.y

        for index, item in enumerate(node.items):
            item_start = y
            marker = f"{node.start + index}." if node.ordered else LIST_BULLET

            surface.fill_style = style.color
            surface.font = style.font
            surface.fill_text(marker, context.x, item_start + style.line_height * LIST_BULLET_BASELINE_RATIO)

            for child in item:
                y = self.visit(child, item_context.at(y))

            y = max(y, item_start + style.line_height) + LIST_ITEM_SPACING

        return y

    def visit_hr(self, node: ThematicBreak, context: RenderContext) -> float:
        """Stroke a horizontal rule across the wrap width."""
        surface = context.surface
        line_y = context.y + HR_OFFSET

        surface.stroke_style = context.theme.rule_color
        surface.line_width = 1
        surface.begin_path()
        surface.move_to(context.x, line_y)
        surface.line_to(context.x + context.max_width, line_y)
        surface.stroke()

        return line_y + HR_TRAILING

    def visit_blockquote(self, node: BlockQuote, context: RenderContext) -> float:
        """Paint quoted content with an accent bar on the left.

        The bar is drawn once, after the content, spanning the padded height.
        It sits left of the indented content, so the order does not matter.

        """
        block_start = context.y
        inner = context.narrowed(BLOCKQUOTE_INDENT).with_style(context.theme.blockquote)

        y = block_start + BLOCKQUOTE_PADDING
        for child in node.content:
            y = self.visit(child, inner.at(y))
        block_end = y + BLOCKQUOTE_PADDING

        surface = context.surface
        surface.fill_style = context.theme.rule_color
        surface.fill_rect(context.x + BLOCKQUOTE_BAR_OFFSET, block_start, BLOCKQUOTE_BAR_WIDTH, block_end - block_start)

        return block_end

    def visit_code_block(self, node: CodeBlock, context: RenderContext) -> float:
        """Paint a code block on a filled background, one source line per row."""
        style = context.theme.code
        surface = context.surface
        lines = node.content.split("\n")
        block_height = len(lines) * style.line_height + CODE_BLOCK_PADDING * 2

        surface.fill_style = context.theme.code_background
        surface.fill_rect(context.x, context.y, context.max_width, block_height)

        surface.fill_style = style.color
        surface.font = style.font
        first_baseline = context.y + CODE_BLOCK_PADDING
        for index, line in enumerate(lines):
            surface.fill_text(line, context.x + CODE_BLOCK_PADDING, first_baseline + index * style.line_height)

        return context.y + block_height

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text, context: RenderContext) -> float:
        """Wrap and paint a text run in the current inline style."""
        style = context.inline_style
        lines = context.wrap(node.content, context.y, style)
        self._fill_lines(context.surface, lines, style)
        return end_of_lines(lines, context.y, style.line_height)

    def visit_strong(self, node: Strong, context: RenderContext) -> float:
        """Paint children with the inline font made bold."""
        style = context.inline_style
        return self._paint_styled_run(node.content, context.with_style(replace(style, font=embolden(style.font))))

    def visit_em(self, node: Emphasis, context: RenderContext) -> float:
        """Paint children with the inline font made italic."""
        style = context.inline_style
        return self._paint_styled_run(node.content, context.with_style(replace(style, font=italicize(style.font))))

    def visit_link(self, node: Link, context: RenderContext) -> float:
        """Paint the link label in the link style and underline every line."""
        style = context.theme.link
        surface = context.surface
        lines = context.wrap(extract_text(node.content), context.y, style)

        for line in lines:
            surface.fill_style = style.color
            surface.font = style.font
            surface.fill_text(line.text, line.x, line.y)

            underline_y = line.y + LINK_UNDERLINE_OFFSET
            surface.stroke_style = style.color
            surface.line_width = LINK_UNDERLINE_WIDTH
            surface.begin_path()
            surface.move_to(line.x, underline_y)
            surface.line_to(line.x + line.width, underline_y)
            surface.stroke()

        return end_of_lines(lines, context.y, style.line_height)

    def visit_code(self, node: Code, context: RenderContext) -> float:
        """Paint inline code over a padded background per line."""
        style = context.theme.code
        surface = context.surface
        lines = context.wrap(node.content, context.y, style)
        background_height = style.line_height * INLINE_CODE_BACKGROUND_RATIO

        for line in lines:
            surface.fill_style = context.theme.code_background
            surface.fill_rect(
                line.x - INLINE_CODE_PADDING,
                line.y - background_height + INLINE_CODE_BACKGROUND_SHIFT,
                line.width + INLINE_CODE_PADDING * 2,
                background_height,
            )
            surface.fill_style = style.color
            surface.font = style.font
            surface.fill_text(line.text, line.x, line.y)

        return end_of_lines(lines, context.y, style.line_height)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _paint_styled_run(self, children: tuple[Node, ...], context: RenderContext) -> float:
        y = context.y
        for child in children:
            y = self.visit(child, context.at(y))
        return y

    @staticmethod
    def _fill_lines(surface: DrawingSurface, lines: list[TextLine], style: TextStyle) -> None:
        surface.fill_style = style.color
        surface.font = style.font
        for line in lines:
            surface.fill_text(line.text, line.x, line.y)
