#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/rendering/templates.py
"""Card templates composing the question and answer onto one page.

A template owns the page geometry of one theme layout. It paints in four
steps, which the render session schedules as separate tasks:

1. ``paint_chrome`` - background, panel or title bar, title
2. ``paint_question`` - question label and nodes
3. ``paint_answer`` - answer label and nodes, continuing below the question
4. ``paint_watermark`` - optional watermark in the lower right corner

``estimate_height`` predicts the card height with the same geometry so the
surface can be sized before painting. A template instance carries the
cursor between steps and is used for a single render pass.

"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from mdcard.ast.nodes import Node
from mdcard.constants import (
    CARD_BOTTOM_SPACE,
    CARD_TOP_SPACE,
    CARD_WATERMARK_BASELINE_INSET,
    CARD_WATERMARK_INSET,
    DIALOG_BUBBLE_GAP,
    DIALOG_BUBBLE_INNER_PADDING,
    DIALOG_BUBBLE_MARGIN,
    DIALOG_BUBBLE_RADIUS,
    DIALOG_BUBBLE_WIDTH_RATIO,
    DIALOG_CONTENT_BASELINE_RATIO,
    DIALOG_FIRST_BUBBLE_TOP,
    DIALOG_POINTER_DEPTH,
    DIALOG_POINTER_HEIGHT,
    DIALOG_POINTER_TOP,
    DIALOG_TITLE_BAR_HEIGHT,
    ESTIMATE_SAFETY_MARGIN,
    BubbleDirection,
)
from mdcard.options.markdown import MarkdownParserOptions
from mdcard.options.render import RenderOptions
from mdcard.parsers.markdown import MarkdownParser
from mdcard.rendering.estimate import HeightEstimator
from mdcard.rendering.measure import TextMeasureCache
from mdcard.rendering.painter import MarkdownPainter, RenderContext
from mdcard.rendering.surface import DrawingSurface
from mdcard.rendering.themes import Theme

logger = logging.getLogger(__name__)

# Length of the rule painted under section labels by themes that want one
LABEL_RULE_LENGTH = 50
LABEL_RULE_OFFSET = 5
# Drop shadow offset for shadowed panels
PANEL_SHADOW_OFFSET = 5


@dataclass(frozen=True)
class CardContent:
    """Parsed content of one question/answer card.

    Parameters
    ----------
    question, answer : tuple of Node
        Parsed node sequences
    watermark : bool, default False
        Paint the watermark

    """

    question: tuple[Node, ...]
    answer: tuple[Node, ...]
    watermark: bool = False

    @classmethod
    def from_markdown(
        cls,
        question: str,
        answer: str,
        watermark: bool = False,
        parser_options: Optional[MarkdownParserOptions] = None,
    ) -> CardContent:
        """Parse both sections with one parser."""
        parser = MarkdownParser(parser_options)
        return cls(question=parser.parse(question), answer=parser.parse(answer), watermark=watermark)


class CardTemplate(ABC):
    """Base class for card layouts.

    Parameters
    ----------
    theme : Theme
        Theme supplying styles and chrome
    options : RenderOptions
        Card geometry and labels
    painter : MarkdownPainter, optional
        Painter used for the node sequences

    """

    def __init__(self, theme: Theme, options: RenderOptions, painter: Optional[MarkdownPainter] = None):
        """Initialize the template."""
        self.theme = theme
        self.options = options
        self.painter = painter or MarkdownPainter()
        self.estimator = HeightEstimator()
        # Bottom of the question section; seeded by estimate_height, replaced by paint_question
        self.cursor_y = 0.0

    @property
    def width(self) -> float:
        """Logical card width."""
        return float(self.options.width)

    @abstractmethod
    def estimate_height(self, card: CardContent, surface: DrawingSurface, cache: TextMeasureCache) -> float:
        """Estimate the full card height, chrome included.

        Also records the estimated bottom of the question section in
        ``cursor_y``, so the answer keeps its place if the question paint
        step fails.

        """

    @abstractmethod
    def paint_chrome(self, surface: DrawingSurface, cache: TextMeasureCache, height: float) -> None:
        """Paint everything behind the content."""

    @abstractmethod
    def paint_question(self, surface: DrawingSurface, cache: TextMeasureCache, nodes: tuple[Node, ...]) -> float:
        """Paint the question section and return the cursor below it."""

    @abstractmethod
    def paint_answer(self, surface: DrawingSurface, cache: TextMeasureCache, nodes: tuple[Node, ...]) -> float:
        """Paint the answer section below the question and return the cursor below it."""

    def paint_watermark(self, surface: DrawingSurface, cache: TextMeasureCache, height: float) -> None:
        """Paint the watermark text right-aligned near the bottom edge."""
        chrome = self.theme.chrome
        text = self.options.watermark_text
        text_width = cache.measure(surface, text, chrome.watermark_font).width

        surface.fill_style = chrome.watermark_color
        surface.font = chrome.watermark_font
        surface.fill_text(text, self.width - CARD_WATERMARK_INSET - text_width, height - CARD_WATERMARK_BASELINE_INSET)

    def paint(self, surface: DrawingSurface, cache: TextMeasureCache, card: CardContent, height: float) -> float:
        """Paint the whole card synchronously.

        Returns
        -------
        float
            Cursor below the answer

        """
        self.paint_chrome(surface, cache, height)
        self.paint_question(surface, cache, card.question)
        end = self.paint_answer(surface, cache, card.answer)
        if card.watermark:
            self.paint_watermark(surface, cache, height)
        return end

    def _context(
        self, surface: DrawingSurface, cache: TextMeasureCache, x: float, y: float, max_width: float
    ) -> RenderContext:
        return RenderContext(surface, cache, x, y, max_width, self.theme)


class PanelTemplate(CardTemplate):
    """Title above a content panel holding both labelled sections.

    Used by the ``default``, ``simple`` and ``book`` themes.

    """

    @property
    def content_x(self) -> float:
        """Left edge of the node content."""
        chrome = self.theme.chrome
        return chrome.padding + chrome.content_inset

    @property
    def content_width(self) -> float:
        """Wrap width of the node content."""
        chrome = self.theme.chrome
        return self.width - 2 * chrome.padding - 2 * chrome.content_inset

    def _section_context(self, surface: DrawingSurface, cache: TextMeasureCache, y: float) -> RenderContext:
        return self._context(surface, cache, self.content_x, y, self.content_width)

    def estimate_height(self, card: CardContent, surface: DrawingSurface, cache: TextMeasureCache) -> float:
        """Estimate both sections stacked below the question label."""
        chrome = self.theme.chrome
        y = chrome.label_y + chrome.question_offset
        y = self.estimator.estimate_nodes(self._section_context(surface, cache, y), card.question)
        self.cursor_y = y
        y += chrome.section_gap + chrome.answer_offset
        y = self.estimator.estimate_nodes(self._section_context(surface, cache, y), card.answer)
        return y + ESTIMATE_SAFETY_MARGIN + CARD_BOTTOM_SPACE

    def paint_chrome(self, surface: DrawingSurface, cache: TextMeasureCache, height: float) -> None:
        """Paint background, optional panel shadow, panel and title."""
        chrome = self.theme.chrome
        panel_width = self.width - 2 * chrome.padding
        panel_height = height - CARD_TOP_SPACE - CARD_BOTTOM_SPACE

        surface.clear_rect(0, 0, self.width, height)
        surface.fill_style = chrome.background
        surface.fill_rect(0, 0, self.width, height)

        if chrome.panel_shadow:
            surface.fill_style = chrome.panel_shadow
            surface.fill_rect(
                chrome.padding + PANEL_SHADOW_OFFSET,
                CARD_TOP_SPACE + PANEL_SHADOW_OFFSET,
                panel_width,
                panel_height,
            )

        surface.fill_style = chrome.panel_color
        surface.fill_rect(chrome.padding, CARD_TOP_SPACE, panel_width, panel_height)

        surface.fill_style = chrome.title_color
        surface.font = chrome.title_font
        surface.fill_text(self.options.title, chrome.title_x, chrome.title_y)

    def paint_question(self, surface: DrawingSurface, cache: TextMeasureCache, nodes: tuple[Node, ...]) -> float:
        """Paint the question label and nodes."""
        chrome = self.theme.chrome
        self._paint_label(surface, self.options.question_label, chrome.label_y)
        context = self._section_context(surface, cache, chrome.label_y + chrome.question_offset)
        self.cursor_y = self.painter.render_nodes(context, nodes)
        return self.cursor_y

    def paint_answer(self, surface: DrawingSurface, cache: TextMeasureCache, nodes: tuple[Node, ...]) -> float:
        """Paint the answer label and nodes below the question."""
        chrome = self.theme.chrome
        label_y = self.cursor_y + chrome.section_gap
        self._paint_label(surface, self.options.answer_label, label_y)
        context = self._section_context(surface, cache, label_y + chrome.answer_offset)
        self.cursor_y = self.painter.render_nodes(context, nodes)
        return self.cursor_y

    def _paint_label(self, surface: DrawingSurface, label: str, y: float) -> None:
        chrome = self.theme.chrome
        surface.fill_style = chrome.label_color
        surface.font = chrome.label_font
        surface.fill_text(label, self.content_x, y)

        if chrome.label_rule:
            surface.stroke_style = chrome.label_color
            surface.line_width = 1
            surface.begin_path()
            surface.move_to(self.content_x, y + LABEL_RULE_OFFSET)
            surface.line_to(self.content_x + LABEL_RULE_LENGTH, y + LABEL_RULE_OFFSET)
            surface.stroke()


class DialogTemplate(CardTemplate):
    """Chat layout: a title bar, the question in a left bubble, the answer in a right one.

    Bubble heights come from the height estimator, so each bubble is drawn
    once, before its content.

    """

    @property
    def bubble_width(self) -> float:
        """Width of both speech bubbles."""
        return self.width * DIALOG_BUBBLE_WIDTH_RATIO

    def bubble_x(self, direction: BubbleDirection) -> float:
        """Left edge of the bubble on the given side."""
        if direction == "left":
            return DIALOG_BUBBLE_MARGIN
        return self.width - DIALOG_BUBBLE_MARGIN - self.bubble_width

    def _content_context(
        self, surface: DrawingSurface, cache: TextMeasureCache, direction: BubbleDirection, top: float
    ) -> RenderContext:
        x = self.bubble_x(direction) + DIALOG_BUBBLE_INNER_PADDING
        y = top + DIALOG_BUBBLE_INNER_PADDING + self.theme.text.line_height * DIALOG_CONTENT_BASELINE_RATIO
        return self._context(surface, cache, x, y, self.bubble_width - 2 * DIALOG_BUBBLE_INNER_PADDING)

    def bubble_height(
        self,
        surface: DrawingSurface,
        cache: TextMeasureCache,
        direction: BubbleDirection,
        top: float,
        nodes: tuple[Node, ...],
    ) -> float:
        """Estimated height of one bubble holding ``nodes``."""
        end = self.estimator.estimate_nodes(self._content_context(surface, cache, direction, top), nodes)
        minimum = DIALOG_POINTER_TOP + DIALOG_POINTER_HEIGHT + DIALOG_BUBBLE_RADIUS
        return max(math.ceil(end - top + ESTIMATE_SAFETY_MARGIN), minimum)

    def estimate_height(self, card: CardContent, surface: DrawingSurface, cache: TextMeasureCache) -> float:
        """Stack both bubbles below the title bar."""
        question_top = DIALOG_FIRST_BUBBLE_TOP
        question_height = self.bubble_height(surface, cache, "left", question_top, card.question)
        self.cursor_y = question_top + question_height
        answer_top = question_top + question_height + DIALOG_BUBBLE_GAP
        answer_height = self.bubble_height(surface, cache, "right", answer_top, card.answer)
        return answer_top + answer_height + CARD_BOTTOM_SPACE

    def paint_chrome(self, surface: DrawingSurface, cache: TextMeasureCache, height: float) -> None:
        """Paint background, title bar and centred title."""
        chrome = self.theme.chrome

        surface.clear_rect(0, 0, self.width, height)
        surface.fill_style = chrome.background
        surface.fill_rect(0, 0, self.width, height)

        surface.fill_style = chrome.title_bar_color
        surface.fill_rect(0, 0, self.width, DIALOG_TITLE_BAR_HEIGHT)

        title_width = cache.measure(surface, self.options.title, chrome.title_font).width
        surface.fill_style = chrome.title_color
        surface.font = chrome.title_font
        surface.fill_text(self.options.title, (self.width - title_width) / 2, chrome.title_y)

    def paint_question(self, surface: DrawingSurface, cache: TextMeasureCache, nodes: tuple[Node, ...]) -> float:
        """Paint the question bubble on the left."""
        return self._paint_section(surface, cache, "left", DIALOG_FIRST_BUBBLE_TOP, nodes)

    def paint_answer(self, surface: DrawingSurface, cache: TextMeasureCache, nodes: tuple[Node, ...]) -> float:
        """Paint the answer bubble on the right, below the question bubble."""
        return self._paint_section(surface, cache, "right", self.cursor_y + DIALOG_BUBBLE_GAP, nodes)

    def _paint_section(
        self,
        surface: DrawingSurface,
        cache: TextMeasureCache,
        direction: BubbleDirection,
        top: float,
        nodes: tuple[Node, ...],
    ) -> float:
        chrome = self.theme.chrome
        height = self.bubble_height(surface, cache, direction, top, nodes)
        color = chrome.question_bubble_color if direction == "left" else chrome.answer_bubble_color

        draw_bubble(surface, self.bubble_x(direction), top, self.bubble_width, height, direction, color)
        self.painter.render_nodes(self._content_context(surface, cache, direction, top), nodes)

        self.cursor_y = top + height
        return self.cursor_y


def draw_bubble(
    surface: DrawingSurface,
    x: float,
    y: float,
    width: float,
    height: float,
    direction: BubbleDirection,
    color: str,
    radius: float = DIALOG_BUBBLE_RADIUS,
) -> None:
    """Fill a rounded speech bubble with a pointer on one side.

    Parameters
    ----------
    surface : DrawingSurface
        Target surface
    x, y, width, height : float
        Bubble body rectangle
    direction : {"left", "right"}
        Side the pointer sticks out of
    color : str
        Fill colour
    radius : float, default 10
        Corner radius

    """
    surface.fill_style = color
    surface.begin_path()
    surface.move_to(x + radius, y)
    surface.line_to(x + width - radius, y)
    surface.quadratic_curve_to(x + width, y, x + width, y + radius)
    surface.line_to(x + width, y + height - radius)
    surface.quadratic_curve_to(x + width, y + height, x + width - radius, y + height)
    surface.line_to(x + radius, y + height)
    surface.quadratic_curve_to(x, y + height, x, y + height - radius)
    surface.line_to(x, y + radius)
    surface.quadratic_curve_to(x, y, x + radius, y)
    surface.close_path()

    pointer_top = y + DIALOG_POINTER_TOP
    pointer_tip = pointer_top + DIALOG_POINTER_HEIGHT / 2
    if direction == "left":
        surface.move_to(x, pointer_top)
        surface.line_to(x - DIALOG_POINTER_DEPTH, pointer_tip)
        surface.line_to(x, pointer_top + DIALOG_POINTER_HEIGHT)
    else:
        surface.move_to(x + width, pointer_top)
        surface.line_to(x + width + DIALOG_POINTER_DEPTH, pointer_tip)
        surface.line_to(x + width, pointer_top + DIALOG_POINTER_HEIGHT)
    surface.close_path()
    surface.fill()


TEMPLATE_CLASSES: dict[str, type[CardTemplate]] = {
    "panel": PanelTemplate,
    "dialog": DialogTemplate,
}


def create_template(theme: Theme, options: RenderOptions, painter: Optional[MarkdownPainter] = None) -> CardTemplate:
    """Create the card template matching a theme's layout."""
    return TEMPLATE_CLASSES[theme.layout](theme, options, painter)
