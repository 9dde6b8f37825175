#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdcard library.

This module centralizes the layout constants, paint defaults and
configuration defaults used across the parser, layout engine and card
templates.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Layout Constants - Spacing used by the node painter
3. Height Estimation - Heuristic increments used to size the surface
4. Card Defaults - Page-level defaults for the rendered card
5. Fonts - Family names and font file candidates
6. Configuration - Environment prefix and config file names
7. Render Scheduling - Paint task priorities
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

TemplateName = Literal["default", "simple", "book", "dialog"]
BubbleDirection = Literal["left", "right"]
CardLayoutKind = Literal["panel", "dialog"]

# =============================================================================
# Parsing
# =============================================================================

# Appended to question/answer text before tokenizing so the last block is closed
BLOCK_SEPARATOR = "\n\n"

# =============================================================================
# Layout Constants (node painter)
# =============================================================================

# Vertical gap added after every node in a node sequence
NODE_SPACING = 10

# Headings start at y + lineHeight * HEADING_BASELINE_RATIO and end with a margin
HEADING_BASELINE_RATIO = 0.8
HEADING_BOTTOM_MARGIN = 4

# Horizontal rule is stroked at y + HR_OFFSET and consumes HR_OFFSET + HR_TRAILING
HR_OFFSET = 10
HR_TRAILING = 20
HR_COLOR = "#555555"

# Lists
LIST_INDENT = 20
LIST_ITEM_SPACING = 5
LIST_BULLET = "•"
LIST_BULLET_BASELINE_RATIO = 0.7

# Blockquotes
BLOCKQUOTE_INDENT = 15
BLOCKQUOTE_PADDING = 10
BLOCKQUOTE_BAR_OFFSET = 3
BLOCKQUOTE_BAR_WIDTH = 3

# Code blocks and inline code
CODE_BLOCK_PADDING = 10
INLINE_CODE_PADDING = 3
INLINE_CODE_BACKGROUND_RATIO = 0.8
INLINE_CODE_BACKGROUND_SHIFT = 4

# Links
LINK_UNDERLINE_OFFSET = 2
LINK_UNDERLINE_WIDTH = 1

# =============================================================================
# Height Estimation
# =============================================================================

# Fixed floor for a single-line heading (0.8 * 36 + 36 + margin rounded up)
ESTIMATE_HEADING_HEIGHT = 50
# Fixed floor per list item (lineHeight + item spacing + slack)
ESTIMATE_LIST_ITEM_HEIGHT = 34
ESTIMATE_HR_HEIGHT = HR_OFFSET + HR_TRAILING
# Extra slack added once per estimated sequence to absorb rounding
ESTIMATE_SAFETY_MARGIN = 4

# =============================================================================
# Card Defaults
# =============================================================================

DEFAULT_TEMPLATE: TemplateName = "default"
DEFAULT_CARD_WIDTH = 375
DEFAULT_VIEWPORT_HEIGHT = 467
DEFAULT_PIXEL_RATIO = 2.0
DEFAULT_CARD_TITLE = "Q&A"
DEFAULT_QUESTION_LABEL = "Question"
DEFAULT_ANSWER_LABEL = "Answer"
DEFAULT_WATERMARK_TEXT = "Made with mdcard"
DEFAULT_WATERMARK_FONT = "12px sans-serif"

# Space reserved above the first section and below the last one
CARD_TOP_SPACE = 60
CARD_BOTTOM_SPACE = 60
CARD_WATERMARK_INSET = 20
CARD_WATERMARK_BASELINE_INSET = 30

# Dialog template geometry
DIALOG_TITLE_BAR_HEIGHT = 50
DIALOG_FIRST_BUBBLE_TOP = 80
DIALOG_BUBBLE_WIDTH_RATIO = 0.7
DIALOG_BUBBLE_MARGIN = 15
DIALOG_BUBBLE_RADIUS = 10
DIALOG_BUBBLE_INNER_PADDING = 10
DIALOG_BUBBLE_GAP = 30
DIALOG_POINTER_TOP = 20
DIALOG_POINTER_DEPTH = 10
DIALOG_POINTER_HEIGHT = 20
# First content baseline sits this fraction of a text line below the bubble padding
DIALOG_CONTENT_BASELINE_RATIO = 0.8

# =============================================================================
# Fonts
# =============================================================================

GENERIC_FAMILIES = ("sans-serif", "serif", "monospace")
DEFAULT_FONT_FAMILY = "sans-serif"
DEFAULT_FONT_SIZE = 14

# Candidate font files per (family, bold, italic), searched in order.
# Pillow resolves bare file names against the system font directories.
FONT_FILE_CANDIDATES: dict[tuple[str, bool, bool], tuple[str, ...]] = {
    ("sans-serif", False, False): ("DejaVuSans.ttf", "LiberationSans-Regular.ttf", "Arial.ttf", "NotoSans-Regular.ttf"),
    ("sans-serif", True, False): ("DejaVuSans-Bold.ttf", "LiberationSans-Bold.ttf", "Arial Bold.ttf"),
    ("sans-serif", False, True): ("DejaVuSans-Oblique.ttf", "LiberationSans-Italic.ttf", "Arial Italic.ttf"),
    ("sans-serif", True, True): ("DejaVuSans-BoldOblique.ttf", "LiberationSans-BoldItalic.ttf"),
    ("serif", False, False): ("DejaVuSerif.ttf", "LiberationSerif-Regular.ttf", "Times New Roman.ttf"),
    ("serif", True, False): ("DejaVuSerif-Bold.ttf", "LiberationSerif-Bold.ttf"),
    ("serif", False, True): ("DejaVuSerif-Italic.ttf", "LiberationSerif-Italic.ttf"),
    ("serif", True, True): ("DejaVuSerif-BoldItalic.ttf", "LiberationSerif-BoldItalic.ttf"),
    ("monospace", False, False): ("DejaVuSansMono.ttf", "LiberationMono-Regular.ttf", "Courier New.ttf"),
    ("monospace", True, False): ("DejaVuSansMono-Bold.ttf", "LiberationMono-Bold.ttf"),
    ("monospace", False, True): ("DejaVuSansMono-Oblique.ttf", "LiberationMono-Italic.ttf"),
    ("monospace", True, True): ("DejaVuSansMono-BoldOblique.ttf", "LiberationMono-BoldItalic.ttf"),
}

# =============================================================================
# Configuration
# =============================================================================

ENV_PREFIX = "MDCARD_"
CONFIG_FILENAMES = (".mdcard.toml", ".mdcard.yaml", ".mdcard.yml", ".mdcard.json")

# =============================================================================
# Render Scheduling
# =============================================================================

# Higher priority runs first; chrome must be painted under the content
PRIORITY_CHROME = 3
PRIORITY_QUESTION = 2
PRIORITY_ANSWER = 1
PRIORITY_WATERMARK = 0
