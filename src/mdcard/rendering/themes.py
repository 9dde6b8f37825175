#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/rendering/themes.py
"""Visual themes for question/answer cards.

A theme bundles the text styles the node painter uses for every node kind
with the page chrome the card templates paint around the content. Themes
are plain frozen values; switching theme never requires re-parsing.

Registered themes
-----------------
default
    Dark page, dark grey content panel, white text.
simple
    White page, light grey panel, dark text.
book
    Paper-coloured page, white panel with a drop shadow, serif type.
dialog
    Dark page with a title bar and two speech bubbles.

"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from mdcard.constants import DEFAULT_TEMPLATE, DEFAULT_WATERMARK_FONT, HR_COLOR, CardLayoutKind
from mdcard.exceptions import ValidationError


@dataclass(frozen=True)
class TextStyle:
    """How one node kind paints.

    Parameters
    ----------
    font : str
        CSS font shorthand, e.g. ``"bold 24px sans-serif"``
    color : str
        CSS colour
    line_height : float
        Baseline advance between wrapped lines

    """

    font: str
    color: str
    line_height: float


@dataclass(frozen=True)
class PageChrome:
    """Page-level colours and geometry painted around the content.

    Panel layouts paint a background, a content panel inset by ``padding``,
    a title, and one label above each section. The dialog layout paints a
    title bar and one speech bubble per section instead.

    """

    background: str
    panel_color: str
    title_color: str
    watermark_color: str
    padding: float
    title_font: str = "bold 24px sans-serif"
    title_x: float = 20
    title_y: float = 40
    label_font: str = "16px sans-serif"
    label_color: str = "#4080ff"
    label_rule: bool = False
    label_y: float = 90
    question_offset: float = 30
    section_gap: float = 30
    answer_offset: float = 30
    content_inset: float = 10
    panel_shadow: Optional[str] = None
    watermark_font: str = DEFAULT_WATERMARK_FONT
    title_bar_color: str = "#333333"
    question_bubble_color: str = "#333333"
    answer_bubble_color: str = "#4080ff"


@dataclass(frozen=True)
class Theme:
    """A named bundle of text styles and page chrome.

    Parameters
    ----------
    name : str
        Registry name
    text : TextStyle
        Paragraph text
    headings : tuple of TextStyle
        Six heading styles, index 0 for level 1
    link, list, blockquote, code : TextStyle
        Styles for the matching node kinds
    chrome : PageChrome
        Page colours and geometry
    layout : {"panel", "dialog"}
        Card layout used by the templates
    code_background : str
        Background of code blocks and inline code
    rule_color : str
        Horizontal rule and blockquote bar colour

    """

    name: str
    text: TextStyle
    headings: tuple[TextStyle, ...]
    link: TextStyle
    list: TextStyle
    blockquote: TextStyle
    code: TextStyle
    chrome: PageChrome
    layout: CardLayoutKind = "panel"
    code_background: str = "#2a2a2a"
    rule_color: str = HR_COLOR
    description: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        """Validate that all six heading levels have a style."""
        if len(self.headings) != 6:
            raise ValueError(f"Theme {self.name!r} must define 6 heading styles, got {len(self.headings)}")

    def heading_style(self, level: int) -> TextStyle:
        """Return the style for a heading level, clamped to 1-6.

        Parameters
        ----------
        level : int
            Heading level; out-of-range values are clamped, never rejected

        Returns
        -------
        TextStyle
            Heading style

        """
        try:
            index = min(max(int(level), 1), 6) - 1
        except (TypeError, ValueError):
            index = 0
        return self.headings[index]


def _headings(color: str, family: str = "sans-serif") -> tuple[TextStyle, ...]:
    return tuple(TextStyle(f"bold {24 - 2 * i}px {family}", color, 36 - 2 * i) for i in range(6))


_DEFAULT_TEXT = TextStyle("14px sans-serif", "#ffffff", 24)
_DEFAULT_LINK = TextStyle("14px sans-serif", "#4080ff", 24)
_DEFAULT_BLOCKQUOTE = TextStyle("italic 14px sans-serif", "#aaaaaa", 24)
_DEFAULT_CODE = TextStyle("13px monospace", "#e6e6e6", 22)

DEFAULT_THEME = Theme(
    name="default",
    description="Dark page with a dark grey content panel",
    text=_DEFAULT_TEXT,
    headings=_headings("#ffffff"),
    link=_DEFAULT_LINK,
    list=_DEFAULT_TEXT,
    blockquote=_DEFAULT_BLOCKQUOTE,
    code=_DEFAULT_CODE,
    chrome=PageChrome(
        background="#000000",
        panel_color="#1a1a1a",
        title_color="#ffffff",
        watermark_color="rgba(255, 255, 255, 0.1)",
        padding=20,
    ),
)

SIMPLE_THEME = replace(
    DEFAULT_THEME,
    name="simple",
    description="White page with a light grey panel",
    text=replace(_DEFAULT_TEXT, color="#333333"),
    headings=_headings("#333333"),
    list=replace(_DEFAULT_TEXT, color="#333333"),
    chrome=PageChrome(
        background="#ffffff",
        panel_color="#f5f5f5",
        title_color="#333333",
        watermark_color="rgba(0, 0, 0, 0.1)",
        padding=30,
        title_x=30,
        label_font="18px sans-serif",
        label_y=80,
        question_offset=20,
        section_gap=20,
        content_inset=20,
    ),
)

BOOK_THEME = replace(
    DEFAULT_THEME,
    name="book",
    description="Paper page with serif type and a shadowed panel",
    text=TextStyle("15px serif", "#333333", 24),
    headings=_headings("#5d4037", "serif"),
    list=TextStyle("15px serif", "#333333", 24),
    chrome=PageChrome(
        background="#f8f4e5",
        panel_color="#ffffff",
        title_color="#5d4037",
        watermark_color="rgba(93, 64, 55, 0.1)",
        padding=40,
        title_font="bold 28px serif",
        title_x=60,
        label_font="bold 20px serif",
        label_color="#5d4037",
        label_rule=True,
        label_y=80,
        question_offset=20,
        section_gap=20,
        content_inset=30,
        panel_shadow="rgba(0, 0, 0, 0.1)",
        watermark_font="italic 12px serif",
    ),
)

DIALOG_THEME = replace(
    DEFAULT_THEME,
    name="dialog",
    description="Chat layout with question and answer speech bubbles",
    layout="dialog",
    chrome=PageChrome(
        background="#121212",
        panel_color="#1e1e1e",
        title_color="#ffffff",
        watermark_color="rgba(64, 128, 255, 0.1)",
        padding=15,
        title_font="bold 18px sans-serif",
        title_y=30,
    ),
)

THEMES: dict[str, Theme] = {theme.name: theme for theme in (DEFAULT_THEME, SIMPLE_THEME, BOOK_THEME, DIALOG_THEME)}


def get_theme(name: Optional[str] = None) -> Theme:
    """Look up a registered theme.

    Parameters
    ----------
    name : str, optional
        Theme name; defaults to ``"default"``

    Returns
    -------
    Theme
        The registered theme

    Raises
    ------
    ValidationError
        If no theme is registered under ``name``

    """
    key = (name or DEFAULT_TEMPLATE).strip().lower()
    try:
        return THEMES[key]
    except KeyError:
        raise ValidationError(
            f"Unknown template {name!r}. Available templates: {', '.join(list_themes())}",
            parameter_name="template",
            parameter_value=name,
        ) from None


def list_themes() -> list[str]:
    """Return the registered theme names in registration order."""
    return list(THEMES)
