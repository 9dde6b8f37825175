#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/utils/text.py
"""Text processing utilities for card input.

Functions
---------
remove_markdown : Strip Markdown syntax from raw text for a plain-text preview
decode_field : Decode a percent-encoded card field

Examples
--------
    >>> from mdcard.utils.text import remove_markdown
    >>> remove_markdown("**bold** and _em_ and `code`")
    'bold and em and code'

"""

from __future__ import annotations

import re
from urllib.parse import unquote

_FENCED_CODE = re.compile(r"```[^\n]*\n?(.*?)```", re.DOTALL)
_HORIZONTAL_RULE = re.compile(r"^[ \t]*([-*_])(?:[ \t]*\1){2,}[ \t]*$", re.MULTILINE)
_SETEXT_UNDERLINE = re.compile(r"^[ \t]*={3,}[ \t]*$", re.MULTILINE)
_HEADING = re.compile(r"^[ \t]*#{1,6}[ \t]+", re.MULTILINE)
_BLOCKQUOTE = re.compile(r"^[ \t]*>[ \t]?", re.MULTILINE)
_BULLET = re.compile(r"^[ \t]*[*+-][ \t]+", re.MULTILINE)
_NUMBERED = re.compile(r"^[ \t]*\d+[.)][ \t]+", re.MULTILINE)
_IMAGE = re.compile(r"!\[[^\]]*\]\([^)]*\)")
_LINK = re.compile(r"\[([^\]]+)\]\([^)]*\)")
_INLINE_CODE = re.compile(r"`([^`]+)`")
_STRONG = re.compile(r"(\*\*|__)(.+?)\1")
_EMPHASIS_STAR = re.compile(r"\*(?!\s)(.+?)\*")
_EMPHASIS_UNDERSCORE = re.compile(r"(?<!\w)_(?!\s)(.+?)_(?!\w)")
_TABLE_SEPARATOR = re.compile(r"^[ \t]*\|?[ \t]*:?-+:?[ \t]*(?:\|[ \t]*:?-+:?[ \t]*)+\|?[ \t]*$\n?", re.MULTILINE)
_TABLE_ROW = re.compile(r"^[ \t]*\|(.*)\|[ \t]*$", re.MULTILINE)
_HTML_TAG = re.compile(r"<[^>]*>")
_BLANK_RUN = re.compile(r"\n\s*\n")


def remove_markdown(text: str) -> str:
    """Strip Markdown syntax, keeping the readable text.

    Removes heading, blockquote and list markers, horizontal rules, HTML
    tags, table separators and pipes, and images. Fenced code keeps its
    body; inline code, strong, emphasis and link labels keep their inner
    text. Runs of blank lines collapse to one.

    Parameters
    ----------
    text : str
        Raw Markdown

    Returns
    -------
    str
        Plain text, stripped of surrounding whitespace

    Examples
    --------
        >>> remove_markdown("# Title\\n\\n- [docs](https://example.com)")
        'Title\\n\\ndocs'

    """
    if not text:
        return ""

    plain = _FENCED_CODE.sub(r"\1", text)
    # Rules before list markers: "* * *" would otherwise read as a bullet
    plain = _HORIZONTAL_RULE.sub("", plain)
    plain = _SETEXT_UNDERLINE.sub("", plain)
    plain = _HEADING.sub("", plain)
    plain = _BLOCKQUOTE.sub("", plain)
    plain = _BULLET.sub("", plain)
    plain = _NUMBERED.sub("", plain)
    # Images before links: an image is a link with a leading "!"
    plain = _IMAGE.sub("", plain)
    plain = _LINK.sub(r"\1", plain)
    plain = _INLINE_CODE.sub(r"\1", plain)
    plain = _STRONG.sub(r"\2", plain)
    plain = _EMPHASIS_STAR.sub(r"\1", plain)
    plain = _EMPHASIS_UNDERSCORE.sub(r"\1", plain)
    plain = _TABLE_SEPARATOR.sub("", plain)
    plain = _TABLE_ROW.sub(lambda match: "  ".join(cell.strip() for cell in match.group(1).split("|")), plain)
    plain = _HTML_TAG.sub("", plain)
    plain = _BLANK_RUN.sub("\n\n", plain)
    return plain.strip()


def decode_field(value: str) -> str:
    """Decode a percent-encoded card field.

    Card text travels between screens percent-encoded; malformed escapes
    are left as they are.

    Parameters
    ----------
    value : str
        Encoded text

    Returns
    -------
    str
        Decoded text

    """
    return unquote(value)
