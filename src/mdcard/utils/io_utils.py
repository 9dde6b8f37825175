#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/utils/io_utils.py
"""I/O utilities for reading card text.

This module provides a single place for reading question/answer text from
files or standard input, with optional percent-decoding.

"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import IO, Optional, Union

from mdcard.exceptions import FileError
from mdcard.utils.text import decode_field


def read_text_source(
    source: Union[str, Path], decode: bool = False, stdin: Optional[IO[str]] = None
) -> str:
    """Read text from a file path or ``"-"`` for standard input.

    Parameters
    ----------
    source : str or Path
        File path, or ``"-"`` to read ``stdin``
    decode : bool, default False
        Percent-decode the text after reading
    stdin : IO[str], optional
        Stream used for ``"-"``, defaults to ``sys.stdin``

    Returns
    -------
    str
        The text content

    Raises
    ------
    FileError
        If the file does not exist or cannot be decoded as UTF-8

    Examples
    --------
        >>> read_text_source("question.md")  # doctest: +SKIP
        '# What is a monad?\\n'

    """
    if str(source) == "-":
        text = (stdin or sys.stdin).read()
    else:
        path = Path(source)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise FileError(f"Input file not found: {path}", file_path=str(path), original_error=e) from e
        except (OSError, UnicodeDecodeError) as e:
            raise FileError(f"Could not read input file {path}: {e}", file_path=str(path), original_error=e) from e

    return decode_field(text) if decode else text
