#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdcard/cli/commands/plain.py
"""Plain-text command for the mdcard CLI.

Prints the Markdown-stripped form of a file or standard input, the same
reduction used for card previews.
"""

import argparse
import sys

from mdcard.cli.builder import EXIT_FILE_ERROR, EXIT_SUCCESS, EXIT_VALIDATION_ERROR
from mdcard.exceptions import FileError
from mdcard.utils.io_utils import read_text_source
from mdcard.utils.text import remove_markdown


def _create_plain_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdcard plain", description="Print Markdown text with the syntax stripped.", add_help=True
    )
    parser.add_argument("input", nargs="?", default="-", help="Markdown file ('-' or omitted for stdin)")
    parser.add_argument("--decode", action="store_true", help="Input is percent-encoded")
    return parser


def handle_plain_command(args: list[str] | None = None) -> int:
    """Handle the plain command.

    Returns
    -------
    int
        Exit code (0 for success, 3 for usage errors, 4 if the input cannot be read)

    """
    parser = _create_plain_parser()
    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        return EXIT_SUCCESS if e.code in (0, None) else EXIT_VALIDATION_ERROR

    try:
        text = read_text_source(parsed.input, decode=parsed.decode)
    except FileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    print(remove_markdown(text))
    return EXIT_SUCCESS
