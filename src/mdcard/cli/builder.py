#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdcard/cli/builder.py
"""Argument parser and exit codes for the mdcard render command.

Option defaults are left as ``None`` so that only values given on the
command line override the config file and environment.
"""

import argparse

from mdcard import __version__
from mdcard.exceptions import FileError, RenderingError, ValidationError
from mdcard.rendering.themes import list_themes

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_RENDERING_ERROR = 7

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (ValidationError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    # Includes SurfaceUnavailableError and OutputWriteError
    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from e
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected a number, got {value!r}") from e
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for ``mdcard render``.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser

    """
    parser = argparse.ArgumentParser(
        prog="mdcard render",
        description="Render a Markdown question/answer card to a PNG image.",
        epilog="Other commands: 'mdcard plain [FILE]', 'mdcard themes'.",
    )
    parser.add_argument("--version", action="version", version=f"mdcard {__version__}")

    question = parser.add_mutually_exclusive_group(required=True)
    question.add_argument("-q", "--question", help="Question text (Markdown)")
    question.add_argument("-Q", "--question-file", metavar="FILE", help="Read the question from FILE ('-' for stdin)")

    answer = parser.add_mutually_exclusive_group(required=True)
    answer.add_argument("-a", "--answer", help="Answer text (Markdown)")
    answer.add_argument("-A", "--answer-file", metavar="FILE", help="Read the answer from FILE ('-' for stdin)")

    parser.add_argument("-o", "--out", default="card.png", help="Output image path (default: card.png)")
    parser.add_argument("--template", choices=list_themes(), help="Visual theme")
    parser.add_argument(
        "--watermark", action=argparse.BooleanOptionalAction, default=None, help="Paint the watermark"
    )
    parser.add_argument("--width", type=_positive_int, help="Logical card width in pixels")
    parser.add_argument("--pixel-ratio", type=_positive_float, help="Device pixel density multiplier")
    parser.add_argument("--title", help="Card title")
    parser.add_argument(
        "--percent-encoded",
        action="store_true",
        default=None,
        help="Question and answer text are percent-encoded",
    )

    parser.add_argument("--config", help="Path to a configuration file (.toml, .yaml, .json)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING", help="Logging level")
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Verbose logging with timestamps")
    parser.add_argument("--rich", action="store_true", help="Use rich terminal output")

    return parser
