"""Command-line interface for the mdcard card renderer.

This module provides the ``mdcard`` console script. The default command
renders a question/answer card to a PNG image; ``plain`` prints the
Markdown-stripped text of a file and ``themes`` lists the card themes.

Environment Variable Support
----------------------------
Render options can be given defaults with ``MDCARD_<OPTION_NAME>``
variables (``MDCARD_TEMPLATE=book``, ``MDCARD_PIXEL_RATIO=3``), and a config
file path with ``MDCARD_CONFIG``. Command-line arguments always override
environment variables, which override config files.

Examples
--------
Render a card::

    $ mdcard render -q "What is **2 + 2**?" -a "`4`" -o card.png

Read the sections from files with the book theme::

    $ mdcard render -Q question.md -A answer.md --template book --watermark

Strip Markdown from standard input::

    $ echo "# Title" | mdcard plain

List the themes::

    $ mdcard themes --rich

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from rich.console import Console

from mdcard.cli.builder import (
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    create_parser,
    get_exit_code_for_exception,
)
from mdcard.cli.commands import dispatch_command
from mdcard.cli.config import build_options, load_config_with_priority
from mdcard.exceptions import MdCardError
from mdcard.logging_utils import configure_logging
from mdcard.utils.io_utils import read_text_source

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser"]


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level.upper())
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _collect_overrides(parsed_args: argparse.Namespace) -> dict[str, Any]:
    """Return the render options given explicitly on the command line."""
    return {
        "template": parsed_args.template,
        "watermark": parsed_args.watermark,
        "width": parsed_args.width,
        "pixel_ratio": parsed_args.pixel_ratio,
        "title": parsed_args.title,
        "percent_encoded": parsed_args.percent_encoded,
    }


def _read_sections(parsed_args: argparse.Namespace) -> tuple[str, str]:
    """Resolve question and answer text from inline arguments or files.

    Raises
    ------
    argparse.ArgumentTypeError
        If both sections are to be read from standard input
    FileError
        If an input file cannot be read

    """
    if parsed_args.question_file == "-" and parsed_args.answer_file == "-":
        raise argparse.ArgumentTypeError("Only one of --question-file and --answer-file can read stdin")

    question = parsed_args.question
    if question is None:
        question = read_text_source(parsed_args.question_file)

    answer = parsed_args.answer
    if answer is None:
        answer = read_text_source(parsed_args.answer_file)

    return question, answer


def _report_success(parsed_args: argparse.Namespace, output: Path, template: str) -> None:
    if parsed_args.rich:
        Console().print(f"[green]Rendered[/green] [cyan]{template}[/cyan] card to [bold]{output}[/bold]")
    else:
        print(f"Rendered {template} card to {output}")


def main(args: list[str] | None = None) -> int:
    """Execute the mdcard CLI.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Exit code: 0 success, 1 unexpected error, 3 invalid arguments or
        configuration, 4 unreadable input file, 7 rendering failure

    """
    if args is None:
        args = sys.argv[1:]

    command_result = dispatch_command(args)
    if command_result is not None:
        return command_result

    if args and args[0] == "render":
        args = args[1:]

    parser = create_parser()
    try:
        parsed_args = parser.parse_args(args)
    except SystemExit as e:
        # argparse exits with 0 for --help/--version and 2 for usage errors
        return EXIT_SUCCESS if e.code in (0, None) else EXIT_VALIDATION_ERROR

    _setup_logging_level(parsed_args)

    from mdcard.api import save_card

    try:
        config = load_config_with_priority(parsed_args.config)
        options, parser_options = build_options(config, _collect_overrides(parsed_args))
        question, answer = _read_sections(parsed_args)
        output = save_card(question, answer, parsed_args.out, options=options, parser_options=parser_options)
    except (MdCardError, argparse.ArgumentTypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.exception("Unexpected error while rendering card")
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    _report_success(parsed_args, output or Path(parsed_args.out), options.template)
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
