#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdcard/cli/commands/__init__.py
"""CLI command handlers for mdcard.

Subcommands other than ``render`` are dispatched here by their first
argument; everything else falls through to the render parser.
"""

import logging
import sys

logger = logging.getLogger(__name__)


def dispatch_command(args: list[str] | None = None) -> int | None:
    """Handle the ``plain`` and ``themes`` subcommands.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments

    Returns
    -------
    int or None
        Exit code if a subcommand was handled, None otherwise

    """
    if args is None:
        args = sys.argv[1:]

    if not args:
        return None

    if args[0] == "plain":
        from mdcard.cli.commands.plain import handle_plain_command

        return handle_plain_command(args[1:])

    if args[0] in ("themes", "list-themes"):
        from mdcard.cli.commands.themes import handle_themes_command

        return handle_themes_command(args[1:])

    return None
