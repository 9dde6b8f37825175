#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdcard/cli/commands/themes.py
"""Theme listing command for the mdcard CLI.

Displays the registered card themes with their layout and description, in
plain text or as a rich table.
"""

import argparse
import sys

from rich.console import Console
from rich.table import Table

from mdcard.cli.builder import EXIT_SUCCESS, EXIT_VALIDATION_ERROR
from mdcard.rendering.themes import THEMES, list_themes


def _create_themes_parser() -> argparse.ArgumentParser:
    """Create argparse parser for the themes command.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser for the themes command

    """
    parser = argparse.ArgumentParser(prog="mdcard themes", description="Show available card themes.", add_help=True)
    parser.add_argument("theme", nargs="?", help="Show details for a specific theme")
    parser.add_argument("--rich", action="store_true", help="Use rich terminal output")
    return parser


def handle_themes_command(args: list[str] | None = None) -> int:
    """Handle the themes command.

    Parameters
    ----------
    args : list[str], optional
        Arguments after ``themes``

    Returns
    -------
    int
        Exit code (0 for success)

    """
    parser = _create_themes_parser()
    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        return EXIT_SUCCESS if e.code in (0, None) else EXIT_VALIDATION_ERROR

    names = list_themes()
    if parsed.theme:
        if parsed.theme not in THEMES:
            print(f"Error: Theme '{parsed.theme}' not found", file=sys.stderr)
            print(f"Available: {', '.join(names)}", file=sys.stderr)
            return EXIT_VALIDATION_ERROR
        names = [parsed.theme]

    if parsed.rich:
        table = Table(title=f"Available Themes ({len(names)})")
        table.add_column("Name", style="cyan")
        table.add_column("Layout", style="yellow")
        table.add_column("Body font", style="green")
        table.add_column("Description", style="white")
        for name in names:
            theme = THEMES[name]
            table.add_row(theme.name, theme.layout, theme.text.font, theme.description)
        Console().print(table)
        return EXIT_SUCCESS

    print("\nAvailable Themes")
    print("=" * 60)
    for name in names:
        theme = THEMES[name]
        print(f"  {theme.name:10} {theme.layout:8} {theme.description}")
    print(f"\nTotal: {len(names)} themes")
    return EXIT_SUCCESS
