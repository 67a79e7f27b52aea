"""
Reusable Typer Options Module

Option definitions shared by the main callback and the listing commands.
Use them as ``Annotated[<type>, <option>]`` metadata.
"""

from __future__ import annotations

from enum import Enum

import typer

from streamflix.shared.constants import CLIDefaults, CLIHelp


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=CLIDefaults.VERSION))
        raise typer.Exit


class SortKey(str, Enum):
    """Sort orders available on listing commands."""

    NONE = "none"
    POPULARITY = "popularity"
    RATING = "rating"
    DATE = "date"


log_level_option = typer.Option(
    "--log-level",
    case_sensitive=False,
    help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: WARNING.",
)

json_output_option = typer.Option(
    "--json",
    help="Enable machine-readable JSON output instead of a table.",
)

version_option = typer.Option(
    "--version",
    "-V",
    help="Show version information and exit.",
    callback=version_callback,
    is_eager=True,
)

page_option = typer.Option("--page", "-p", min=1, help=CLIHelp.PAGE_HELP)

limit_option = typer.Option("--limit", "-n", min=1, help=CLIHelp.LIMIT_HELP)

min_rating_option = typer.Option("--min-rating", min=0, max=10, help=CLIHelp.MIN_RATING_HELP)

sort_option = typer.Option("--sort", case_sensitive=False, help=CLIHelp.SORT_HELP)

ascending_option = typer.Option(
    "--ascending",
    help="Sort in ascending order instead of descending.",
)
