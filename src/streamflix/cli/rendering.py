"""Rich rendering of formatted catalog records."""

from __future__ import annotations

from typing import Any, Iterable

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from streamflix.services.formatting import (
    FormattedRecord,
    format_runtime,
    get_age_certification,
)


def render_records(
    console: Console,
    title: str,
    records: Iterable[FormattedRecord],
) -> None:
    """Print records as a table with id, title, year, rating and genres."""
    table = Table(title=title, show_lines=False)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Titre", style="bold")
    table.add_column("Année", justify="center")
    table.add_column("Note", justify="right", style="yellow")
    table.add_column("Genres", style="cyan")

    for record in records:
        table.add_row(
            str(record.id) if record.id is not None else "",
            record.title or "",
            record.year,
            record.formatted_rating,
            ", ".join(record.genres),
        )

    console.print(table)


def render_details(
    console: Console,
    record: FormattedRecord,
    details: dict[str, Any],
) -> None:
    """Print one movie or TV show as a panel.

    ``details`` is the raw payload; runtime, certification and the inline
    ``genres`` list only exist there.
    """
    genres = [g.get("name", "") for g in details.get("genres") or []] or record.genres
    runtime = details.get("runtime")
    if runtime is None and details.get("episode_run_time"):
        runtime = details["episode_run_time"][0]

    lines = [
        f"[bold]{record.title or ''}[/bold] ({record.year})",
        f"Sortie : {record.formatted_date}",
        f"Note : {record.formatted_rating}",
        f"Durée : {format_runtime(runtime)}",
    ]
    certification = get_age_certification(details.get("release_dates"))
    if certification:
        lines.append(f"Classification : {certification}")
    if genres:
        lines.append(f"Genres : {', '.join(genres)}")
    if record.poster_url:
        lines.append(f"Affiche : {record.poster_url}")
    if record.overview:
        lines.extend(["", record.overview])

    console.print(Panel("\n".join(lines), title=str(record.id), expand=False))


def render_genres(console: Console, taxonomy: dict[str, list[dict[str, Any]]]) -> None:
    for kind, genres in taxonomy.items():
        table = Table(title=f"Genres ({kind})")
        table.add_column("ID", justify="right", style="dim")
        table.add_column("Nom", style="cyan")
        for genre in genres:
            table.add_row(str(genre["id"]), genre["name"])
        console.print(table)
