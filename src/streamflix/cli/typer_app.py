"""
StreamFlix Typer CLI Application

Command-line front end over the catalog facade. Each command builds the
facade through the DI container, starts it with the TMDB client, runs one
accessor and renders the result as a rich table or as JSON.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Annotated, Any, Awaitable, Callable

import typer
from dependency_injector import providers
from rich.console import Console

from streamflix.cli.context import CliContext, LogLevel, get_cli_context, set_cli_context
from streamflix.cli.error_handler import handle_cli_error
from streamflix.cli.json_formatter import format_json_output
from streamflix.cli.options import (
    SortKey,
    ascending_option,
    json_output_option,
    limit_option,
    log_level_option,
    min_rating_option,
    page_option,
    sort_option,
    version_callback,
    version_option,
)
from streamflix.cli.rendering import render_details, render_genres, render_records
from streamflix.config import get_config
from streamflix.containers import Container
from streamflix.services import CatalogFacade, FormattedRecord, RemoteCatalogClient
from streamflix.services import shaping
from streamflix.shared.constants import CLICommands, CLIDefaults, CLIHelp, MediaKind, TimeWindow
from streamflix.shared.errors import ApplicationError, ErrorCode, ErrorContext
from streamflix.shared.logging import setup_structured_logger

__version__ = CLIDefaults.VERSION


class TimeWindowChoice(str, Enum):
    DAY = TimeWindow.DAY
    WEEK = TimeWindow.WEEK


class MediaKindChoice(str, Enum):
    MOVIE = MediaKind.MOVIE
    TV = MediaKind.TV


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=False,
    rich_markup_mode=CLIHelp.APP_STYLE,
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Annotated[LogLevel, log_level_option] = LogLevel.WARNING,
    json_output: Annotated[bool, json_output_option] = False,
    version: Annotated[bool, version_option] = False,
) -> None:
    """Browse the TMDB movie and TV catalog."""
    if version:
        version_callback(value=True)

    set_cli_context(CliContext(log_level=log_level, json_output=json_output))

    try:
        settings = get_config()
        setup_structured_logger(
            level=log_level.value,
            log_file=settings.logging.file,
            use_rich_console=settings.logging.use_rich_console,
        )
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, "main-callback", json_output=json_output)
        raise typer.Exit(exit_code) from e


def build_container() -> Container:
    """Create a DI container bound to the loaded settings."""
    container = Container()
    container.config.override(providers.Object(get_config()))
    return container


def create_client(container: Container) -> RemoteCatalogClient:
    return container.tmdb_client()


def _run_command(command: str, action: Callable[[CatalogFacade], Awaitable[Any]]) -> Any:
    """Start the facade, run ``action`` on it and map failures to an exit code."""
    context = get_cli_context()
    try:
        container = build_container()
        facade = container.catalog_facade()
        client = create_client(container)

        async def _flow() -> Any:
            await facade.start(client)
            return await action(facade)

        return asyncio.run(_flow())
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, command, json_output=context.json_output)
        raise typer.Exit(exit_code) from e


def _shape(
    records: list[dict[str, Any]],
    *,
    min_rating: float | None,
    sort: SortKey,
    ascending: bool,
    limit: int,
) -> list[dict[str, Any]]:
    if min_rating is not None:
        records = shaping.filter_by_rating(records, min_rating)
    if sort is SortKey.POPULARITY:
        records = shaping.sort_by_popularity(records, ascending=ascending)
    elif sort is SortKey.RATING:
        records = shaping.sort_by_rating(records, ascending=ascending)
    elif sort is SortKey.DATE:
        records = shaping.sort_by_date(records, ascending=ascending)
    return records[:limit]


def _emit_records(command: str, title: str, records: list[FormattedRecord]) -> None:
    if get_cli_context().json_output:
        payload = [record.model_dump() for record in records]
        typer.echo(format_json_output(success=True, command=command, data=payload).decode("utf-8"))
    else:
        render_records(Console(), title, records)


def _list_command(
    command: str,
    title: str,
    fetch: Callable[[CatalogFacade], Awaitable[dict[str, Any]]],
    *,
    min_rating: float | None,
    sort: SortKey,
    ascending: bool,
    limit: int,
) -> None:
    async def action(facade: CatalogFacade) -> list[FormattedRecord]:
        page = await fetch(facade)
        records = _shape(
            list(page.get("results") or []),
            min_rating=min_rating,
            sort=sort,
            ascending=ascending,
            limit=limit,
        )
        formatted = (facade.format_for_display(record) for record in records)
        return [record for record in formatted if record is not None]

    _emit_records(command, title, _run_command(command, action))


@app.command(CLICommands.POPULAR)
def popular_command(
    page: Annotated[int, page_option] = 1,
    limit: Annotated[int, limit_option] = CLIDefaults.TABLE_LIMIT,
    min_rating: Annotated[float | None, min_rating_option] = None,
    sort: Annotated[SortKey, sort_option] = SortKey.NONE,
    ascending: Annotated[bool, ascending_option] = False,
) -> None:
    """List popular movies."""
    _list_command(
        CLICommands.POPULAR,
        "Films populaires",
        lambda facade: facade.get_popular_movies(page),
        min_rating=min_rating,
        sort=sort,
        ascending=ascending,
        limit=limit,
    )


@app.command(CLICommands.TRENDING)
def trending_command(
    window: Annotated[
        TimeWindowChoice,
        typer.Option("--window", "-w", case_sensitive=False, help=CLIHelp.TIME_WINDOW_HELP),
    ] = TimeWindowChoice.WEEK,
    page: Annotated[int, page_option] = 1,
    limit: Annotated[int, limit_option] = CLIDefaults.TABLE_LIMIT,
    min_rating: Annotated[float | None, min_rating_option] = None,
    sort: Annotated[SortKey, sort_option] = SortKey.NONE,
    ascending: Annotated[bool, ascending_option] = False,
) -> None:
    """List trending movies for the day or the week."""
    _list_command(
        CLICommands.TRENDING,
        "Films tendance",
        lambda facade: facade.get_trending_movies(window.value, page),
        min_rating=min_rating,
        sort=sort,
        ascending=ascending,
        limit=limit,
    )


@app.command(CLICommands.TV)
def tv_command(
    page: Annotated[int, page_option] = 1,
    limit: Annotated[int, limit_option] = CLIDefaults.TABLE_LIMIT,
    min_rating: Annotated[float | None, min_rating_option] = None,
    sort: Annotated[SortKey, sort_option] = SortKey.NONE,
    ascending: Annotated[bool, ascending_option] = False,
) -> None:
    """List popular TV shows."""

    async def fetch(facade: CatalogFacade) -> dict[str, Any]:
        page_data = await facade.get_popular_tv_shows(page)
        # Popular TV records carry no media_type; tag them for the TV formatter
        return {
            **page_data,
            "results": [
                {"media_type": MediaKind.TV, **record}
                for record in page_data.get("results") or []
            ],
        }

    _list_command(
        CLICommands.TV,
        "Séries populaires",
        fetch,
        min_rating=min_rating,
        sort=sort,
        ascending=ascending,
        limit=limit,
    )


@app.command(CLICommands.SEARCH)
def search_command(
    query: Annotated[str, typer.Argument(help=CLIHelp.QUERY_HELP)],
    page: Annotated[int, page_option] = 1,
    limit: Annotated[int, limit_option] = CLIDefaults.TABLE_LIMIT,
) -> None:
    """Search movies, TV shows and people."""
    _list_command(
        CLICommands.SEARCH,
        f"Recherche : {query}",
        lambda facade: facade.search_content(query, page),
        min_rating=None,
        sort=SortKey.NONE,
        ascending=False,
        limit=limit,
    )


def _details_command(command: str, kind: str, media_id: int) -> None:
    async def action(facade: CatalogFacade) -> tuple[FormattedRecord, dict[str, Any]]:
        if kind == MediaKind.TV:
            details = await facade.get_tv_show_details(media_id)
            record = facade.format_tv_show_for_display(details)
        else:
            details = await facade.get_movie_details(media_id)
            record = facade.format_movie_for_display(details)

        if details is None or record is None:
            raise ApplicationError(
                code=ErrorCode.TRANSPORT_ERROR,
                message=f"Details unavailable for {kind} {media_id}",
                context=ErrorContext(
                    operation=command,
                    additional_data={"media_id": media_id, "kind": kind},
                ),
            )
        return record, details

    record, details = _run_command(command, action)

    if get_cli_context().json_output:
        payload = {"record": record.model_dump(), "details": details}
        typer.echo(format_json_output(success=True, command=command, data=payload).decode("utf-8"))
    else:
        render_details(Console(), record, details)


@app.command(CLICommands.MOVIE)
def movie_command(
    movie_id: Annotated[int, typer.Argument(help=CLIHelp.ID_HELP)],
) -> None:
    """Show one movie in detail."""
    _details_command(CLICommands.MOVIE, MediaKind.MOVIE, movie_id)


@app.command(CLICommands.SHOW)
def show_command(
    tv_id: Annotated[int, typer.Argument(help=CLIHelp.ID_HELP)],
) -> None:
    """Show one TV show in detail."""
    _details_command(CLICommands.SHOW, MediaKind.TV, tv_id)


@app.command(CLICommands.GENRES)
def genres_command(
    kind: Annotated[
        MediaKindChoice | None,
        typer.Option("--kind", "-k", case_sensitive=False, help="Only list one taxonomy"),
    ] = None,
) -> None:
    """List the movie and TV genre taxonomies."""

    async def action(facade: CatalogFacade) -> dict[str, list[dict[str, Any]]]:
        return facade.genre_index.as_dict()

    taxonomy = _run_command(CLICommands.GENRES, action)
    if kind is not None:
        taxonomy = {kind.value: taxonomy.get(kind.value, [])}

    if get_cli_context().json_output:
        typer.echo(
            format_json_output(success=True, command=CLICommands.GENRES, data=taxonomy).decode(
                "utf-8"
            )
        )
    else:
        render_genres(Console(), taxonomy)


__all__ = ["app", "build_container", "create_client"]
