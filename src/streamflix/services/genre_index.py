"""Genre taxonomy lookup for movies and TV shows."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Iterable

from streamflix.shared.constants import DisplaySentinels, MediaKind
from streamflix.shared.errors import (
    DomainError,
    ErrorCode,
    ErrorContext,
    GenreLoadError,
    StreamFlixError,
)
from streamflix.shared.logging import log_operation_error

from .tmdb.protocols import GenreList, RemoteCatalogClient

logger = logging.getLogger(__name__)


def _to_lookup(payload: GenreList) -> dict[int, str]:
    genres = payload.get("genres") if isinstance(payload, dict) else None
    if not isinstance(genres, list):
        msg = "Genre payload has no 'genres' list"
        raise TypeError(msg)
    return {int(genre["id"]): str(genre["name"]) for genre in genres}


class GenreIndex:
    """Per-kind ``id -> name`` table, replaced wholesale on each load.

    Lookups never fail: an id missing from the table, or a kind with no
    table yet, resolves to "Genre inconnu".
    """

    def __init__(self) -> None:
        self._taxonomy: dict[str, dict[int, str]] = {kind: {} for kind in MediaKind.ALL}
        self._lock = threading.Lock()

    async def load(self, client: RemoteCatalogClient) -> bool:
        """Fetch both genre lists concurrently and install them together.

        If either lookup fails the previous taxonomy is kept and the failure
        is logged; the error is not raised.

        Returns:
            True if the taxonomy was replaced
        """
        try:
            movie_payload, tv_payload = await asyncio.gather(
                client.get_movie_genres(),
                client.get_tv_genres(),
            )
            taxonomy = {
                MediaKind.MOVIE: _to_lookup(movie_payload),
                MediaKind.TV: _to_lookup(tv_payload),
            }
        except (StreamFlixError, TypeError, KeyError, ValueError) as e:
            error = GenreLoadError(
                code=ErrorCode.GENRE_LOAD_FAILED,
                message=f"Failed to load genre taxonomy: {e}",
                context=ErrorContext(operation="load_genres"),
                original_error=e,
            )
            log_operation_error(logger=logger, error=error, level=logging.WARNING)
            return False

        with self._lock:
            self._taxonomy = taxonomy

        logger.info(
            "Loaded genres: %d movie, %d tv",
            len(taxonomy[MediaKind.MOVIE]),
            len(taxonomy[MediaKind.TV]),
        )
        return True

    def replace(self, taxonomy: dict[str, Iterable[dict[str, Any]]]) -> None:
        """Install a taxonomy given as ``{kind: [{"id", "name"}, ...]}``."""
        unknown = set(taxonomy) - set(MediaKind.ALL)
        if unknown:
            raise DomainError(
                code=ErrorCode.INVALID_MEDIA_KIND,
                message=f"Unknown media kind(s): {sorted(unknown)}",
                context=ErrorContext(operation="replace_genres"),
            )

        new_taxonomy = {kind: {} for kind in MediaKind.ALL}
        for kind, genres in taxonomy.items():
            new_taxonomy[kind] = {int(g["id"]): str(g["name"]) for g in genres}

        with self._lock:
            self._taxonomy = new_taxonomy

    def name_of(self, genre_id: int, kind: str = MediaKind.MOVIE) -> str:
        return self._taxonomy.get(kind, {}).get(genre_id, DisplaySentinels.UNKNOWN_GENRE)

    def names_of(self, genre_ids: Iterable[int] | None, kind: str = MediaKind.MOVIE) -> list[str]:
        return [self.name_of(genre_id, kind) for genre_id in genre_ids or ()]

    def as_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Export the taxonomy in the remote ``[{"id", "name"}]`` shape."""
        return {
            kind: [{"id": genre_id, "name": name} for genre_id, name in table.items()]
            for kind, table in self._taxonomy.items()
        }

    def __len__(self) -> int:
        return sum(len(table) for table in self._taxonomy.values())


__all__ = ["GenreIndex"]
