"""Catalog facade: cache-first, fallback-on-failure access to the remote catalog.

Every accessor follows the same pipeline:

1. Wait on the readiness gate.
2. Build the cache key from the logical endpoint and its parameters.
3. Return a cached value as-is on a hit.
4. On a miss, call the remote client. Successful responses are cached;
   a TransportError is logged and replaced by the endpoint's fallback
   payload, which is never cached.

The facade also exposes the pure shaping helpers (filters, sorts and
display formatting) bound to its own genre taxonomy and display settings.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Iterable

from streamflix.config.models import DisplaySettings
from streamflix.shared.constants import (
    CacheEndpoint,
    MediaKind,
    TimeWindow,
    TMDBConfig,
)
from streamflix.shared.errors import (
    DependencyUnavailableError,
    ErrorCode,
    ErrorContext,
    TransportError,
)
from streamflix.shared.logging import (
    log_operation_error,
    log_operation_start,
    log_operation_success,
)

from . import fallback_data, formatting, shaping
from .formatting import FormattedRecord
from .genre_index import GenreIndex
from .readiness import ReadinessGate
from .tmdb.protocols import CatalogPage, CatalogRecord, RemoteCatalogClient
from .ttl_cache import TTLCache, make_cache_key

logger = logging.getLogger(__name__)


class CatalogFacade:
    """Public catalog surface for UI consumers.

    Args:
        cache: Response cache (a fresh 5-minute TTLCache by default)
        gate: Readiness gate guarding every accessor
        genre_index: Genre taxonomy used by the display formatters
        client: Remote catalog client; may be supplied later via
            ``attach_client`` or ``start``
        cache_enabled: When False every call goes to the remote client
        coalesce_requests: Share one remote call between concurrent
            misses on the same cache key
        display: Overview length and date locale for formatting
        image_base_url: Base URL for poster and backdrop images
    """

    def __init__(
        self,
        cache: TTLCache[Any] | None = None,
        gate: ReadinessGate | None = None,
        genre_index: GenreIndex | None = None,
        client: RemoteCatalogClient | None = None,
        *,
        cache_enabled: bool = True,
        coalesce_requests: bool = False,
        display: DisplaySettings | None = None,
        image_base_url: str = TMDBConfig.IMAGE_BASE_URL,
    ) -> None:
        self.cache: TTLCache[Any] = cache if cache is not None else TTLCache()
        self.gate = gate if gate is not None else ReadinessGate()
        self.genre_index = genre_index if genre_index is not None else GenreIndex()
        self._client = client
        self.cache_enabled = cache_enabled
        self.coalesce_requests = coalesce_requests
        self.display = display or DisplaySettings()
        self.image_base_url = image_base_url
        self._in_flight: dict[str, asyncio.Future[Any]] = {}

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        return self.gate.is_ready

    @property
    def client(self) -> RemoteCatalogClient | None:
        return self._client

    def attach_client(self, client: RemoteCatalogClient) -> None:
        """Hand over the remote client without opening the gate."""
        self._client = client

    async def start(self, client: RemoteCatalogClient | None = None) -> None:
        """Initialize the facade: load genres, then open the readiness gate.

        A genre load failure is logged and does not prevent the gate from
        opening. Calling ``start`` again once ready is a no-op.

        Raises:
            DependencyUnavailableError: If no client was supplied or attached
        """
        if self.gate.is_ready:
            logger.debug("Catalog facade already started")
            return

        if client is not None:
            self.attach_client(client)
        if self._client is None:
            error = DependencyUnavailableError(
                code=ErrorCode.DEPENDENCY_UNAVAILABLE,
                message="Cannot start catalog facade without a remote client",
                context=ErrorContext(operation="start_catalog"),
            )
            log_operation_error(logger=logger, error=error)
            raise error

        await self.genre_index.load(self._client)
        self.gate.signal()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    async def get_popular_movies(self, page: int = 1) -> CatalogPage:
        return await self._fetch(
            CacheEndpoint.POPULAR_MOVIES,
            {"page": page},
            lambda client: client.get_popular_movies(page),
            fallback_data.fallback_movies,
        )

    async def get_trending_movies(
        self,
        time_window: str = TimeWindow.WEEK,
        page: int = 1,
    ) -> CatalogPage:
        return await self._fetch(
            CacheEndpoint.TRENDING_MOVIES,
            {"time_window": time_window, "page": page},
            lambda client: client.get_trending_movies(time_window, page),
            fallback_data.fallback_movies,
        )

    async def get_popular_tv_shows(self, page: int = 1) -> CatalogPage:
        return await self._fetch(
            CacheEndpoint.POPULAR_TV,
            {"page": page},
            lambda client: client.get_popular_tv_shows(page),
            fallback_data.fallback_tv_shows,
        )

    async def search_content(self, query: str, page: int = 1) -> CatalogPage:
        """Multi-search movies, TV shows and people.

        A query that is blank after trimming returns ``{"results": []}``
        once the gate is open, without consulting the cache or the network.
        """
        if not query or not query.strip():
            await self.gate.wait()
            return fallback_data.empty_search()

        return await self._fetch(
            CacheEndpoint.SEARCH,
            {"query": query, "page": page},
            lambda client: client.search_multi(query, page),
            fallback_data.empty_search,
        )

    async def get_movie_details(self, movie_id: int) -> CatalogRecord | None:
        return await self._fetch(
            CacheEndpoint.MOVIE_DETAILS,
            {"movie_id": movie_id},
            lambda client: client.get_movie_details(movie_id),
            fallback_data.no_details,
        )

    async def get_tv_show_details(self, tv_id: int) -> CatalogRecord | None:
        return await self._fetch(
            CacheEndpoint.TV_DETAILS,
            {"tv_id": tv_id},
            lambda client: client.get_tv_show_details(tv_id),
            fallback_data.no_details,
        )

    async def _fetch(
        self,
        endpoint: str,
        params: dict[str, Any],
        remote_call: Callable[[RemoteCatalogClient], Awaitable[Any]],
        fallback: Callable[[], Any],
    ) -> Any:
        await self.gate.wait()
        cache_key = make_cache_key(endpoint, params)

        if self.cache_enabled:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug("Cache hit: %s", cache_key)
                return cached
            logger.debug("Cache miss: %s", cache_key)

        if not self.coalesce_requests:
            return await self._load(endpoint, cache_key, remote_call, fallback)

        pending = self._in_flight.get(cache_key)
        if pending is None:
            pending = asyncio.ensure_future(
                self._load(endpoint, cache_key, remote_call, fallback),
            )
            self._in_flight[cache_key] = pending
            pending.add_done_callback(lambda _: self._in_flight.pop(cache_key, None))
        else:
            logger.debug("Joining in-flight request: %s", cache_key)

        return await asyncio.shield(pending)

    async def _load(
        self,
        endpoint: str,
        cache_key: str,
        remote_call: Callable[[RemoteCatalogClient], Awaitable[Any]],
        fallback: Callable[[], Any],
    ) -> Any:
        context = ErrorContext(
            operation=f"fetch_{endpoint}",
            endpoint=endpoint,
            additional_data={"cache_key": cache_key},
        )
        log_operation_start(logger, context.operation or endpoint, context.safe_dict())
        start_time = time.perf_counter()

        client = self._client
        if client is None:
            error = DependencyUnavailableError(
                code=ErrorCode.DEPENDENCY_UNAVAILABLE,
                message="Readiness gate is open but no remote client is attached",
                context=context,
            )
            log_operation_error(logger=logger, error=error)
            raise error

        try:
            result = await remote_call(client)
        except TransportError as e:
            log_operation_error(
                logger=logger,
                error=e,
                operation=context.operation,
                additional_context=context,
            )
            return fallback()

        if self.cache_enabled and result is not None:
            self.cache.set(cache_key, result)

        log_operation_success(
            logger=logger,
            operation=context.operation or endpoint,
            duration_ms=(time.perf_counter() - start_time) * 1000,
            context=context,
        )
        return result

    # ------------------------------------------------------------------
    # Cache management
    # ------------------------------------------------------------------

    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("Catalog cache cleared")

    def get_cache_stats(self) -> dict[str, Any]:
        """Return ``{"count": int, "keys": list[str]}``."""
        return self.cache.stats()

    # ------------------------------------------------------------------
    # Genres and display shaping
    # ------------------------------------------------------------------

    def get_genre_name(self, genre_id: int, kind: str = MediaKind.MOVIE) -> str:
        return self.genre_index.name_of(genre_id, kind)

    def get_genre_names(
        self,
        genre_ids: Iterable[int] | None,
        kind: str = MediaKind.MOVIE,
    ) -> list[str]:
        return self.genre_index.names_of(genre_ids, kind)

    def _format_options(self) -> dict[str, Any]:
        return {
            "overview_max_length": self.display.overview_max_length,
            "locale": self.display.locale,
            "image_base_url": self.image_base_url,
        }

    def format_for_display(self, record: CatalogRecord | None) -> FormattedRecord | None:
        return formatting.format_for_display(record, self.genre_index, **self._format_options())

    def format_movie_for_display(self, movie: CatalogRecord | None) -> FormattedRecord | None:
        return formatting.format_movie_for_display(
            movie, self.genre_index, **self._format_options()
        )

    def format_tv_show_for_display(self, tv_show: CatalogRecord | None) -> FormattedRecord | None:
        return formatting.format_tv_show_for_display(
            tv_show, self.genre_index, **self._format_options()
        )

    # Pure shaping helpers, re-exposed for UI consumers holding only the facade
    filter_by_genre = staticmethod(shaping.filter_by_genre)
    filter_by_rating = staticmethod(shaping.filter_by_rating)
    filter_by_year = staticmethod(shaping.filter_by_year)
    sort_by_popularity = staticmethod(shaping.sort_by_popularity)
    sort_by_rating = staticmethod(shaping.sort_by_rating)
    sort_by_date = staticmethod(shaping.sort_by_date)


__all__ = ["CatalogFacade"]
