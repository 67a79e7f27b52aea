"""TMDB catalog client with rate limiting and error handling.

This module wraps the tmdbv3api library behind the RemoteCatalogClient
contract used by the catalog facade. Blocking library calls run in a worker
thread; every request is bounded by a semaphore, throttled by a token
bucket and retried with exponential backoff. Failures surface as
TransportError, never as library exceptions.
"""

from __future__ import annotations

import asyncio
import copy
import logging
import time
from typing import Any, Callable

from tmdbv3api import TV, Genre, Movie, Search, TMDb, Trending
from tmdbv3api.exceptions import TMDbException

from streamflix.config.models import TMDBSettings
from streamflix.services.rate_limiter import TokenBucketRateLimiter
from streamflix.shared.constants import (
    CacheEndpoint,
    HTTPStatusCodes,
    TimeWindow,
    TMDBConfig,
    TMDBErrorMessages,
)
from streamflix.shared.errors import (
    ErrorCode,
    ErrorContext,
    SecurityError,
    TransportError,
    create_transport_error,
)
from streamflix.shared.logging import log_operation_error, log_operation_success

from .protocols import CatalogPage, CatalogRecord, GenreList

logger = logging.getLogger(__name__)

# Library exceptions treated as transport failures
_RETRYABLE_EXCEPTIONS = (TMDbException, OSError, ValueError, asyncio.TimeoutError)


def to_plain(payload: Any) -> Any:
    """Convert a tmdbv3api payload into plain dicts and lists.

    tmdbv3api wraps responses in ``AsObj`` instances which keep the decoded
    JSON in ``_json``; that copy is preferred when present.
    """
    raw = getattr(payload, "_json", None)
    if isinstance(raw, (dict, list)):
        return copy.deepcopy(raw)
    if isinstance(payload, dict):
        return {key: to_plain(value) for key, value in payload.items()}
    if isinstance(payload, (list, tuple)):
        return [to_plain(item) for item in payload]
    if hasattr(payload, "__dict__") and not isinstance(payload, type):
        return {
            key: to_plain(value)
            for key, value in vars(payload).items()
            if not key.startswith("_")
        }
    return payload


class TMDBCatalogClient:
    """Remote catalog client backed by The Movie Database.

    Args:
        settings: TMDB connection settings; ``api_key`` must be set
        rate_limiter: Token bucket shared by all requests

    Raises:
        SecurityError: If no API key is configured
    """

    def __init__(
        self,
        settings: TMDBSettings,
        rate_limiter: TokenBucketRateLimiter | None = None,
    ) -> None:
        if not settings.api_key:
            raise SecurityError(
                code=ErrorCode.MISSING_CONFIG,
                message="TMDB API key is not configured (set STREAMFLIX_API__TMDB__API_KEY or TMDB_API_KEY)",
                context=ErrorContext(operation="tmdb_client_init"),
            )

        self.settings = settings
        self.rate_limiter = rate_limiter or TokenBucketRateLimiter(
            capacity=max(1, int(settings.rate_limit_rps)),
            refill_rate=settings.rate_limit_rps,
        )
        self._semaphore = asyncio.Semaphore(settings.concurrent_requests)
        self._request_count = 0
        self._failure_count = 0

        # TMDb must be configured before the API objects are created
        self._tmdb = TMDb()
        self._tmdb.api_key = settings.api_key
        self._tmdb.language = settings.language
        self._tmdb.region = settings.region

        self._movie = Movie()
        self._tv = TV()
        self._trending = Trending()
        self._search = Search()
        self._genre = Genre()

        logger.info(
            "TMDB client initialized with language: %s, region: %s",
            settings.language,
            settings.region,
        )

    async def get_popular_movies(self, page: int = 1) -> CatalogPage:
        return await self._fetch_page(
            CacheEndpoint.POPULAR_MOVIES,
            lambda: self._movie.popular(page=page),
        )

    async def get_trending_movies(
        self,
        time_window: str = TimeWindow.WEEK,
        page: int = 1,
    ) -> CatalogPage:
        if time_window not in TimeWindow.ALL:
            # No such TMDB route; surfaces like any other failed request
            raise create_transport_error(
                f"Unsupported trending time window: {time_window}",
                endpoint=CacheEndpoint.TRENDING_MOVIES,
                code=ErrorCode.TMDB_API_REQUEST_FAILED,
            )
        if time_window == TimeWindow.DAY:
            api_call = lambda: self._trending.movie_day(page=page)  # noqa: E731
        else:
            api_call = lambda: self._trending.movie_week(page=page)  # noqa: E731
        return await self._fetch_page(CacheEndpoint.TRENDING_MOVIES, api_call)

    async def get_popular_tv_shows(self, page: int = 1) -> CatalogPage:
        return await self._fetch_page(
            CacheEndpoint.POPULAR_TV,
            lambda: self._tv.popular(page=page),
        )

    async def search_multi(self, query: str, page: int = 1) -> CatalogPage:
        return await self._fetch_page(
            CacheEndpoint.SEARCH,
            lambda: self._search.multi(
                query,
                adult=self.settings.include_adult,
                page=page,
            ),
        )

    async def get_movie_details(self, movie_id: int) -> CatalogRecord:
        """Fetch one movie with videos, credits and release dates appended."""
        return await self._fetch_record(
            CacheEndpoint.MOVIE_DETAILS,
            lambda: self._movie.details(
                movie_id,
                append_to_response=TMDBConfig.MOVIE_APPEND_TO_RESPONSE,
            ),
        )

    async def get_tv_show_details(self, tv_id: int) -> CatalogRecord:
        """Fetch one TV show with videos, credits and content ratings appended."""
        return await self._fetch_record(
            CacheEndpoint.TV_DETAILS,
            lambda: self._tv.details(
                tv_id,
                append_to_response=TMDBConfig.TV_APPEND_TO_RESPONSE,
            ),
        )

    async def get_movie_genres(self) -> GenreList:
        return await self._fetch_genres("movie_genres", self._genre.movie_list)

    async def get_tv_genres(self) -> GenreList:
        return await self._fetch_genres("tv_genres", self._genre.tv_list)

    async def _fetch_page(self, endpoint: str, api_call: Callable[[], Any]) -> CatalogPage:
        payload = to_plain(await self._make_request(endpoint, api_call))
        if isinstance(payload, list):
            return {
                "page": 1,
                "results": payload,
                "total_pages": 1,
                "total_results": len(payload),
            }
        if isinstance(payload, dict) and isinstance(payload.get("results"), list):
            return payload
        raise self._invalid_response(endpoint)

    async def _fetch_record(self, endpoint: str, api_call: Callable[[], Any]) -> CatalogRecord:
        payload = to_plain(await self._make_request(endpoint, api_call))
        if not isinstance(payload, dict):
            raise self._invalid_response(endpoint)
        return payload

    async def _fetch_genres(self, endpoint: str, api_call: Callable[[], Any]) -> GenreList:
        payload = to_plain(await self._make_request(endpoint, api_call))
        if isinstance(payload, list):
            return {"genres": payload}
        if isinstance(payload, dict) and isinstance(payload.get("genres"), list):
            return payload
        raise self._invalid_response(endpoint)

    def _invalid_response(self, endpoint: str) -> TransportError:
        error = TransportError(
            code=ErrorCode.TMDB_API_INVALID_RESPONSE,
            message=TMDBErrorMessages.INVALID_RESPONSE.format(endpoint=endpoint),
            context=ErrorContext(operation="make_tmdb_request", endpoint=endpoint),
        )
        log_operation_error(logger=logger, error=error)
        return error

    async def _make_request(self, endpoint: str, api_call: Callable[[], Any]) -> Any:
        """Make a rate-limited and concurrency-controlled API request.

        Args:
            endpoint: Logical endpoint name, used for error context
            api_call: Blocking function that performs the library call

        Returns:
            The raw library response

        Raises:
            TransportError: If the request fails after all retries
        """
        context = ErrorContext(
            operation="make_tmdb_request",
            endpoint=endpoint,
            additional_data={"retry_attempts": self.settings.retry_attempts},
        )

        async with self._semaphore:
            await self._apply_rate_limiting()
            return await self._execute_with_retry(api_call, context)

    async def _apply_rate_limiting(self) -> None:
        while not self.rate_limiter.try_acquire():
            await asyncio.sleep(0.1)

    async def _execute_with_retry(
        self,
        api_call: Callable[[], Any],
        context: ErrorContext,
    ) -> Any:
        last_exception: BaseException | None = None
        start_time = time.perf_counter()

        for attempt in range(self.settings.retry_attempts + 1):
            self._request_count += 1
            try:
                result = await asyncio.wait_for(
                    asyncio.to_thread(api_call),
                    timeout=self.settings.timeout,
                )
            except _RETRYABLE_EXCEPTIONS as e:
                last_exception = e
                self._failure_count += 1
                logger.debug(
                    "TMDB request to %s failed (attempt %d): %s",
                    context.endpoint,
                    attempt + 1,
                    e,
                )
                if not self._should_retry(e):
                    break
                if attempt < self.settings.retry_attempts:
                    await asyncio.sleep(self._backoff_delay(e, attempt))
                continue

            log_operation_success(
                logger=logger,
                operation="make_tmdb_request",
                duration_ms=(time.perf_counter() - start_time) * 1000,
                context=context,
            )
            return result

        error_code, error_message = self._convert_exception(last_exception)
        final_error = TransportError(
            code=error_code,
            message=error_message,
            context=context,
            original_error=last_exception if isinstance(last_exception, Exception) else None,
        )
        log_operation_error(logger=logger, error=final_error)
        raise final_error from last_exception

    def _backoff_delay(self, exception: BaseException, attempt: int) -> float:
        status_code = self._status_code(exception)
        if status_code == HTTPStatusCodes.TOO_MANY_REQUESTS:
            self.rate_limiter.reset()
            retry_after = self._extract_retry_after(getattr(exception, "response", None))
            if retry_after is not None:
                return retry_after
        return self.settings.retry_delay * (2**attempt)

    def _should_retry(self, exception: BaseException) -> bool:
        return HTTPStatusCodes.is_retryable(self._status_code(exception))

    @staticmethod
    def _status_code(exception: BaseException) -> int:
        response = getattr(exception, "response", None)
        if response is None:
            return 0
        return int(getattr(response, "status_code", 0) or 0)

    def _convert_exception(self, exception: BaseException | None) -> tuple[ErrorCode, str]:
        """Map a library exception to an ErrorCode and message."""
        if exception is None:
            return ErrorCode.TMDB_API_REQUEST_FAILED, "API request failed after all retries"

        if isinstance(exception, asyncio.TimeoutError):
            return ErrorCode.TMDB_API_TIMEOUT, TMDBErrorMessages.TIMEOUT

        status_code = self._status_code(exception)
        if status_code:
            if status_code == HTTPStatusCodes.UNAUTHORIZED:
                return (
                    ErrorCode.TMDB_API_AUTHENTICATION_ERROR,
                    TMDBErrorMessages.AUTHENTICATION_FAILED,
                )
            if status_code == HTTPStatusCodes.FORBIDDEN:
                return (
                    ErrorCode.TMDB_API_AUTHENTICATION_ERROR,
                    TMDBErrorMessages.ACCESS_FORBIDDEN,
                )
            if status_code == HTTPStatusCodes.TOO_MANY_REQUESTS:
                return (
                    ErrorCode.TMDB_API_RATE_LIMIT_EXCEEDED,
                    TMDBErrorMessages.RATE_LIMIT_EXCEEDED,
                )
            if HTTPStatusCodes.is_client_error(status_code):
                return (
                    ErrorCode.TMDB_API_REQUEST_FAILED,
                    TMDBErrorMessages.CLIENT_ERROR.format(status_code=status_code),
                )
            if HTTPStatusCodes.is_server_error(status_code):
                return (
                    ErrorCode.TMDB_API_SERVER_ERROR,
                    TMDBErrorMessages.SERVER_ERROR.format(status_code=status_code),
                )
            return (
                ErrorCode.TMDB_API_REQUEST_FAILED,
                TMDBErrorMessages.REQUEST_FAILED.format(status_code=status_code),
            )

        message = str(exception).lower()
        if "timeout" in message or "timed out" in message:
            return ErrorCode.TMDB_API_TIMEOUT, TMDBErrorMessages.TIMEOUT
        if "connection" in message or isinstance(exception, ConnectionError):
            return (
                ErrorCode.TMDB_API_CONNECTION_ERROR,
                TMDBErrorMessages.CONNECTION_FAILED,
            )
        if isinstance(exception, ValueError) and not isinstance(exception, TMDbException):
            return (
                ErrorCode.TMDB_API_INVALID_RESPONSE,
                TMDBErrorMessages.INVALID_RESPONSE.format(endpoint="request"),
            )
        return (
            ErrorCode.TMDB_API_REQUEST_FAILED,
            TMDBErrorMessages.REQUEST_FAILED.format(status_code=str(exception)),
        )

    @staticmethod
    def _extract_retry_after(response: Any) -> float | None:
        """Return the Retry-After header in seconds, if present and numeric."""
        try:
            retry_after = response.headers.get("Retry-After")
            if retry_after:
                return float(retry_after)
        except (ValueError, AttributeError) as e:
            logger.debug("Failed to parse Retry-After header: %s", e)
        return None

    def get_stats(self) -> dict[str, Any]:
        """Get current request statistics."""
        return {
            "requests": self._request_count,
            "failures": self._failure_count,
            "rate_limiter": {
                "tokens_available": self.rate_limiter.get_tokens_available(),
                "capacity": self.rate_limiter.capacity,
                "refill_rate": self.rate_limiter.refill_rate,
            },
            "concurrency_limit": self.settings.concurrent_requests,
        }


__all__ = ["TMDBCatalogClient", "to_plain"]
