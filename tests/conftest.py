"""
Pytest configuration and shared fixtures for StreamFlix tests.

Provides a scriptable in-memory remote catalog client and sample TMDB
records used across the service, CLI and formatting tests.
"""

from __future__ import annotations

import asyncio
import copy
import logging
import os
from collections import Counter
from typing import Any

import pytest

from streamflix.services import CatalogFacade, GenreIndex, ReadinessGate, TTLCache
from streamflix.shared.errors import ErrorCode, create_transport_error

# Keep tests independent of a developer's real key
os.environ.pop("STREAMFLIX_API__TMDB__API_KEY", None)
os.environ.pop("TMDB_API_KEY", None)


SAMPLE_MOVIES: list[dict[str, Any]] = [
    {
        "id": 550,
        "title": "Fight Club",
        "original_title": "Fight Club",
        "overview": "Un employé de bureau insomniaque croise la route d'un vendeur de savon.",
        "release_date": "1999-10-15",
        "vote_average": 8.4,
        "vote_count": 27000,
        "popularity": 61.4,
        "poster_path": "/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg",
        "backdrop_path": "/hZkgoQYus5vegHoetLkCJzb17zJ.jpg",
        "genre_ids": [18, 53],
        "adult": False,
        "original_language": "en",
    },
    {
        "id": 27205,
        "title": "Inception",
        "original_title": "Inception",
        "overview": "Dom Cobb est un voleur expérimenté dans l'art périlleux de l'extraction.",
        "release_date": "2010-07-16",
        "vote_average": 8.4,
        "vote_count": 34000,
        "popularity": 92.1,
        "poster_path": "/9gk7adHYeDvHkCSEqAvQNLV5Uge.jpg",
        "backdrop_path": "/s3TBrRGB1iav7gFOCNx3H31MoES.jpg",
        "genre_ids": [28, 878, 12],
        "adult": False,
        "original_language": "en",
    },
]

SAMPLE_TV_SHOWS: list[dict[str, Any]] = [
    {
        "id": 1396,
        "name": "Breaking Bad",
        "original_name": "Breaking Bad",
        "overview": "Un professeur de chimie atteint d'un cancer se lance dans la fabrication de drogue.",
        "first_air_date": "2008-01-20",
        "vote_average": 8.9,
        "vote_count": 13000,
        "popularity": 250.3,
        "poster_path": "/ggFHVNu6YYI5L9pCfOacjizRGt.jpg",
        "backdrop_path": "/tsRy63Mu5cu8etL1X7ZLyf7UP1M.jpg",
        "genre_ids": [18, 80],
        "origin_country": ["US"],
        "original_language": "en",
    },
]

MOVIE_GENRES = {"genres": [{"id": 28, "name": "Action"}, {"id": 18, "name": "Drame"}]}
TV_GENRES = {"genres": [{"id": 18, "name": "Drame"}, {"id": 80, "name": "Crime"}]}


def make_page(results: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "page": 1,
        "results": copy.deepcopy(results),
        "total_pages": 1,
        "total_results": len(results),
    }


class FakeCatalogClient:
    """In-memory RemoteCatalogClient with per-method call counters.

    Any method name listed in ``failing`` raises TransportError instead of
    answering.
    """

    def __init__(self, failing: set[str] | None = None) -> None:
        self.calls: Counter[str] = Counter()
        self.arguments: list[tuple[str, tuple[Any, ...]]] = []
        self.failing = set(failing or ())

    async def _record(self, name: str, *args: Any) -> None:
        self.calls[name] += 1
        self.arguments.append((name, args))
        # Yield like a real network call would
        await asyncio.sleep(0)
        if name in self.failing:
            raise create_transport_error(
                f"{name} failed",
                endpoint=name,
                code=ErrorCode.TMDB_API_SERVER_ERROR,
            )

    async def get_popular_movies(self, page: int = 1) -> dict[str, Any]:
        await self._record("get_popular_movies", page)
        return make_page(SAMPLE_MOVIES)

    async def get_trending_movies(self, time_window: str = "week", page: int = 1) -> dict[str, Any]:
        await self._record("get_trending_movies", time_window, page)
        return make_page(SAMPLE_MOVIES[::-1])

    async def get_popular_tv_shows(self, page: int = 1) -> dict[str, Any]:
        await self._record("get_popular_tv_shows", page)
        return make_page(SAMPLE_TV_SHOWS)

    async def get_movie_details(self, movie_id: int) -> dict[str, Any]:
        await self._record("get_movie_details", movie_id)
        return {
            **copy.deepcopy(SAMPLE_MOVIES[0]),
            "id": movie_id,
            "runtime": 139,
            "genres": [{"id": 18, "name": "Drame"}],
            "release_dates": {
                "results": [
                    {"iso_3166_1": "US", "release_dates": [{"certification": "R"}]},
                    {"iso_3166_1": "FR", "release_dates": [{"certification": "16"}]},
                ]
            },
        }

    async def get_tv_show_details(self, tv_id: int) -> dict[str, Any]:
        await self._record("get_tv_show_details", tv_id)
        return {
            **copy.deepcopy(SAMPLE_TV_SHOWS[0]),
            "id": tv_id,
            "episode_run_time": [47],
            "genres": [{"id": 18, "name": "Drame"}],
        }

    async def search_multi(self, query: str, page: int = 1) -> dict[str, Any]:
        await self._record("search_multi", query, page)
        return make_page([{**SAMPLE_MOVIES[1], "media_type": "movie"}])

    async def get_movie_genres(self) -> dict[str, Any]:
        await self._record("get_movie_genres")
        return copy.deepcopy(MOVIE_GENRES)

    async def get_tv_genres(self) -> dict[str, Any]:
        await self._record("get_tv_genres")
        return copy.deepcopy(TV_GENRES)


class FakeClock:
    """Manually advanced wall clock for TTL tests."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_client() -> FakeCatalogClient:
    return FakeCatalogClient()


@pytest.fixture
def client_factory() -> type[FakeCatalogClient]:
    return FakeCatalogClient


@pytest.fixture
def failing_client() -> FakeCatalogClient:
    """A client whose every catalog call fails (genre lookups still work)."""
    return FakeCatalogClient(
        failing={
            "get_popular_movies",
            "get_trending_movies",
            "get_popular_tv_shows",
            "get_movie_details",
            "get_tv_show_details",
            "search_multi",
        }
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def facade(clock: FakeClock) -> CatalogFacade:
    """An unstarted facade with a controllable cache clock."""
    return CatalogFacade(
        cache=TTLCache(ttl_seconds=300, clock=clock),
        gate=ReadinessGate(),
        genre_index=GenreIndex(),
    )


@pytest.fixture
def sample_movies() -> list[dict[str, Any]]:
    return copy.deepcopy(SAMPLE_MOVIES)


@pytest.fixture
def sample_tv_shows() -> list[dict[str, Any]]:
    return copy.deepcopy(SAMPLE_TV_SHOWS)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")



@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handler/propagation changes made by setup_structured_logger."""
    yield
    package_logger = logging.getLogger("streamflix")
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)
