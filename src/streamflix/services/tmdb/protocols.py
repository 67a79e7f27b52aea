"""Remote catalog client contract.

The catalog facade depends only on this protocol; the TMDB transport and
test doubles both satisfy it structurally.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

CatalogRecord = dict[str, Any]
CatalogPage = dict[str, Any]
GenreList = dict[str, Any]


@runtime_checkable
class RemoteCatalogClient(Protocol):
    """Capabilities the facade needs from the remote catalog service.

    Every method returns a decoded payload or raises TransportError.
    """

    async def get_popular_movies(self, page: int = 1) -> CatalogPage: ...

    async def get_trending_movies(self, time_window: str = "week", page: int = 1) -> CatalogPage: ...

    async def get_popular_tv_shows(self, page: int = 1) -> CatalogPage: ...

    async def get_movie_details(self, movie_id: int) -> CatalogRecord: ...

    async def get_tv_show_details(self, tv_id: int) -> CatalogRecord: ...

    async def search_multi(self, query: str, page: int = 1) -> CatalogPage: ...

    async def get_movie_genres(self) -> GenreList: ...

    async def get_tv_genres(self) -> GenreList: ...


__all__ = [
    "CatalogPage",
    "CatalogRecord",
    "GenreList",
    "RemoteCatalogClient",
]
