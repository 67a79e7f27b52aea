"""
Cache Configuration Constants
"""

BASE_SECOND = 1
BASE_MINUTE = 60 * BASE_SECOND


class Cache:
    """Catalog cache defaults."""

    TTL = 5 * BASE_MINUTE  # 5 minutes
    KEY_SEPARATOR = "_"


class CacheEndpoint:
    """Logical endpoint names used as cache key prefixes."""

    POPULAR_MOVIES = "popular_movies"
    TRENDING_MOVIES = "trending_movies"
    POPULAR_TV = "popular_tv"
    SEARCH = "search"
    MOVIE_DETAILS = "movie_details"
    TV_DETAILS = "tv_details"


__all__ = [
    "BASE_MINUTE",
    "BASE_SECOND",
    "Cache",
    "CacheEndpoint",
]
