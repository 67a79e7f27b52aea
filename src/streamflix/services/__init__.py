"""StreamFlix services: catalog facade and its collaborators."""

from .catalog_facade import CatalogFacade
from .formatting import FormattedRecord
from .genre_index import GenreIndex
from .rate_limiter import TokenBucketRateLimiter
from .readiness import ReadinessGate
from .tmdb import RemoteCatalogClient, TMDBCatalogClient, build_image_url
from .ttl_cache import CacheEntry, TTLCache, make_cache_key

__all__ = [
    "CacheEntry",
    "CatalogFacade",
    "FormattedRecord",
    "GenreIndex",
    "ReadinessGate",
    "RemoteCatalogClient",
    "TMDBCatalogClient",
    "TTLCache",
    "TokenBucketRateLimiter",
    "build_image_url",
    "make_cache_key",
]
