"""Dependency Injection container for StreamFlix.

This module provides a centralized DI container using dependency-injector
to build the catalog facade and its collaborators from settings.

The container manages:
- Settings (Singleton)
- Rate limiter and TMDB catalog client
- Response cache, genre index and readiness gate
- Catalog facade
"""

from __future__ import annotations

from dependency_injector import containers, providers

from streamflix.config.loader import load_settings
from streamflix.services import (
    CatalogFacade,
    GenreIndex,
    ReadinessGate,
    TMDBCatalogClient,
    TokenBucketRateLimiter,
    TTLCache,
)


class Container(containers.DeclarativeContainer):
    """Dependency Injection container for StreamFlix services.

    Example:
        >>> container = Container()
        >>> facade = container.catalog_facade()
        >>> await facade.start(container.tmdb_client())
        >>> page = await facade.get_popular_movies()
    """

    # Configuration
    config = providers.Singleton(load_settings)

    # Rate limiting
    rate_limiter = providers.Singleton(
        TokenBucketRateLimiter,
        capacity=providers.Callable(
            lambda config: max(1, int(config.api.tmdb.rate_limit_rps)),
            config=config,
        ),
        refill_rate=providers.Callable(
            lambda config: config.api.tmdb.rate_limit_rps,
            config=config,
        ),
    )

    # Remote catalog client; construction fails without an API key
    tmdb_client = providers.Singleton(
        TMDBCatalogClient,
        settings=providers.Callable(lambda config: config.api.tmdb, config=config),
        rate_limiter=rate_limiter,
    )

    # Facade collaborators
    cache = providers.Singleton(
        TTLCache,
        ttl_seconds=providers.Callable(lambda config: config.cache.ttl, config=config),
        max_entries=providers.Callable(lambda config: config.cache.max_entries, config=config),
    )

    genre_index = providers.Singleton(GenreIndex)

    readiness_gate = providers.Singleton(
        ReadinessGate,
        timeout=providers.Callable(lambda config: config.readiness.timeout, config=config),
    )

    catalog_facade = providers.Singleton(
        CatalogFacade,
        cache=cache,
        gate=readiness_gate,
        genre_index=genre_index,
        cache_enabled=providers.Callable(lambda config: config.cache.enabled, config=config),
        coalesce_requests=providers.Callable(
            lambda config: config.cache.coalesce_requests,
            config=config,
        ),
        display=providers.Callable(lambda config: config.display, config=config),
        image_base_url=providers.Callable(
            lambda config: config.api.tmdb.image_base_url,
            config=config,
        ),
    )


__all__ = ["Container"]
