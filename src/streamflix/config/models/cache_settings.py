"""Cache and readiness configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from streamflix.shared.constants import Cache


class CacheSettings(BaseModel):
    """Catalog response cache configuration."""

    enabled: bool = Field(default=True, description="Enable response caching")
    ttl: float = Field(
        default=Cache.TTL,
        gt=0,
        description="Cache time-to-live in seconds",
    )
    max_entries: int | None = Field(
        default=None,
        gt=0,
        description="Upper bound on cached entries (None = unbounded)",
    )
    coalesce_requests: bool = Field(
        default=False,
        description="Share one remote call between concurrent identical misses",
    )


class ReadinessSettings(BaseModel):
    """Readiness gate configuration."""

    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds to wait for the catalog client (None = wait forever)",
    )


__all__ = [
    "CacheSettings",
    "ReadinessSettings",
]
