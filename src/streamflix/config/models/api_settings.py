"""API configuration models (TMDB).

This module contains configuration models for the remote catalog service.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from streamflix.shared.constants import TMDBConfig as TMDBConstants


class TMDBSettings(BaseModel):
    """TMDB API configuration.

    Security: api_key is masked in __repr__ to prevent accidental
    exposure in logs.
    """

    api_key: str = Field(
        default="",
        repr=False,
        description="TMDB API key (required for API access)",
    )
    language: str = Field(
        default=TMDBConstants.DEFAULT_LANGUAGE,
        description="Language code sent with every request",
    )
    region: str = Field(
        default=TMDBConstants.DEFAULT_REGION,
        description="Region code sent with every request",
    )
    include_adult: bool = Field(default=False, description="Include adult titles")

    timeout: int = Field(
        default=TMDBConstants.TIMEOUT,
        gt=0,
        description="Request timeout in seconds",
    )
    retry_attempts: int = Field(
        default=TMDBConstants.RETRY_ATTEMPTS,
        ge=0,
        description="Number of retry attempts",
    )
    retry_delay: float = Field(
        default=TMDBConstants.RETRY_DELAY,
        ge=0,
        description="Base delay between retries in seconds",
    )
    rate_limit_rps: float = Field(
        default=TMDBConstants.RATE_LIMIT_RPS,
        gt=0,
        description="Rate limit in requests per second",
    )
    concurrent_requests: int = Field(
        default=TMDBConstants.CONCURRENT_REQUESTS,
        gt=0,
        description="Maximum number of concurrent requests",
    )
    image_base_url: str = Field(
        default=TMDBConstants.IMAGE_BASE_URL,
        description="Base URL for poster/backdrop images",
    )

    def __repr__(self) -> str:
        masked_key = "****" if self.api_key else "[empty]"
        return (
            f"TMDBSettings("
            f"api_key={masked_key}, "
            f"language={self.language}, "
            f"region={self.region}, "
            f"retry_attempts={self.retry_attempts}, "
            f"rate_limit_rps={self.rate_limit_rps})"
        )


class APISettings(BaseModel):
    """API configuration container."""

    tmdb: TMDBSettings = Field(
        default_factory=TMDBSettings,
        description="TMDB API configuration",
    )


__all__ = [
    "APISettings",
    "TMDBSettings",
]
