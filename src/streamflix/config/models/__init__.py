"""Configuration domain models."""

from .api_settings import APISettings, TMDBSettings
from .app_settings import DisplaySettings, LoggingSettings
from .cache_settings import CacheSettings, ReadinessSettings

__all__ = [
    "APISettings",
    "CacheSettings",
    "DisplaySettings",
    "LoggingSettings",
    "ReadinessSettings",
    "TMDBSettings",
]
