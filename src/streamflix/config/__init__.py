"""StreamFlix Configuration Module

- Settings: Main configuration facade
- Loader functions: get_config, load_settings, reload_config
- Domain models: API, Cache, Readiness, Logging, Display settings
"""

from __future__ import annotations

from .models import (
    APISettings,
    CacheSettings,
    DisplaySettings,
    LoggingSettings,
    ReadinessSettings,
    TMDBSettings,
)
from .models.settings import Settings
from .loader import (
    SettingsLoader,
    get_config,
    load_settings,
    reload_config,
)

__all__ = [
    "APISettings",
    "CacheSettings",
    "DisplaySettings",
    "LoggingSettings",
    "ReadinessSettings",
    "Settings",
    "SettingsLoader",
    "TMDBSettings",
    "get_config",
    "load_settings",
    "reload_config",
]
