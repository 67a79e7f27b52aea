"""Settings loader and singleton manager.

This module handles:
- Environment variable loading from .env files
- Configuration file loading from TOML
- Thread-safe singleton pattern for Settings instance
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

from dotenv import load_dotenv

from streamflix.config.models.settings import Settings
from streamflix.shared.errors import ApplicationError, ErrorCode, ErrorContext

logger = logging.getLogger(__name__)

# Plain TMDB key variable, honoured when the nested variable is not set
TMDB_API_KEY_ENV = "TMDB_API_KEY"

DEFAULT_CONFIG_PATHS: tuple[Path, ...] = (
    Path("config/config.toml"),
    Path("config.toml"),
)


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking pattern to ensure thread-safety
    while minimizing lock overhead.
    """

    def __init__(self) -> None:
        self._instance: Settings | None = None
        self._lock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the global settings instance, loading it on first use."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def reload_config(self) -> Settings:
        """Reload the global settings instance from configuration files."""
        with self._lock:
            self._instance = load_settings()

        return self._instance

    def reset(self) -> None:
        """Forget the cached instance."""
        with self._lock:
            self._instance = None


def _load_env_file(env_file: Path = Path(".env")) -> None:
    """Load environment variables from a .env file if present.

    Existing environment variables win over values from the file.
    """
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug("Loaded environment from %s", env_file)


def _apply_plain_api_key(settings: Settings) -> Settings:
    if not settings.api.tmdb.api_key:
        api_key = os.getenv(TMDB_API_KEY_ENV, "").strip()
        if api_key:
            settings.api.tmdb.api_key = api_key
    return settings


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from TOML configuration file or environment.

    Args:
        config_path: Optional path to TOML configuration file. If None, tries
            the default locations and then environment variables only.

    Returns:
        Settings instance loaded from the specified source

    Raises:
        ApplicationError: If an explicit config_path does not exist or is invalid
    """
    _load_env_file()

    if config_path is not None:
        try:
            return _apply_plain_api_key(Settings.from_toml_file(config_path))
        except (FileNotFoundError, ValueError) as e:
            raise ApplicationError(
                code=ErrorCode.CONFIGURATION_ERROR,
                message=f"Failed to load configuration: {e}",
                context=ErrorContext(
                    operation="load_settings",
                    additional_data={"config_path": str(config_path)},
                ),
                original_error=e,
            ) from e

    for default_path in DEFAULT_CONFIG_PATHS:
        if default_path.exists():
            logger.debug("Loading configuration from %s", default_path)
            return _apply_plain_api_key(Settings.from_toml_file(default_path))

    return _apply_plain_api_key(Settings())


_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the global settings instance (thread-safe)."""
    return _loader.get_config()


def reload_config() -> Settings:
    """Reload the global settings instance from configuration files."""
    return _loader.reload_config()


__all__ = [
    "SettingsLoader",
    "get_config",
    "load_settings",
    "reload_config",
]
