"""StreamFlix Settings Configuration Model.

Main Settings class that consolidates all configuration domains.
"""

from __future__ import annotations

from pathlib import Path

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from streamflix.config.models.api_settings import APISettings
from streamflix.config.models.app_settings import DisplaySettings, LoggingSettings
from streamflix.config.models.cache_settings import CacheSettings, ReadinessSettings


class Settings(BaseSettings):
    """Settings facade providing unified configuration access.

    Nested values can be overridden from the environment, e.g.
    ``STREAMFLIX_CACHE__TTL=60`` or ``STREAMFLIX_API__TMDB__LANGUAGE=en-US``.
    """

    model_config = SettingsConfigDict(
        env_prefix="STREAMFLIX_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    api: APISettings = Field(default_factory=APISettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    readiness: ReadinessSettings = Field(default_factory=ReadinessSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from a TOML file.

        Domains present in the file take precedence over the environment.
        """
        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        return cls(**raw_config)

    def to_toml_file(self, file_path: str | Path) -> None:
        """Save settings to TOML file.

        The API key is written too; the file relies on OS permissions.
        """
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self.model_dump(exclude_none=True)

        with open(file_path, "w", encoding="utf-8") as f:
            toml.dump(config_dict, f)
