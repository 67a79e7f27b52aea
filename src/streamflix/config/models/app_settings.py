"""Application-level configuration models (logging, display)."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from streamflix.shared.constants import MONTH_NAMES, DisplayDefaults


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level name")
    file: str | None = Field(default=None, description="Optional JSON log file")
    use_rich_console: bool = Field(default=True, description="Rich console output")

    @field_validator("level")
    @classmethod
    def validate_level(cls, value: str) -> str:
        """Normalize and validate the log level name."""
        normalized = value.upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Invalid log level: {value}"
            raise ValueError(msg)
        return normalized


class DisplaySettings(BaseModel):
    """Formatting options for display records."""

    overview_max_length: int = Field(
        default=DisplayDefaults.OVERVIEW_MAX_LENGTH,
        gt=0,
        description="Overview length before truncation",
    )
    locale: str = Field(
        default=DisplayDefaults.LOCALE,
        description="Locale used for long-form dates",
    )

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, value: str) -> str:
        """Only locales with a month table are accepted."""
        if value not in MONTH_NAMES:
            msg = f"Unsupported locale: {value} (expected one of {sorted(MONTH_NAMES)})"
            raise ValueError(msg)
        return value


__all__ = [
    "DisplaySettings",
    "LoggingSettings",
]
