"""
CLI Context Management Module

Holds the global CLI options (log level, JSON output) parsed by the main
callback so that every command can read them.
"""

from __future__ import annotations

import contextvars
from enum import Enum

from pydantic import BaseModel, Field


class LogLevel(str, Enum):
    """Log level enumeration for type safety."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CliContext(BaseModel):
    """Global CLI state shared across commands."""

    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")
    json_output: bool = Field(default=False, description="Whether to output in JSON format")


_cli_context: contextvars.ContextVar[CliContext | None] = contextvars.ContextVar(
    "cli_context",
    default=None,
)


def get_cli_context() -> CliContext:
    """Return the current CLI context, or defaults if none was set."""
    context = _cli_context.get()
    if context is None:
        return CliContext()
    return context


def set_cli_context(context: CliContext) -> None:
    _cli_context.set(context)
