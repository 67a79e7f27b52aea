"""StreamFlix Error Handling Module

This module defines the error handling system for StreamFlix, providing
structured error classes with context information.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]

# Default keys to mask in safe_dict
SAFE_DICT_MASK_KEYS: tuple[str, ...] = ("api_key",)


class ErrorCode(str, Enum):
    """Error codes for StreamFlix.

    This enum serves as the single source of truth for all error codes
    used throughout the application.
    """

    # Transport Errors
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    TMDB_API_CONNECTION_ERROR = "TMDB_API_CONNECTION_ERROR"
    TMDB_API_AUTHENTICATION_ERROR = "TMDB_API_AUTHENTICATION_ERROR"
    TMDB_API_RATE_LIMIT_EXCEEDED = "TMDB_API_RATE_LIMIT_EXCEEDED"
    TMDB_API_REQUEST_FAILED = "TMDB_API_REQUEST_FAILED"
    TMDB_API_TIMEOUT = "TMDB_API_TIMEOUT"
    TMDB_API_SERVER_ERROR = "TMDB_API_SERVER_ERROR"
    TMDB_API_INVALID_RESPONSE = "TMDB_API_INVALID_RESPONSE"

    # Readiness and Initialization Errors
    DEPENDENCY_UNAVAILABLE = "DEPENDENCY_UNAVAILABLE"
    GENRE_LOAD_FAILED = "GENRE_LOAD_FAILED"

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_MEDIA_KIND = "INVALID_MEDIA_KIND"

    # Cache Errors
    CACHE_ERROR = "CACHE_ERROR"

    # Configuration Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    MISSING_CONFIG = "MISSING_CONFIG"

    # CLI Errors
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"
    CLI_OUTPUT_ERROR = "CLI_OUTPUT_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path, Enum, Decimal to primitive types.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        elif val is None:
            coerced[key] = "None"
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to ensure safe serialization.

    Attributes:
        operation: Optional operation name that caused the error
        endpoint: Optional logical endpoint name (e.g. ``popular_movies``)
        additional_data: Optional dict with primitive values only
    """

    operation: str | None = None
    endpoint: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self, *, mask_keys: tuple[str, ...] | None = None) -> dict[str, Any]:
        """Export context as dict with sensitive keys removed.

        Args:
            mask_keys: Keys to drop from additional_data. Defaults to SAFE_DICT_MASK_KEYS.

        Returns:
            Dictionary with a guaranteed ``additional_data`` key.

        Example:
            >>> ErrorContext(operation="get_popular_movies").safe_dict()
            {'operation': 'get_popular_movies', 'additional_data': {}}
        """
        if mask_keys is None:
            mask_keys = SAFE_DICT_MASK_KEYS

        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        if self.endpoint is not None:
            data["endpoint"] = self.endpoint

        data["additional_data"] = {
            key: value
            for key, value in (self.additional_data or {}).items()
            if key not in mask_keys
        }
        return data


class StreamFlixError(Exception):
    """Base exception class for all StreamFlix errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize StreamFlixError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(StreamFlixError):
    """Domain-specific errors.

    Examples:
    - Unknown media kind passed to the genre index
    - Invalid filter arguments
    """


class InfrastructureError(StreamFlixError):
    """Infrastructure-related errors.

    These errors occur when interacting with external systems
    like the remote catalog service.
    """


class TransportError(InfrastructureError):
    """A remote catalog call failed.

    Raised by the transport for non-2xx responses, network failures and
    undecodable payloads. The catalog facade absorbs it and serves the
    endpoint's fallback dataset instead.
    """


class DependencyUnavailableError(InfrastructureError):
    """The readiness gate was not signalled within the configured timeout."""


class GenreLoadError(InfrastructureError):
    """Loading the genre taxonomy failed; the previous taxonomy is kept."""


class ApplicationError(StreamFlixError):
    """Application-level errors (configuration, command handling)."""


class SecurityError(StreamFlixError):
    """Missing or invalid secrets such as the TMDB API key."""


def create_transport_error(
    message: str,
    endpoint: str | None = None,
    code: ErrorCode = ErrorCode.TRANSPORT_ERROR,
    original_error: Exception | None = None,
) -> TransportError:
    """Create a transport error with context."""
    context = ErrorContext(
        operation="remote_call",
        endpoint=endpoint,
    )
    return TransportError(code, message, context, original_error)


def create_validation_error(
    message: str,
    field: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> DomainError:
    """Create a validation error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"field": field} if field else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return DomainError(
        ErrorCode.VALIDATION_ERROR,
        message,
        context,
        original_error,
    )
