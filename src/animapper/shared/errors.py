"""Animapper Error Handling Module

This module defines the error handling system for Animapper, providing
structured error classes with context information.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved

Lookups that simply find nothing (unknown AniList id, no candidate above the
acceptance threshold) are outcomes, not errors, and are reported through
``LookupOutcome`` in ``animapper.services.episode_mapper``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for Animapper.

    This enum serves as the single source of truth for all error codes
    used throughout the application.
    """

    # Input Errors
    INVALID_ANIME_ID = "INVALID_ANIME_ID"

    # Lookup Outcomes
    METADATA_NOT_FOUND = "METADATA_NOT_FOUND"
    NO_MATCH_FOUND = "NO_MATCH_FOUND"
    EPISODES_NOT_FOUND = "EPISODES_NOT_FOUND"

    # Network and API Errors
    NETWORK_ERROR = "NETWORK_ERROR"
    API_TIMEOUT = "API_TIMEOUT"
    API_REQUEST_FAILED = "API_REQUEST_FAILED"
    ANILIST_REQUEST_FAILED = "ANILIST_REQUEST_FAILED"
    HIANIME_REQUEST_FAILED = "HIANIME_REQUEST_FAILED"
    ANIZIP_REQUEST_FAILED = "ANIZIP_REQUEST_FAILED"

    # Parsing Errors
    PARSING_ERROR = "PARSING_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"

    # Application Errors
    APPLICATION_ERROR = "APPLICATION_ERROR"
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"


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
    additional_data to keep log records serializable.

    Attributes:
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization coercion of additional_data."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self) -> dict[str, Any]:
        """Export context as dict for logging.

        Returns:
            Dictionary with a guaranteed additional_data key.

        Example:
            >>> ErrorContext(operation="search").safe_dict()
            {'operation': 'search', 'additional_data': {}}
        """
        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        data["additional_data"] = dict(self.additional_data or {})
        return data


class AnimapperError(Exception):
    """Base exception class for all Animapper errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize AnimapperError.

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
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error with code, message,
            context, and original_error (if present)
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(AnimapperError):
    """Domain-specific errors.

    Examples:
    - Malformed AniList id
    - Invalid matching configuration values
    """


class InfrastructureError(AnimapperError):
    """Errors raised while talking to external systems (AniList, Hianime, ani.zip)."""


class AnimapperNetworkError(InfrastructureError):
    """Network-related errors.

    Examples:
    - Connection errors
    - Request timeouts
    - Non-2xx responses from a provider
    """


class AnimapperParsingError(DomainError):
    """Provider payloads that could not be decoded or validated.

    Examples:
    - JSON decode errors
    - Pydantic validation failures on API responses
    """


class ApplicationError(AnimapperError):
    """Application-level errors (configuration, command handling)."""


def create_invalid_id_error(raw_id: str, operation: str | None = None) -> DomainError:
    """Create an error for an AniList id that is not a positive integer."""
    context = ErrorContext(
        operation=operation,
        additional_data={"raw_id": raw_id},
    )
    return DomainError(
        ErrorCode.INVALID_ANIME_ID,
        f"Invalid Anilist ID: {raw_id!r}",
        context,
    )


def create_api_error(
    message: str,
    code: ErrorCode = ErrorCode.API_REQUEST_FAILED,
    url: str | None = None,
    status: int | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> AnimapperNetworkError:
    """Create a provider request error with context."""
    additional_data: dict[str, PrimitiveContextValue] = {}
    if url is not None:
        additional_data["url"] = url
    if status is not None:
        additional_data["status"] = status
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data or None,
    )
    return AnimapperNetworkError(
        code,
        message,
        context,
        original_error,
    )


def create_parsing_error(
    message: str,
    url: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> AnimapperParsingError:
    """Create a parsing error with context."""
    context = ErrorContext(
        operation=operation,
        additional_data={"url": url} if url else None,
    )
    return AnimapperParsingError(
        ErrorCode.PARSING_ERROR,
        message,
        context,
        original_error,
    )


def create_config_error(
    message: str,
    config_key: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> ApplicationError:
    """Create a configuration error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"config_key": config_key} if config_key else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return ApplicationError(
        ErrorCode.CONFIG_ERROR,
        message,
        context,
        original_error,
    )
