"""
CacheTool — Core Error Types

Defines the exception hierarchy for the CacheTool runtime.
All exceptions inherit from CacheToolError for consistent error handling.

- ErrorCode enum for structured tool responses
- Adapter and code execution error types
- Lookup failure for unknown proxy functions
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """
    Standard error codes for MCP tool responses.

    Used for structured error handling and client-side error recovery.
    """

    # Input validation errors
    INVALID_INPUT = "INVALID_INPUT"

    # Dispatch errors
    FUNCTION_NOT_FOUND = "FUNCTION_NOT_FOUND"

    # Adapter errors
    ADAPTER_ERROR = "ADAPTER_ERROR"
    ADAPTER_NOT_SET = "ADAPTER_NOT_SET"
    EXECUTION_ERROR = "EXECUTION_ERROR"
    SERIALIZATION_ERROR = "SERIALIZATION_ERROR"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Internal errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CacheToolError(Exception):
    """Base exception for all CacheTool errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        status_code: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(CacheToolError):
    """Raised when configuration is invalid or the temp directory is unusable."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, status_code=500)


class FunctionNotFoundError(CacheToolError, LookupError):
    """Raised when no registered proxy provides the requested function."""

    def __init__(self, name: str):
        message = f"Function with name: {name} is not provided by any proxy."
        super().__init__(message, {"function": name}, status_code=404)
        self.name = name


class AdapterError(CacheToolError):
    """Base exception for adapter-related errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, status_code=502)


class AdapterNotSetError(AdapterError):
    """Raised when a proxy function runs before an adapter was wired in."""

    def __init__(self, proxy: str):
        message = f"No adapter set for proxy {proxy}"
        super().__init__(message, {"proxy": proxy})


class CodeExecutionError(AdapterError):
    """Raised when code executed by an adapter reports errors."""

    def __init__(self, errors: list[dict[str, Any]]):
        first = errors[0] if errors else {}
        message = str(first.get("message", "Code execution failed"))
        super().__init__(message, {"errors": errors})
        self.errors = errors
        self.error_type = first.get("type")


class SerializationError(AdapterError):
    """Raised when adapter output cannot be decoded."""

    def __init__(self, output: str, details: dict[str, Any] | None = None):
        preview = output[:200]
        error_details = details or {}
        error_details["output_preview"] = preview
        super().__init__("Could not decode data returned by adapter", error_details)


class ValidationError(CacheToolError):
    """Raised when input validation fails."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, status_code=400)


def make_error_response(
    error_code: ErrorCode,
    message: str,
    context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Create a standardized error response for MCP tools.

    Args:
        error_code: Standard error code
        message: Human-readable error message
        context: Additional context/details

    Returns:
        Standardized error response dictionary

    Example:
        >>> make_error_response(
        ...     ErrorCode.FUNCTION_NOT_FOUND,
        ...     "Function with name: missing is not provided by any proxy.",
        ...     {"function": "missing"}
        ... )
        {
            "success": False,
            "error_code": "FUNCTION_NOT_FOUND",
            "message": "Function with name: missing is not provided by any proxy.",
            "details": {"function": "missing"}
        }
    """
    return {
        "success": False,
        "error_code": error_code.value,
        "message": message,
        "details": context or {},
    }


def extract_error_code(error: Exception) -> ErrorCode:
    """
    Extract appropriate ErrorCode from an exception.

    Args:
        error: Exception to categorize

    Returns:
        Appropriate ErrorCode for the exception
    """
    if isinstance(error, FunctionNotFoundError):
        return ErrorCode.FUNCTION_NOT_FOUND

    if isinstance(error, AdapterNotSetError):
        return ErrorCode.ADAPTER_NOT_SET

    if isinstance(error, CodeExecutionError):
        return ErrorCode.EXECUTION_ERROR

    if isinstance(error, SerializationError):
        return ErrorCode.SERIALIZATION_ERROR

    if isinstance(error, AdapterError):
        return ErrorCode.ADAPTER_ERROR

    if isinstance(error, ValidationError):
        return ErrorCode.INVALID_INPUT

    if isinstance(error, ConfigurationError):
        return ErrorCode.CONFIGURATION_ERROR

    return ErrorCode.INTERNAL_ERROR
