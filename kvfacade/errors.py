"""
kvfacade — Core Error Types

Defines the exception hierarchy and error codes used across the facade.

Facade operations never raise: store failures are classified with
``classify_store_error`` and reported through logs or a ``CacheResult``.
Exceptions are raised only while building clients and loading configuration.
"""

from enum import Enum
from typing import Any

from redis import exceptions as redis_exceptions


class ErrorCode(str, Enum):
    """
    Standard error codes attached to log records and result objects.

    Lets callers tell an unreachable store apart from a key used with the
    wrong data type.
    """

    # Store errors
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    STORE_TIMEOUT = "STORE_TIMEOUT"
    KEY_TYPE_CONFLICT = "KEY_TYPE_CONFLICT"

    # Exclusive set lost to another writer
    CONTENTION = "CONTENTION"

    # Setup errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Internal errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class FacadeError(Exception):
    """Base exception for all kvfacade errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.error_code = error_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logs."""
        return {
            "error": self.__class__.__name__,
            "error_code": self.error_code.value,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(FacadeError):
    """Raised when configuration is invalid or a backend is unavailable."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, error_code=ErrorCode.CONFIGURATION_ERROR)


class CacheError(FacadeError):
    """Base exception for store-related errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
    ):
        super().__init__(message, details, error_code=error_code)


class StoreConnectionError(CacheError):
    """Raised when the store cannot be reached."""

    def __init__(self, backend: str, details: dict[str, Any] | None = None):
        message = f"Failed to connect to store backend: {backend}"
        super().__init__(message, details, error_code=ErrorCode.STORE_UNAVAILABLE)


class StoreOperationError(CacheError):
    """Raised when a store command fails."""

    pass


def classify_store_error(error: BaseException) -> ErrorCode:
    """
    Map an exception raised by a store client to an ErrorCode.

    Args:
        error: Exception to categorize

    Returns:
        Appropriate ErrorCode for the exception
    """
    if isinstance(error, FacadeError):
        return error.error_code

    # builtin TimeoutError is an OSError, so timeouts are checked first
    if isinstance(error, (redis_exceptions.TimeoutError, TimeoutError)):
        return ErrorCode.STORE_TIMEOUT

    if isinstance(error, (redis_exceptions.ConnectionError, ConnectionError, OSError)):
        return ErrorCode.STORE_UNAVAILABLE

    if isinstance(error, redis_exceptions.ResponseError) and str(error).startswith("WRONGTYPE"):
        return ErrorCode.KEY_TYPE_CONFLICT

    return ErrorCode.INTERNAL_ERROR
