"""
kvfacade — Result Type

Tagged outcome of a read that separates "nothing there" from "store failed".
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from .errors import ErrorCode

T = TypeVar("T")


class ResultStatus(str, Enum):
    """Outcome of a store read."""

    OK = "ok"
    NOT_FOUND = "not_found"
    STORE_ERROR = "store_error"


@dataclass(frozen=True)
class CacheResult(Generic[T]):
    """
    Outcome of a facade read.

    Attributes:
        status: Which of the three outcomes occurred
        value: The value read (OK only)
        error: The exception raised by the store client (STORE_ERROR only)
        error_code: Classification of ``error``
    """

    status: ResultStatus
    value: T | None = None
    error: BaseException | None = None
    error_code: ErrorCode | None = None

    @classmethod
    def ok(cls, value: T) -> "CacheResult[T]":
        return cls(status=ResultStatus.OK, value=value)

    @classmethod
    def not_found(cls) -> "CacheResult[T]":
        return cls(status=ResultStatus.NOT_FOUND)

    @classmethod
    def store_error(cls, error: BaseException, error_code: ErrorCode) -> "CacheResult[T]":
        return cls(status=ResultStatus.STORE_ERROR, error=error, error_code=error_code)

    @property
    def is_ok(self) -> bool:
        return self.status is ResultStatus.OK

    @property
    def is_not_found(self) -> bool:
        return self.status is ResultStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        return self.status is ResultStatus.STORE_ERROR

    def unwrap_or(self, default: T) -> T:
        """Return the value when OK, ``default`` otherwise."""
        if self.status is ResultStatus.OK:
            return self.value  # type: ignore[return-value]
        return default

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary for structured logs."""
        return {
            "status": self.status.value,
            "value": self.value,
            "error": str(self.error) if self.error is not None else None,
            "error_code": self.error_code.value if self.error_code is not None else None,
        }
