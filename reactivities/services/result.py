"""
Outcome of a command or query handler.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION_FAILURE"
    PERSISTENCE = "PERSISTENCE_FAILURE"


DEFAULT_STATUS = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.PERSISTENCE: 400,
}


@dataclass
class Result(Generic[T]):
    """Either a value or an error message with the status code to report."""
    is_success: bool
    value: Optional[T] = None
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None
    status_code: int = 200

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(is_success=True, value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, error: str, status_code: Optional[int] = None) -> "Result":
        return cls(
            is_success=False,
            error=error,
            kind=kind,
            status_code=status_code or DEFAULT_STATUS[kind],
        )

    @classmethod
    def not_found(cls, error: str) -> "Result":
        return cls.failure(ErrorKind.NOT_FOUND, error)

    @classmethod
    def invalid(cls, error: str) -> "Result":
        return cls.failure(ErrorKind.VALIDATION, error)

    @classmethod
    def not_saved(cls, error: str, status_code: int = 400) -> "Result":
        return cls.failure(ErrorKind.PERSISTENCE, error, status_code)
