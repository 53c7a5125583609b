"""
Service result types.

Every public service operation returns a ``ServiceResult``: either the
computed data or a ``ServiceError`` carrying one of the ``ErrorCode``
kinds. The API layer turns failures into JSON error responses.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from app.core.exceptions import BaseAppException, ErrorCode


# HTTP status reported for each error code at the API boundary
STATUS_CODES: Dict[ErrorCode, int] = {
    ErrorCode.CONFLICTING_FILTER: 422,
    ErrorCode.INVALID_RANGE: 422,
    ErrorCode.INVALID_VALUE: 422,
    ErrorCode.EMPTY_INPUT: 422,
    ErrorCode.TOO_MANY_INPUTS: 422,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.UNKNOWN_DATASET: 400,
    ErrorCode.STORE_UNAVAILABLE: 503,
    ErrorCode.INTERNAL_ERROR: 500,
}


class ErrorSeverity(str, Enum):
    """How loudly a failure was logged."""

    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class ServiceError:
    """A failed operation: error kind, message and structured details."""

    code: ErrorCode
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    details: Optional[Dict[str, Any]] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_app_exception(
        cls,
        exception: BaseAppException,
        severity: ErrorSeverity = ErrorSeverity.WARNING,
    ) -> "ServiceError":
        """Carry an application exception's code, message and details over unchanged."""
        return cls(
            code=exception.error_code,
            message=exception.message,
            severity=severity,
            details=dict(exception.details) or None,
        )

    @property
    def status_code(self) -> int:
        return STATUS_CODES.get(self.code, 500)


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    """
    Outcome of a service operation.

    Attributes:
        is_success: Whether ``data`` holds the result
        data: Result data (if successful)
        error: Error information (if failed)
        message: Human-readable status message
        metadata: Counts and other context for logs and callers
    """

    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(
        cls,
        data: Optional[TData] = None,
        message: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        return cls(is_success=True, data=data, message=message, metadata=metadata or {})

    @classmethod
    def failure(cls, error: ServiceError) -> "ServiceResult[TData]":
        return cls(is_success=False, error=error, message=error.message)

    def __repr__(self) -> str:
        if self.is_success:
            return f"ServiceResult(Success: {self.message or '-'})"
        return f"ServiceResult(Failure: {self.error.code.value} {self.message})"


__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "STATUS_CODES",
    "ServiceError",
    "ServiceResult",
]
