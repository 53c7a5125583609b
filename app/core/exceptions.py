"""
Custom Exceptions for the Dormitory Open Data Service

This module defines the error kinds raised by the open-data engines and
the store layer. Every kind maps to a stable error code and HTTP status.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # Input errors
    CONFLICTING_FILTER = "CONFLICTING_FILTER"
    INVALID_RANGE = "INVALID_RANGE"
    INVALID_VALUE = "INVALID_VALUE"
    EMPTY_INPUT = "EMPTY_INPUT"
    TOO_MANY_INPUTS = "TOO_MANY_INPUTS"

    # Lookup errors
    NOT_FOUND = "NOT_FOUND"
    UNKNOWN_DATASET = "UNKNOWN_DATASET"

    # Infrastructure errors
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# Input Validation Exceptions
# ========================================

class ConflictingFilterError(BaseAppException):
    """Raised when mutually exclusive filter options are combined"""

    def __init__(
        self,
        message: str = "Conflicting filter options",
        fields: Optional[List[str]] = None,
    ):
        details = {"fields": fields} if fields else {}
        super().__init__(message, ErrorCode.CONFLICTING_FILTER, details, 422)


class InvalidRangeError(BaseAppException):
    """Raised when a lower bound exceeds its upper bound"""

    def __init__(
        self,
        message: str = "Invalid range",
        lower: Any = None,
        upper: Any = None,
    ):
        details = {"lower": lower, "upper": upper}
        super().__init__(message, ErrorCode.INVALID_RANGE, details, 422)


class InvalidValueError(BaseAppException):
    """Raised when a single value is out of its allowed domain"""

    def __init__(
        self,
        message: str = "Invalid value",
        field: Optional[str] = None,
        value: Any = None,
    ):
        details = {"field": field, "value": value} if field else {}
        super().__init__(message, ErrorCode.INVALID_VALUE, details, 422)


class EmptyInputError(BaseAppException):
    """Raised when a required collection is empty"""

    def __init__(self, message: str = "At least one item is required", field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, ErrorCode.EMPTY_INPUT, details, 422)


class TooManyInputsError(BaseAppException):
    """Raised when a collection exceeds its allowed size"""

    def __init__(
        self,
        message: str = "Too many items",
        limit: Optional[int] = None,
        received: Optional[int] = None,
    ):
        details = {"limit": limit, "received": received}
        super().__init__(message, ErrorCode.TOO_MANY_INPUTS, details, 422)


# ========================================
# Lookup Exceptions
# ========================================

class NotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.NOT_FOUND, details, 404)


class UnknownDatasetError(BaseAppException):
    """Raised when an export names a dataset that does not exist"""

    def __init__(self, dataset: str, available: Optional[List[str]] = None):
        details = {"dataset": dataset, "available": available or []}
        super().__init__(f"Unknown dataset: {dataset}", ErrorCode.UNKNOWN_DATASET, details, 400)


# ========================================
# Infrastructure Exceptions
# ========================================

class StoreUnavailableError(BaseAppException):
    """Raised when the entity store cannot be read"""

    def __init__(
        self,
        message: str = "Entity store unavailable",
        operation: Optional[str] = None,
        original_error: Optional[str] = None,
    ):
        details = {}
        if operation:
            details["operation"] = operation
        if original_error:
            details["original_error"] = original_error
        super().__init__(message, ErrorCode.STORE_UNAVAILABLE, details, 503)


__all__ = [
    "ErrorCode",
    "BaseAppException",
    "ConflictingFilterError",
    "InvalidRangeError",
    "InvalidValueError",
    "EmptyInputError",
    "TooManyInputsError",
    "NotFoundError",
    "UnknownDatasetError",
    "StoreUnavailableError",
]
