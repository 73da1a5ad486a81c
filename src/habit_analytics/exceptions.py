"""
Custom exceptions for the habit analytics engine.

Analytics calls never raise for missing or partial habit data; they fall
back to well-defined defaults. The exceptions below are reserved for:
- Caller mistakes on the few state-writing operations
- Unreadable or invalid snapshot files
- Failures of the injected key-value store

Each exception carries a message, an error code and optional details.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent error reporting."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Goal errors
    GOAL_ADJUSTMENT_MISMATCH = "GOAL_ADJUSTMENT_MISMATCH"

    # Stack errors
    STACK_INDEX_OUT_OF_RANGE = "STACK_INDEX_OUT_OF_RANGE"
    STACK_MEMBERSHIP_CONFLICT = "STACK_MEMBERSHIP_CONFLICT"

    # Data errors
    SNAPSHOT_UNREADABLE = "SNAPSHOT_UNREADABLE"
    SNAPSHOT_INVALID = "SNAPSHOT_INVALID"
    STORE_ERROR = "STORE_ERROR"


class HabitAnalyticsError(Exception):
    """
    Base exception for all habit analytics errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured output."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class ValidationError(HabitAnalyticsError):
    """Raised when caller-supplied arguments are invalid."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            details=error_details,
        )


class GoalAdjustmentError(ValidationError):
    """Raised when a goal suggestion is applied to the wrong habit."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, field="habit_id", details=details)
        self.code = ErrorCode.GOAL_ADJUSTMENT_MISMATCH


class StackOperationError(HabitAnalyticsError):
    """Raised when a stack mutation cannot be carried out."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.STACK_INDEX_OUT_OF_RANGE,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, code=code, details=details)


class SnapshotError(HabitAnalyticsError):
    """Raised when a habit snapshot cannot be read or parsed."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        code: ErrorCode = ErrorCode.SNAPSHOT_INVALID,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if path:
            error_details["path"] = path
        super().__init__(message=message, code=code, details=error_details)


class StoreError(HabitAnalyticsError):
    """Raised when the key-value store fails."""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if key:
            error_details["key"] = key
        super().__init__(message=message, code=ErrorCode.STORE_ERROR, details=error_details)
