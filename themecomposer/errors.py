"""Error codes and error handling utilities for ThemeComposer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for ThemeComposer operations."""

    # Validation errors
    BOX_CAPACITY_EXCEEDED = auto()
    UNKNOWN_LINE_TYPE = auto()
    UNKNOWN_VARIANT = auto()
    READ_ONLY_THEME = auto()
    UNSUPPORTED_OPERATION = auto()

    # Persistence errors
    PERSIST_FAILED = auto()
    PERSIST_TIMEOUT = auto()
    PERSIST_UNAVAILABLE = auto()
    PERSIST_ACCESS_DENIED = auto()
    PERSIST_NOT_FOUND = auto()
    APPLY_FAILED = auto()

    # Load errors
    LOAD_FAILED = auto()
    RECORD_MALFORMED = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.BOX_CAPACITY_EXCEEDED: "Maximum 3 background boxes allowed.",
    ErrorCode.UNKNOWN_LINE_TYPE: "This line type is not part of the theme.",
    ErrorCode.UNKNOWN_VARIANT: "Unknown theme variant.",
    ErrorCode.READ_ONLY_THEME: "Built-in themes are read-only. Duplicate the theme to edit it.",
    ErrorCode.UNSUPPORTED_OPERATION: "This operation is not supported.",

    ErrorCode.PERSIST_FAILED: "Failed to save theme. Your changes are kept; try again.",
    ErrorCode.PERSIST_TIMEOUT: "Saving timed out. Your changes are kept; try again.",
    ErrorCode.PERSIST_UNAVAILABLE: "Theme storage is unavailable. Your changes are kept; try again.",
    ErrorCode.PERSIST_ACCESS_DENIED: "Access denied while saving. Check folder permissions.",
    ErrorCode.PERSIST_NOT_FOUND: "The theme no longer exists in storage.",
    ErrorCode.APPLY_FAILED: "Theme was saved but could not be applied to the displays.",

    ErrorCode.LOAD_FAILED: "Could not load the theme. Using defaults.",
    ErrorCode.RECORD_MALFORMED: "The stored theme is malformed. Using defaults.",
}


@dataclass
class ThemeComposerError(Exception):
    """Base exception for ThemeComposer with error code and context."""

    code: ErrorCode
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if not self.suggestion and self.code in ERROR_MESSAGES:
            self.suggestion = ERROR_MESSAGES[self.code]

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or UI display."""
        return {
            "code": self.code.name,
            "message": self.message,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class ValidationError(ThemeComposerError):
    """Operation rejected synchronously; nothing was changed."""


class CapacityExceeded(ValidationError):
    def __init__(self, limit: int) -> None:
        super().__init__(ErrorCode.BOX_CAPACITY_EXCEEDED, details={"limit": limit})


class UnknownLineType(ValidationError, KeyError):
    def __init__(self, line_type: str) -> None:
        super().__init__(
            ErrorCode.UNKNOWN_LINE_TYPE,
            message=f"Unknown line type: {line_type!r}",
            details={"line_type": line_type},
        )


class UnknownVariant(ValidationError, KeyError):
    def __init__(self, variant: str) -> None:
        super().__init__(
            ErrorCode.UNKNOWN_VARIANT,
            message=f"Unknown theme variant: {variant!r}",
            details={"variant": variant},
        )


class ReadOnlyTheme(ValidationError):
    def __init__(self, theme_id: str) -> None:
        super().__init__(ErrorCode.READ_ONLY_THEME, details={"theme_id": theme_id})


class UnsupportedOperation(ValidationError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.UNSUPPORTED_OPERATION, message=message)


class PersistenceError(ThemeComposerError):
    """A create/update/apply call against theme storage failed."""


class LoadError(ThemeComposerError):
    """A theme could not be fetched or decoded."""


def classify_exception(exc: Exception) -> ThemeComposerError:
    """Classify a gateway exception into a PersistenceError with an appropriate code."""
    if isinstance(exc, ThemeComposerError):
        return exc

    exc_name = type(exc).__name__
    exc_str = str(exc).lower()
    details = {"original": f"{exc_name}: {exc}"}

    if "Timeout" in exc_name or "timeout" in exc_str or "timed out" in exc_str:
        return PersistenceError(ErrorCode.PERSIST_TIMEOUT, details=details)
    if "PermissionError" in exc_name or "permission denied" in exc_str or "access is denied" in exc_str:
        return PersistenceError(ErrorCode.PERSIST_ACCESS_DENIED, details=details)
    if "404" in exc_str or "not found" in exc_str or "FileNotFoundError" in exc_name:
        return PersistenceError(ErrorCode.PERSIST_NOT_FOUND, details=details)
    if "ConnectionError" in exc_name or "connection" in exc_str or "unreachable" in exc_str or "unavailable" in exc_str:
        return PersistenceError(ErrorCode.PERSIST_UNAVAILABLE, details=details)

    return PersistenceError(
        ErrorCode.PERSIST_FAILED,
        details=details,
    )


def format_error_for_user(error: ThemeComposerError | Exception) -> str:
    """Format an error for display to the operator with actionable suggestions."""
    if isinstance(error, ThemeComposerError):
        parts = [error.message]
        if error.suggestion and error.suggestion != error.message:
            parts.append(f"\n\n{error.suggestion}")
        return "".join(parts)

    classified = classify_exception(error)
    return format_error_for_user(classified)
