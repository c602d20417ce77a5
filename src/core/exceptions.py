"""Structured exception hierarchy for consistent error handling.

Key components:
- **ErrorCode enum**: Standardized error identifiers
- **Severity enum**: Error classification for log levels
- **CatalogError**: Base exception carrying code, message and severity
- **Specialized exceptions**: One subclass per HTTP error family the API emits

Each subclass declares the HTTP status it maps to, so the API boundary can
render any ``CatalogError`` without a lookup table.
"""

from enum import Enum
from typing import Any, ClassVar


class ErrorCode(Enum):
    """Standardized error codes for the catalog API."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred in the system."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    """The request was malformed (for example a non-numeric identifier)."""

    NOT_FOUND = "NOT_FOUND"
    """The requested route, resource or category does not exist."""

    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    """The HTTP method is not supported by this read-only API."""

    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    """The resource store failed while serving a read."""


class Severity(Enum):
    """Severity levels used to choose how loudly an error is logged."""

    LOW = "LOW"
    """Expected client mistakes, logged at info level."""

    MEDIUM = "MEDIUM"
    """Unusual but recoverable conditions."""

    HIGH = "HIGH"
    """Failures of a collaborator such as the resource store, or of the request
    handling itself."""


class CatalogError(Exception):
    """Base exception class for all catalog API exceptions.

    Args:
        error_code: Unique identifier for the error type (string or ErrorCode enum)
        message: Human-readable error message, safe to return to clients
        severity: Severity level of the error (defaults to MEDIUM)
        context: Additional context information, logged but never returned
        cause: The original exception that caused this error
    """

    status_code: ClassVar[int] = 500

    def __init__(
        self,
        error_code: str | ErrorCode,
        message: str,
        severity: Severity = Severity.MEDIUM,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )
        self.message = message
        self.severity = severity
        self.context = context or {}
        self.cause = cause

        super().__init__(message)
        if cause:
            self.__cause__ = cause

    @property
    def is_expected(self) -> bool:
        """Whether this error is part of normal operation (LOW or MEDIUM)."""
        return self.severity in (Severity.LOW, Severity.MEDIUM)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        context_str = f", context={self.context}" if self.context else ""
        return (
            f"{class_name}(error_code='{self.error_code}', "
            f"message='{self.message}', severity={self.severity.value}{context_str})"
        )


class ValidationError(CatalogError):
    """Raised when a request is malformed."""

    status_code: ClassVar[int] = 400

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.VALIDATION_ERROR,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.LOW, context, cause)


class NotFoundError(CatalogError):
    """Raised when a route, resource or category cannot be found."""

    status_code: ClassVar[int] = 404

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.NOT_FOUND,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.LOW, context, cause)


class MethodNotAllowedError(CatalogError):
    """Raised for any method other than GET or OPTIONS."""

    status_code: ClassVar[int] = 405

    def __init__(
        self,
        message: str = "Method not allowed",
        error_code: str | ErrorCode = ErrorCode.METHOD_NOT_ALLOWED,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.LOW, context)


class StoreUnavailableError(CatalogError):
    """Raised when a resource store operation fails.

    The client only ever sees the generic message; ``cause`` keeps the
    original error for the logs.
    """

    status_code: ClassVar[int] = 500

    def __init__(
        self,
        operation: str,
        cause: Exception | None = None,
        message: str = "Internal server error",
    ) -> None:
        super().__init__(
            ErrorCode.STORE_UNAVAILABLE,
            message,
            Severity.HIGH,
            {"operation": operation},
            cause,
        )
        self.operation = operation
