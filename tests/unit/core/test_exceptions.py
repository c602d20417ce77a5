"""Unit tests for src/core/exceptions.py."""

import pytest

from src.core.exceptions import (
    CatalogError,
    ErrorCode,
    MethodNotAllowedError,
    NotFoundError,
    Severity,
    StoreUnavailableError,
    ValidationError,
)


@pytest.mark.unit
class TestCatalogError:
    """Tests for the base exception."""

    def test_accepts_enum_or_string_code(self) -> None:
        """Verify error codes are normalized to strings."""
        assert CatalogError(ErrorCode.NOT_FOUND, "x").error_code == "NOT_FOUND"
        assert CatalogError("CUSTOM", "x").error_code == "CUSTOM"

    def test_defaults(self) -> None:
        """Verify default severity, context and status."""
        error = CatalogError(ErrorCode.INTERNAL_ERROR, "boom")

        assert error.severity is Severity.MEDIUM
        assert error.context == {}
        assert error.cause is None
        assert error.status_code == 500
        assert error.is_expected is True

    def test_severity_levels(self) -> None:
        """Verify every severity maps to a logging policy."""
        assert [s.name for s in Severity] == ["LOW", "MEDIUM", "HIGH"]

    def test_cause_is_chained(self) -> None:
        """Verify the original exception becomes __cause__."""
        cause = OSError("disk")

        error = CatalogError(ErrorCode.INTERNAL_ERROR, "boom", cause=cause)

        assert error.__cause__ is cause

    def test_str_and_repr(self) -> None:
        """Verify string forms include code and message."""
        error = CatalogError(
            ErrorCode.NOT_FOUND, "missing", Severity.LOW, context={"id": 3}
        )

        assert str(error) == "[NOT_FOUND] missing"
        assert repr(error) == (
            "CatalogError(error_code='NOT_FOUND', message='missing', "
            "severity=LOW, context={'id': 3})"
        )


@pytest.mark.unit
class TestSpecializedErrors:
    """Tests for the HTTP-facing subclasses."""

    @pytest.mark.parametrize(
        ("error", "status_code", "error_code"),
        [
            (ValidationError("bad"), 400, "VALIDATION_ERROR"),
            (NotFoundError("gone"), 404, "NOT_FOUND"),
            (MethodNotAllowedError(), 405, "METHOD_NOT_ALLOWED"),
            (StoreUnavailableError("all"), 500, "STORE_UNAVAILABLE"),
        ],
    )
    def test_status_and_code(
        self, error: CatalogError, status_code: int, error_code: str
    ) -> None:
        """Verify each subclass maps to its HTTP status."""
        assert error.status_code == status_code
        assert error.error_code == error_code

    def test_client_errors_are_expected(self) -> None:
        """Verify client errors are low severity."""
        assert ValidationError("bad").is_expected
        assert NotFoundError("gone").is_expected
        assert MethodNotAllowedError().message == "Method not allowed"

    def test_store_error_hides_cause(self) -> None:
        """Verify store failures carry a generic message and keep the cause."""
        cause = RuntimeError("connection refused to 10.0.0.5")

        error = StoreUnavailableError("filter", cause=cause)

        assert error.message == "Internal server error"
        assert "10.0.0.5" not in error.message
        assert error.cause is cause
        assert error.operation == "filter"
        assert error.context == {"operation": "filter"}
        assert error.severity is Severity.HIGH
        assert error.is_expected is False
