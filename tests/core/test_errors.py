"""Tests for error types and codes."""

import pytest

from critic.core.errors import (
    ConfigError,
    CoverageError,
    CriticError,
    ErrorCode,
    HarnessError,
    InternalError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.HARNESS_SHELL_NOT_FOUND, 6000),
            (ErrorCode.HARNESS_TIMEOUT, 6000),
            (ErrorCode.COVERAGE_SOURCE_UNREADABLE, 7000),
            (ErrorCode.COVERAGE_TRACE_UNREADABLE, 7000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        # Given
        error_code = code

        # When
        value = error_code.value

        # Then
        assert expected_range <= value < expected_range + 1000


class TestCriticError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = CriticError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        # Given
        error = CriticError(code=ErrorCode.INTERNAL_ERROR, message="Something broke")

        # When
        result = str(error)

        # Then
        assert result == "[9001] INTERNAL_ERROR: Something broke"

    def test_given_subclass_when_raised_then_caught_as_base(self) -> None:
        """Every domain error is a CriticError."""
        with pytest.raises(CriticError):
            raise HarnessError.shell_not_found("bash")


class TestConfigError:
    """ConfigError factory method tests."""

    @pytest.mark.parametrize(
        ("factory", "kwargs", "expected_code"),
        [
            (
                "parse_error",
                {"path": "/foo", "reason": "bad yaml"},
                ErrorCode.CONFIG_PARSE_ERROR,
            ),
            (
                "invalid_value",
                {"field": "coverage.minimum_percent", "value": 150, "reason": "too big"},
                ErrorCode.CONFIG_INVALID_VALUE,
            ),
        ],
    )
    def test_given_factory_when_called_then_correct_code(
        self, factory: str, kwargs: dict[str, object], expected_code: ErrorCode
    ) -> None:
        """Factory methods produce errors with correct error codes."""
        # Given
        factory_method = getattr(ConfigError, factory)

        # When
        error = factory_method(**kwargs)

        # Then
        assert error.code == expected_code

    def test_given_invalid_value_when_created_then_value_stringified(self) -> None:
        error = ConfigError.invalid_value("coverage.minimum_percent", 150, "too big")
        assert error.details["value"] == "150"
        assert "coverage.minimum_percent" in error.message


class TestHarnessError:
    """HarnessError factory method tests."""

    def test_given_timeout_when_created_then_retryable(self) -> None:
        # Given
        path = "/repo/test-lib.sh"

        # When
        error = HarnessError.timeout(path, 30.0)

        # Then
        assert error.code == ErrorCode.HARNESS_TIMEOUT
        assert error.retryable
        assert error.details == {"path": path, "timeout_sec": 30.0}

    def test_given_missing_spec_when_created_then_not_retryable(self) -> None:
        error = HarnessError.spec_not_found("/repo/missing.sh")
        assert error.code == ErrorCode.HARNESS_SPEC_NOT_FOUND
        assert not error.retryable
        assert "/repo/missing.sh" in error.message


class TestCoverageError:
    """CoverageError factory method tests."""

    def test_given_unreadable_source_when_created_then_reason_in_message(self) -> None:
        error = CoverageError.source_unreadable("/repo/lib.sh", "Permission denied")
        assert error.code == ErrorCode.COVERAGE_SOURCE_UNREADABLE
        assert error.message == "Cannot read source file /repo/lib.sh: Permission denied"


class TestInternalError:
    """InternalError tests."""

    def test_given_unexpected_error_when_created_then_includes_extras(self) -> None:
        """Unexpected error captures arbitrary extra details."""
        # Given
        message = "boom"
        extras = {"foo": "bar", "count": 42}

        # When
        error = InternalError.unexpected(message, **extras)

        # Then
        assert error.details == extras
        assert error.code == ErrorCode.INTERNAL_ERROR
