"""critic error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 6xxx: Harness
- 7xxx: Coverage
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Harness (6xxx)
    HARNESS_SHELL_NOT_FOUND = 6001
    HARNESS_SPEC_NOT_FOUND = 6002
    HARNESS_TIMEOUT = 6003

    # Coverage (7xxx)
    COVERAGE_SOURCE_UNREADABLE = 7001
    COVERAGE_TRACE_UNREADABLE = 7002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class CriticError(Exception):
    """Base error with structured context for CLI and JSON output."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CriticError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class HarnessError(CriticError):
    """Errors launching or supervising the traced shell process."""

    @classmethod
    def shell_not_found(cls, shell: str) -> "HarnessError":
        return cls(
            code=ErrorCode.HARNESS_SHELL_NOT_FOUND,
            message=f"Shell executable not found: {shell}",
            details={"shell": shell},
        )

    @classmethod
    def spec_not_found(cls, path: str) -> "HarnessError":
        return cls(
            code=ErrorCode.HARNESS_SPEC_NOT_FOUND,
            message=f"Test file not found: {path}",
            details={"path": path},
        )

    @classmethod
    def timeout(cls, path: str, timeout_sec: float) -> "HarnessError":
        return cls(
            code=ErrorCode.HARNESS_TIMEOUT,
            message=f"Test file {path} did not finish within {timeout_sec}s",
            retryable=True,
            details={"path": path, "timeout_sec": timeout_sec},
        )


class CoverageError(CriticError):
    """Coverage collection errors.

    Per-file failures are recorded on the file's result rather than raised;
    these are raised only where a whole run cannot proceed.
    """

    @classmethod
    def source_unreadable(cls, path: str, reason: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_SOURCE_UNREADABLE,
            message=f"Cannot read source file {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def trace_unreadable(cls, path: str, reason: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_TRACE_UNREADABLE,
            message=f"Cannot read trace file {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class InternalError(CriticError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
