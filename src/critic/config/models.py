"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (CRITIC__SECTION__KEY)
3. Legacy environment variables (CRITIC_COVERAGE_DISABLE, CRITIC_COVERAGE_MIN_PERCENT, DEBUG)
4. Project YAML (.critic.yaml)
5. Global YAML (~/.config/critic/config.yaml)
6. Built-in defaults (this file)

Environment Variable Format:
    CRITIC__<SECTION>__<KEY>=<VALUE>

Examples:
    CRITIC__COVERAGE__MINIMUM_PERCENT=80
    CRITIC__COVERAGE__ENABLED=false
    CRITIC__LOGGING__LEVEL=DEBUG
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        CRITIC__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. Test output shares the terminal, so keep this quiet.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class CoverageConfig(BaseModel):
    """Coverage engine configuration.

    Env vars:
        CRITIC__COVERAGE__ENABLED: Trace the test run and report coverage
        CRITIC__COVERAGE__MINIMUM_PERCENT: Per-file minimum coverage (0-100)
        CRITIC__COVERAGE__RETAIN_TRACE_ON_DEBUG: Keep trace artifacts in debug mode
    """

    enabled: bool = Field(
        default=True,
        description="Trace the test run and print a coverage report afterwards.",
    )
    minimum_percent: int = Field(
        default=0,
        description="Files below this percentage are reported as failing.",
    )
    retain_trace_on_debug: bool = Field(
        default=False,
        description="Keep the trace and symbol files after reporting when debug is enabled.",
    )
    exclude_ignored_from_percent: bool = Field(
        default=False,
        description="Drop '# critic ignore' regions from the percentage denominator. "
        "By default ignored lines stay in the denominator and are only hidden "
        "from the uncovered-lines listing.",
    )
    fail_under_minimum: bool = Field(
        default=False,
        description="Exit non-zero when a passing run leaves any file below the minimum.",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Extra files that are never measured (e.g. assertion libraries).",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Extra source files to report even when they declare no functions.",
    )

    @field_validator("minimum_percent")
    @classmethod
    def validate_minimum_percent(cls, v: int) -> int:
        if not (0 <= v <= 100):
            raise ValueError(f"Minimum percent must be 0-100, got {v}")
        return v


class HarnessConfig(BaseModel):
    """Traced shell process configuration.

    Env vars:
        CRITIC__HARNESS__SHELL: Shell executable (must be bash >= 4.1)
        CRITIC__HARNESS__TIMEOUT_SEC: Kill the test run after this many seconds
    """

    shell: str = Field(
        default="bash",
        description="Shell used to run test files. Tracing relies on BASH_XTRACEFD.",
    )
    timeout_sec: float | None = Field(
        default=None,
        description="Optional wall-clock limit for a test file. None = no limit.",
    )


class DebugConfig(BaseModel):
    """Debug configuration.

    Env vars:
        CRITIC__DEBUG__ENABLED: Print per-file debug details in the report
    """

    enabled: bool = Field(
        default=False,
        description="Print line classification details under each file in the report.",
    )


class CriticConfig(BaseModel):
    """Root configuration for critic."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    coverage: CoverageConfig = Field(default_factory=CoverageConfig)
    harness: HarnessConfig = Field(default_factory=HarnessConfig)
    debug: DebugConfig = Field(default_factory=DebugConfig)

    @property
    def retain_trace(self) -> bool:
        """Whether trace artifacts survive the run."""
        return self.debug.enabled and self.coverage.retain_trace_on_debug
