"""Core module exports."""

from critic.core.errors import (
    ConfigError,
    CoverageError,
    CriticError,
    ErrorCode,
    HarnessError,
    InternalError,
)
from critic.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from critic.core.progress import pluralize, spinner, status

__all__ = [
    # Errors
    "ConfigError",
    "CoverageError",
    "CriticError",
    "ErrorCode",
    "HarnessError",
    "InternalError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "pluralize",
    "spinner",
    "status",
]
