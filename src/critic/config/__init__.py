"""Config module exports."""

from critic.config.loader import load_config
from critic.config.models import (
    CoverageConfig,
    CriticConfig,
    DebugConfig,
    HarnessConfig,
    LoggingConfig,
)

__all__ = [
    "load_config",
    "CoverageConfig",
    "CriticConfig",
    "DebugConfig",
    "HarnessConfig",
    "LoggingConfig",
]
