"""Traced execution of bash test files."""

from critic.harness.runner import RunResult, ShellRunner
from critic.harness.session import TraceSession, TraceSessionConfig

__all__ = [
    "RunResult",
    "ShellRunner",
    "TraceSession",
    "TraceSessionConfig",
]
