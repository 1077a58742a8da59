"""Configuration constants.

Values that are not user-configurable: file naming, the trace record
format, and shell requirements. For configurable values, see models.py.
"""

# =============================================================================
# Files
# =============================================================================

PROJECT_CONFIG_NAME = ".critic.yaml"
"""Project-level config file, looked up in the project root."""

TRACE_FILE_PREFIX = ".critic-trace-"
"""Trace files are named ``.critic-trace-<epoch>.log``."""

SYMBOLS_FILE_PREFIX = ".critic-symbols-"
"""Symbol dumps are named ``.critic-symbols-<epoch>.log``."""

HARNESS_SCRIPT_NAME = "critic-harness.sh"
"""Name of the generated bootstrap script that sources the test file."""

# =============================================================================
# Tracing protocol
# =============================================================================

TRACE_FD = 13
"""File descriptor the bootstrap opens on the trace file (BASH_XTRACEFD)."""

TRACE_PS4 = "(${BASH_SOURCE}:${LINENO}):${FUNCNAME[0]:+${FUNCNAME[0]}():}"
"""PS4 prompt producing ``(<file>:<line>):[<symbol>():]<args>`` records."""

BASH_MIN_VERSION = (4, 1)
"""BASH_XTRACEFD needs bash 4.1."""

EXIT_BASH_TOO_OLD = 99
"""Exit status of the bootstrap when bash is older than BASH_MIN_VERSION."""
