"""Template files written out by the harness.

NOTE: Tracing constants are filled in from config.constants so the bootstrap
and the trace parser agree on the record format.
"""

from pathlib import Path

from critic.config.constants import BASH_MIN_VERSION, EXIT_BASH_TOO_OLD, TRACE_FD, TRACE_PS4


def get_harness_script() -> str:
    """Return the bash bootstrap that traces and sources a test file."""
    template = (Path(__file__).parent / "harness.sh").read_text(encoding="utf-8")
    major, minor = BASH_MIN_VERSION
    substitutions = {
        "@BASH_MIN_MAJOR@": str(major),
        "@BASH_MIN_MINOR@": str(minor),
        "@EXIT_BASH_TOO_OLD@": str(EXIT_BASH_TOO_OLD),
        "@TRACE_FD@": str(TRACE_FD),
        "@TRACE_PS4@": TRACE_PS4,
    }
    for token, value in substitutions.items():
        template = template.replace(token, value)
    return template


__all__ = ["get_harness_script"]
