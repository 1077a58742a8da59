"""Tests for templates module.

Tests the generated harness bootstrap.
"""

from __future__ import annotations

import re

from critic.config.constants import EXIT_BASH_TOO_OLD, TRACE_FD, TRACE_PS4
from critic.templates import get_harness_script


class TestGetHarnessScript:
    """Tests for get_harness_script function."""

    def test_is_bash_script(self) -> None:
        assert get_harness_script().startswith("#!/usr/bin/env bash\n")

    def test_placeholders_are_filled(self) -> None:
        assert re.search(r"@[A-Z_]+@", get_harness_script()) is None

    def test_uses_trace_protocol(self) -> None:
        """Bootstrap writes xtrace to the trace fd with the parser's PS4."""
        script = get_harness_script()
        assert f"exec {TRACE_FD}>> \"$CRITIC_TRACE_FILE\"" in script
        assert f"export BASH_XTRACEFD={TRACE_FD}" in script
        assert f"export PS4='{TRACE_PS4}'" in script

    def test_version_gate(self) -> None:
        script = get_harness_script()
        assert "critic needs bash version >= 4.1" in script
        assert f"exit {EXIT_BASH_TOO_OLD}" in script

    def test_dumps_symbols_with_extdebug(self) -> None:
        script = get_harness_script()
        assert "shopt -s extdebug" in script
        assert 'declare -F "$__critic_fn"' in script
        assert "trap __critic_finish EXIT" in script

    def test_sources_test_file_last(self) -> None:
        lines = [line for line in get_harness_script().splitlines() if line.strip()]
        assert lines[-1] == 'source "$__critic_spec" "$@"'
