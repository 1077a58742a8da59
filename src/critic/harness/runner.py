"""Runs a test file under the traced bash bootstrap."""

from __future__ import annotations

import os
import shutil
import subprocess
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from critic.config.models import HarnessConfig
from critic.core.errors import HarnessError
from critic.core.logging import get_logger
from critic.harness.session import TraceSession

log = get_logger("harness.runner")

# Inherited values that would redirect or disable tracing in the child
_STRIPPED_ENV = ("BASH_XTRACEFD", "PS4", "SHELLOPTS", "BASH_ENV", "ENV")


@dataclass(frozen=True, slots=True)
class RunResult:
    """Outcome of one traced test run."""

    spec_file: Path
    exit_code: int
    duration_sec: float
    traced: bool
    stdout: str | None = None
    stderr: str | None = None


class ShellRunner:
    """Launches bash on the session's bootstrap with the test file."""

    def __init__(self, config: HarnessConfig | None = None, *, cwd: Path | None = None) -> None:
        self._config = config or HarnessConfig()
        self._cwd = cwd or Path.cwd()

    @property
    def cwd(self) -> Path:
        return self._cwd

    def resolve_shell(self) -> str:
        """Absolute path of the configured shell.

        Raises:
            HarnessError: If the shell is not on PATH.
        """
        shell = shutil.which(self._config.shell)
        if shell is None:
            raise HarnessError.shell_not_found(self._config.shell)
        return shell

    def prepare_environment(
        self,
        session: TraceSession,
        *,
        trace: bool = True,
        base_env: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        """Environment for the child: tracing switches plus the run id."""
        env = dict(base_env) if base_env is not None else dict(os.environ)
        for key in _STRIPPED_ENV:
            env.pop(key, None)
        env.pop("CRITIC_TRACE_FILE", None)
        env.pop("CRITIC_SYMBOLS_FILE", None)

        env["CRITIC_RUN_ID"] = session.run_id
        if trace:
            env["CRITIC_TRACE_FILE"] = str(session.trace_file)
            env["CRITIC_SYMBOLS_FILE"] = str(session.symbols_file)
        return env

    def run(
        self,
        session: TraceSession,
        spec_file: Path,
        args: Sequence[str] = (),
        *,
        trace: bool = True,
        capture_output: bool = False,
    ) -> RunResult:
        """Run ``spec_file`` to completion.

        Test output goes straight to the terminal unless ``capture_output``.

        Raises:
            HarnessError: If the shell or test file is missing, or on timeout.
        """
        if not spec_file.is_file():
            raise HarnessError.spec_not_found(str(spec_file))
        shell = self.resolve_shell()

        cmd = [shell, str(session.harness_file), str(spec_file), *args]
        env = self.prepare_environment(session, trace=trace)
        log.debug("run_start", cmd=cmd, cwd=str(self._cwd), traced=trace)

        start = time.perf_counter()
        try:
            completed = subprocess.run(
                cmd,
                cwd=self._cwd,
                env=env,
                capture_output=capture_output,
                text=True if capture_output else None,
                timeout=self._config.timeout_sec,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise HarnessError.timeout(str(spec_file), self._config.timeout_sec or 0) from e
        elapsed = time.perf_counter() - start

        log.debug("run_done", exit_code=completed.returncode, elapsed_s=elapsed)
        return RunResult(
            spec_file=spec_file,
            exit_code=completed.returncode,
            duration_sec=elapsed,
            traced=trace,
            stdout=completed.stdout if capture_output else None,
            stderr=completed.stderr if capture_output else None,
        )
