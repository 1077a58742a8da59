"""Trace artifacts of one harness run.

A TraceSession owns three files for the lifetime of a run:
- the generated bootstrap script (the "harness file", never measured)
- the xtrace log bash writes through BASH_XTRACEFD
- the ``declare -F`` dump written by the bootstrap's exit hook

All three are removed when the session exits, on every exit path, unless
the session was asked to retain them.
"""

from __future__ import annotations

import shutil
import tempfile
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType

from critic.config.constants import HARNESS_SCRIPT_NAME, SYMBOLS_FILE_PREFIX, TRACE_FILE_PREFIX
from critic.core.errors import InternalError
from critic.core.logging import clear_run_id, get_logger, set_run_id
from critic.templates import get_harness_script

log = get_logger("harness.session")


@dataclass
class TraceSessionConfig:
    """Configuration for a trace session."""

    # Directory for artifacts; a private temp dir is created when None
    work_dir: Path | None = None
    retain: bool = False
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])


class TraceSession:
    """Scoped owner of the trace log, symbol dump and bootstrap script."""

    def __init__(self, config: TraceSessionConfig | None = None) -> None:
        self._config = config or TraceSessionConfig()
        self._work_dir: Path | None = None
        self._owns_work_dir = False
        stamp = int(time.time())
        self._trace_name = f"{TRACE_FILE_PREFIX}{stamp}.log"
        self._symbols_name = f"{SYMBOLS_FILE_PREFIX}{stamp}.log"

    @property
    def config(self) -> TraceSessionConfig:
        return self._config

    @property
    def run_id(self) -> str:
        return self._config.run_id

    @property
    def work_dir(self) -> Path:
        if self._work_dir is None:
            raise InternalError.unexpected("trace session is not open", run_id=self.run_id)
        return self._work_dir

    @property
    def trace_file(self) -> Path:
        return self.work_dir / self._trace_name

    @property
    def symbols_file(self) -> Path:
        return self.work_dir / self._symbols_name

    @property
    def harness_file(self) -> Path:
        return self.work_dir / HARNESS_SCRIPT_NAME

    def open(self) -> None:
        """Create the work directory, bootstrap script and empty trace log."""
        if self._config.work_dir is None:
            self._work_dir = Path(tempfile.mkdtemp(prefix="critic-"))
            self._owns_work_dir = True
        else:
            self._work_dir = self._config.work_dir.resolve()
            self._work_dir.mkdir(parents=True, exist_ok=True)

        try:
            self.harness_file.write_text(get_harness_script(), encoding="utf-8")
            self.trace_file.touch()
        except OSError:
            self.cleanup()
            raise
        set_run_id(self.run_id)
        log.debug("session_open", work_dir=str(self._work_dir), trace=str(self.trace_file))

    def cleanup(self) -> None:
        """Remove the session's artifacts unless retained."""
        if self._work_dir is None:
            return
        if self._config.retain:
            log.info("trace_retained", trace=str(self.trace_file), symbols=str(self.symbols_file))
        elif self._owns_work_dir:
            shutil.rmtree(self._work_dir, ignore_errors=True)
        else:
            for path in (self.trace_file, self.symbols_file, self.harness_file):
                path.unlink(missing_ok=True)
        log.debug("session_closed", retained=self._config.retain)
        clear_run_id()
        self._work_dir = None

    def __enter__(self) -> TraceSession:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cleanup()
