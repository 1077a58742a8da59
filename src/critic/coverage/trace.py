"""xtrace log parsing and correlation.

The harness sets::

    PS4='(${BASH_SOURCE}:${LINENO}):${FUNCNAME[0]:+${FUNCNAME[0]}():}'

so every traced command is written as::

    (<file>:<line>):[<symbol>():]<raw-args>

Bash repeats the first character of PS4 once per level of indirection
(subshells, command substitution), hence one or more leading ``(``.
Anything else in the log (multi-line command continuations, interpreter
diagnostics) is skipped.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from critic.core.errors import CoverageError
from critic.core.logging import get_logger
from critic.coverage.models import FileTrace, TraceEvent
from critic.coverage.paths import normalize_path
from critic.coverage.registry import SymbolRegistry

log = get_logger("coverage.trace")

_TRACE_RECORD = re.compile(
    r"^\(+(?P<file>.+?):(?P<line>\d+)\):(?:(?P<symbol>[^\s()]+?)\(\):)?(?P<args>.*)$"
)


def parse_trace_line(record: str, base_dir: Path | None = None) -> TraceEvent | None:
    """Parse one trace record, or return None if it is not one."""
    match = _TRACE_RECORD.match(record.rstrip("\r\n"))
    if match is None:
        return None
    return TraceEvent(
        file=normalize_path(match.group("file"), base_dir),
        line=int(match.group("line")),
        symbol=match.group("symbol"),
        args=match.group("args"),
    )


def iter_trace_events(
    records: Iterable[str], base_dir: Path | None = None
) -> Iterator[TraceEvent]:
    """Yield events for every well-formed record, skipping the rest."""
    skipped = 0
    for record in records:
        event = parse_trace_line(record, base_dir)
        if event is None:
            skipped += 1
            continue
        yield event
    if skipped:
        log.debug("trace_records_skipped", count=skipped)


def correlate_trace(
    records: Iterable[str],
    registry: SymbolRegistry,
    *,
    excluded_files: Iterable[str] | None = None,
    base_dir: Path | None = None,
) -> dict[str, FileTrace]:
    """Group trace events by file, dropping excluded files.

    Args:
        records: Raw trace log lines, in emission order.
        registry: Symbol registry deciding which symbol names are subjects.
        excluded_files: Normalized paths whose events are discarded outright.
            Defaults to the registry's excluded files.
        base_dir: Directory relative trace paths are resolved against.

    Returns:
        Mapping of file path to its line-hit multiset and subject symbol hits.
    """
    excluded = registry.excluded_files if excluded_files is None else frozenset(excluded_files)
    traces: dict[str, FileTrace] = {}

    for event in iter_trace_events(records, base_dir):
        if event.file in excluded:
            continue
        trace = traces.get(event.file)
        if trace is None:
            trace = traces[event.file] = FileTrace(path=event.file)
        trace.line_hits[event.line] += 1
        if event.symbol is not None and registry.is_subject(event.symbol):
            trace.symbol_hits.add(event.symbol)

    log.debug("trace_correlated", files=len(traces))
    return traces


def read_trace(path: Path) -> list[str]:
    """Read a whole trace log.

    Raises:
        CoverageError: If the log cannot be read.
    """
    try:
        return path.read_text(errors="replace").splitlines()
    except OSError as e:
        raise CoverageError.trace_unreadable(str(path), str(e)) from e
