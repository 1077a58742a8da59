"""Coverage pipeline for one harness run.

Order of operations:
1. Build the symbol registry from the ``declare -F`` dump
2. Correlate the trace log into per-file line and symbol hits
3. For every subject file: classify, expand heredocs, compute the result

A file that cannot be read is reported as errored; the remaining files are
still reported.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from critic.core.errors import CoverageError
from critic.core.logging import get_logger
from critic.coverage.classifier import classify_file
from critic.coverage.heredoc import expand_heredocs
from critic.coverage.models import CoverageReport, FileTrace, LineClassification
from critic.coverage.paths import normalize_path, normalize_paths
from critic.coverage.registry import SymbolRegistry
from critic.coverage.report import compute_result, errored_result
from critic.coverage.trace import correlate_trace, read_trace

log = get_logger("coverage.ops")


@dataclass(slots=True)
class CoverageRun:
    """Everything computed for one run, kept for rendering and export."""

    report: CoverageReport
    registry: SymbolRegistry
    classifications: dict[str, LineClassification] = field(default_factory=dict)
    traces: dict[str, FileTrace] = field(default_factory=dict)


def excluded_paths(
    harness_file: str | Path | None,
    spec_file: str | Path,
    extra: Iterable[str | Path] = (),
    *,
    base_dir: Path | None = None,
) -> frozenset[str]:
    """Normalized set of files that are never measured."""
    files: list[str | Path] = [spec_file, *extra]
    if harness_file is not None:
        files.append(harness_file)
    return normalize_paths(files, base_dir)


def collect_coverage(
    trace_records: Iterable[str],
    registry: SymbolRegistry,
    *,
    minimum_percent: int = 0,
    exclude_ignored_from_percent: bool = False,
    include: Iterable[str] = (),
    base_dir: Path | None = None,
) -> CoverageRun:
    """Compute coverage for every subject file of the registry.

    Args:
        trace_records: Raw trace log lines.
        registry: Registry built from the run's declared symbols.
        minimum_percent: Files below this are flagged, not raised.
        exclude_ignored_from_percent: Drop ignored regions from the denominator.
        include: Extra source files to report even without subject symbols.
        base_dir: Directory relative paths are resolved against.
    """
    traces = correlate_trace(trace_records, registry, base_dir=base_dir)
    report = CoverageReport(minimum_percent=minimum_percent)
    run = CoverageRun(report=report, registry=registry, traces=traces)

    files = set(registry.subject_files)
    files.update(normalize_path(p, base_dir) for p in include)
    files -= registry.excluded_files

    for path in sorted(files):
        try:
            classification = classify_file(Path(path))
        except OSError as e:
            error = CoverageError.source_unreadable(path, str(e))
            log.warning("source_unreadable", path=path, error=error.message)
            report.files[path] = errored_result(path, error.message)
            continue

        run.classifications[path] = classification
        trace = traces.get(path) or FileTrace(path=path)
        covered = expand_heredocs(classification.heredocs, trace.covered_lines)
        functions = registry.symbols_in(path)

        report.files[path] = compute_result(
            classification,
            covered,
            minimum_percent=minimum_percent,
            exclude_ignored_from_percent=exclude_ignored_from_percent,
            functions_found=len(functions),
            functions_hit=sum(1 for s in functions if s.name in trace.symbol_hits),
        )

    log.debug(
        "coverage_collected",
        files=len(report.files),
        errored=len(report.errored_files),
        below_minimum=len(report.below_minimum),
    )
    return run


def collect_from_artifacts(
    trace_file: Path,
    symbols_file: Path,
    *,
    spec_file: Path,
    harness_file: Path | None = None,
    exclude: Iterable[str] = (),
    include: Iterable[str] = (),
    minimum_percent: int = 0,
    exclude_ignored_from_percent: bool = False,
    base_dir: Path | None = None,
) -> CoverageRun:
    """Compute coverage from a trace log and a ``declare -F`` dump on disk.

    A missing symbol dump means the test process died before its exit hook
    ran; the registry is then empty and no file is reported.

    Raises:
        CoverageError: If the trace log cannot be read.
    """
    excluded = excluded_paths(harness_file, spec_file, exclude, base_dir=base_dir)

    if symbols_file.exists():
        declarations = symbols_file.read_text(errors="replace").splitlines()
    else:
        log.warning("symbols_missing", path=str(symbols_file))
        declarations = []

    registry = SymbolRegistry.from_declare_output(
        declarations, excluded_files=excluded, base_dir=base_dir
    )
    return collect_coverage(
        read_trace(trace_file),
        registry,
        minimum_percent=minimum_percent,
        exclude_ignored_from_percent=exclude_ignored_from_percent,
        include=include,
        base_dir=base_dir,
    )
