"""Statement coverage for traced bash test runs.

This package provides:
- Static line classification of shell sources
- A declared-symbol registry separating code under test from harness code
- xtrace log correlation into per-file line hits
- Heredoc expansion and per-file coverage results
- Rich, JSON and LCOV output

Usage:
    from critic.coverage import collect_from_artifacts, build_summary

    run = collect_from_artifacts(trace_file, symbols_file, spec_file=spec)
    summary = build_summary(run.report)
"""

from critic.coverage.classifier import (
    blank_or_comment_lines,
    classify_file,
    classify_text,
    find_heredocs,
    ignored_lines,
    structural_lines,
)
from critic.coverage.heredoc import expand_heredocs
from critic.coverage.lcov import to_lcov, write_lcov
from critic.coverage.models import (
    CoverageReport,
    CoverageResult,
    FileTrace,
    Heredoc,
    LineClassification,
    Symbol,
    TraceEvent,
)
from critic.coverage.ops import (
    CoverageRun,
    collect_coverage,
    collect_from_artifacts,
    excluded_paths,
)
from critic.coverage.registry import SymbolRegistry, parse_declare_line
from critic.coverage.render import render_run
from critic.coverage.report import (
    build_summary,
    build_text_summary,
    compute_result,
    coverage_percent,
)
from critic.coverage.trace import correlate_trace, parse_trace_line, read_trace

__all__ = [
    # Models
    "CoverageReport",
    "CoverageResult",
    "FileTrace",
    "Heredoc",
    "LineClassification",
    "Symbol",
    "TraceEvent",
    # Classifier
    "blank_or_comment_lines",
    "classify_file",
    "classify_text",
    "find_heredocs",
    "ignored_lines",
    "structural_lines",
    # Registry
    "SymbolRegistry",
    "parse_declare_line",
    # Trace
    "correlate_trace",
    "parse_trace_line",
    "read_trace",
    # Heredoc
    "expand_heredocs",
    # Report
    "build_summary",
    "build_text_summary",
    "compute_result",
    "coverage_percent",
    "render_run",
    "to_lcov",
    "write_lcov",
    # Ops
    "CoverageRun",
    "collect_coverage",
    "collect_from_artifacts",
    "excluded_paths",
]
