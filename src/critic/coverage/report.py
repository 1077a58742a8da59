"""Coverage computation and structured report generation.

Per file::

    measurable  = all lines - blank/comment - structural
    denominator = measurable | ignored
    covered     = covered_lines & measurable
    percent     = len(covered) * 100 // len(denominator)   (100 when empty)
    uncovered   = measurable - ignored - covered

Ignored regions stay in the denominator, so they lower the percentage and
are only hidden from the uncovered listing. With
``exclude_ignored_from_percent`` the denominator becomes
``measurable - ignored`` and covered ignored lines stop counting.

Output schema for build_summary:
{
    "summary": {
        "total_files": int,
        "errored_files": int,
        "files_below_minimum": int,
        "all_met_minimum": bool,
        "minimum_percent": int,
        "total_lines": int,
        "covered_lines": int,
        "line_coverage_percent": int
    },
    "files": [
        {
            "path": str,
            "total_lines": int,
            "loc": int,
            "covered_lines": int,
            "ignored_lines": int,
            "coverage_percent": int,
            "meets_minimum": bool,
            "uncovered_lines": [int, ...],
            "functions_found": int,
            "functions_hit": int,
            "error": str  # only when the file could not be read
        },
        ...
    ]
}
"""

from collections.abc import Iterable
from typing import Any

from critic.coverage.models import CoverageReport, CoverageResult, LineClassification


def coverage_percent(hit: int, found: int) -> int:
    """Integer percentage, 100 for an empty denominator."""
    if found == 0:
        return 100
    return hit * 100 // found


def compute_result(
    classification: LineClassification,
    covered_lines: Iterable[int],
    *,
    minimum_percent: int = 0,
    exclude_ignored_from_percent: bool = False,
    functions_found: int = 0,
    functions_hit: int = 0,
) -> CoverageResult:
    """Combine a file's classification with its (expanded) covered lines."""
    covered_all = frozenset(covered_lines)
    measurable = classification.measurable
    ignored = classification.ignored

    covered = covered_all & measurable
    if exclude_ignored_from_percent:
        denominator = measurable - ignored
        covered = covered - ignored
    else:
        denominator = measurable | ignored

    percent = coverage_percent(len(covered), len(denominator))
    return CoverageResult(
        path=classification.path,
        total_lines=classification.total_lines,
        loc=classification.loc,
        measurable_lines=measurable,
        ignored_lines=ignored,
        covered_lines=covered_all,
        uncovered_lines=tuple(sorted(measurable - ignored - covered)),
        lines_found=len(denominator),
        lines_hit=len(covered),
        percent=percent,
        meets_minimum=percent >= minimum_percent,
        functions_found=functions_found,
        functions_hit=functions_hit,
    )


def errored_result(path: str, reason: str) -> CoverageResult:
    """Result for a file that could not be read."""
    return CoverageResult(path=path, percent=0, meets_minimum=False, error=reason)


def compute_file_stats(report: CoverageReport) -> list[dict[str, Any]]:
    """Per-file statistics, in report order."""
    file_stats = []
    for path, result in report.files.items():
        stats: dict[str, Any] = {"path": path}
        if not result.ok:
            stats["error"] = result.error
            file_stats.append(stats)
            continue
        stats.update(
            {
                "total_lines": result.total_lines,
                "loc": result.loc,
                "covered_lines": result.lines_hit,
                "ignored_lines": len(result.ignored_lines),
                "coverage_percent": result.percent,
                "meets_minimum": result.meets_minimum,
                "uncovered_lines": list(result.uncovered_lines),
                "functions_found": result.functions_found,
                "functions_hit": result.functions_hit,
            }
        )
        file_stats.append(stats)
    return file_stats


def build_summary(report: CoverageReport, *, include_files: bool = True) -> dict[str, Any]:
    """Build a structured coverage summary suitable for JSON serialization."""
    measured = [r for r in report.files.values() if r.ok]
    total_lines = sum(r.lines_found for r in measured)
    covered_lines = sum(r.lines_hit for r in measured)

    result: dict[str, Any] = {
        "summary": {
            "total_files": len(report.files),
            "errored_files": len(report.errored_files),
            "files_below_minimum": len(report.below_minimum),
            "all_met_minimum": report.all_met_minimum,
            "minimum_percent": report.minimum_percent,
            "total_lines": total_lines,
            "covered_lines": covered_lines,
            "line_coverage_percent": coverage_percent(covered_lines, total_lines),
        }
    }
    if include_files:
        result["files"] = compute_file_stats(report)
    return result


def build_text_summary(report: CoverageReport) -> str:
    """One-line summary for display contexts."""
    measured = [r for r in report.files.values() if r.ok]
    if not measured:
        return "No coverage data"
    total_lines = sum(r.lines_found for r in measured)
    covered_lines = sum(r.lines_hit for r in measured)
    percent = coverage_percent(covered_lines, total_lines)
    return f"Coverage: {percent}% ({covered_lines}/{total_lines} lines)"
