"""Tests for coverage computation and structured reports.

Covers:
- coverage_percent()
- compute_result() with union and subtraction denominators
- errored_result()
- CoverageReport properties
- build_summary() / build_text_summary()
"""

import json

import pytest

from critic.coverage.classifier import classify_text
from critic.coverage.models import CoverageReport, CoverageResult
from critic.coverage.report import (
    build_summary,
    build_text_summary,
    compute_result,
    coverage_percent,
    errored_result,
)

# Lines 1-2 blank/comment, 3-10 code
TEN_LINES = "#!/bin/bash\n\n" + "".join(f"echo {n}\n" for n in range(3, 11))

# Ignore region on lines 5-7, markers trailing code
WITH_IGNORE = """\
#!/bin/bash

echo a
echo b
echo c  # critic ignore
echo d
echo e  # critic /ignore
echo f
"""


class TestCoveragePercent:
    """Tests for coverage_percent."""

    @pytest.mark.parametrize(
        ("hit", "found", "expected"),
        [(3, 8, 37), (0, 5, 0), (5, 5, 100), (2, 3, 66), (0, 0, 100)],
    )
    def test_integer_division(self, hit: int, found: int, expected: int) -> None:
        assert coverage_percent(hit, found) == expected


class TestComputeResult:
    """Tests for compute_result."""

    def test_basic_percentage(self) -> None:
        """Given 8 measurable lines with 3 covered, coverage is 37%."""
        c = classify_text(TEN_LINES, path="/repo/lib.sh")

        result = compute_result(c, {3, 4, 5})

        assert result.path == "/repo/lib.sh"
        assert result.lines_found == 8
        assert result.lines_hit == 3
        assert result.percent == 37
        assert result.uncovered_lines == (6, 7, 8, 9, 10)
        assert result.loc == 8
        assert result.total_lines == 10

    def test_ignored_lines_stay_in_denominator(self) -> None:
        c = classify_text(WITH_IGNORE)
        assert c.measurable == {3, 4, 5, 6, 7, 8}
        assert c.ignored == {5, 6, 7}

        result = compute_result(c, {3})

        assert result.lines_found == 6
        assert result.percent == 16
        assert result.uncovered_lines == (4, 8)

    def test_exclude_ignored_from_percent(self) -> None:
        c = classify_text(WITH_IGNORE)

        result = compute_result(c, {3, 6}, exclude_ignored_from_percent=True)

        assert result.lines_found == 3
        assert result.lines_hit == 1
        assert result.percent == 33
        assert result.uncovered_lines == (4, 8)

    def test_covered_ignored_lines_count_by_default(self) -> None:
        c = classify_text(WITH_IGNORE)
        result = compute_result(c, {3, 6})
        assert result.lines_hit == 2
        assert result.percent == 33

    def test_non_measurable_hits_are_not_counted(self) -> None:
        """Trace hits on comments or structural lines never raise the percentage."""
        c = classify_text("greet() {\n  echo hi\n}\n")

        result = compute_result(c, {1, 2, 3})

        assert result.lines_found == 1
        assert result.lines_hit == 1
        assert result.percent == 100
        assert result.covered_lines == {1, 2, 3}

    def test_minimum_percent(self) -> None:
        c = classify_text(TEN_LINES)
        assert not compute_result(c, {3, 4, 5}, minimum_percent=50).meets_minimum
        assert compute_result(c, {3, 4, 5}, minimum_percent=37).meets_minimum

    def test_empty_file_is_fully_covered(self) -> None:
        result = compute_result(classify_text(""), set(), minimum_percent=100)
        assert result.percent == 100
        assert result.meets_minimum
        assert result.uncovered_lines == ()

    def test_comment_only_file_is_fully_covered(self) -> None:
        result = compute_result(classify_text("# nothing\n\n"), set())
        assert result.percent == 100

    def test_function_counts(self) -> None:
        result = compute_result(
            classify_text(TEN_LINES), set(), functions_found=3, functions_hit=1
        )
        assert (result.functions_found, result.functions_hit) == (3, 1)


class TestErroredResult:
    """Tests for errored_result."""

    def test_errored_result(self) -> None:
        result = errored_result("/repo/gone.sh", "Cannot read source file")
        assert not result.ok
        assert result.percent == 0
        assert not result.meets_minimum
        assert result.error == "Cannot read source file"


def _report() -> CoverageReport:
    report = CoverageReport(minimum_percent=50)
    report.files["/repo/a.sh"] = compute_result(
        classify_text(TEN_LINES, path="/repo/a.sh"), {3, 4, 5}, minimum_percent=50
    )
    report.files["/repo/b.sh"] = compute_result(
        classify_text("echo 1\necho 2\n", path="/repo/b.sh"), {1, 2}, minimum_percent=50
    )
    report.files["/repo/gone.sh"] = errored_result("/repo/gone.sh", "unreadable")
    return report


class TestCoverageReport:
    """Tests for CoverageReport properties."""

    def test_below_minimum_excludes_errored(self) -> None:
        assert _report().below_minimum == ["/repo/a.sh"]

    def test_errored_files(self) -> None:
        assert _report().errored_files == ["/repo/gone.sh"]

    def test_all_met_minimum(self) -> None:
        report = _report()
        assert not report.all_met_minimum
        del report.files["/repo/a.sh"]
        assert report.all_met_minimum

    def test_empty_report(self) -> None:
        report = CoverageReport()
        assert report.all_met_minimum
        assert report.errored_files == []


class TestBuildSummary:
    """Tests for build_summary."""

    def test_summary_totals_skip_errored_files(self) -> None:
        summary = build_summary(_report())["summary"]
        assert summary == {
            "total_files": 3,
            "errored_files": 1,
            "files_below_minimum": 1,
            "all_met_minimum": False,
            "minimum_percent": 50,
            "total_lines": 10,
            "covered_lines": 5,
            "line_coverage_percent": 50,
        }

    def test_file_entries(self) -> None:
        files = build_summary(_report())["files"]
        assert [f["path"] for f in files] == ["/repo/a.sh", "/repo/b.sh", "/repo/gone.sh"]

        a = files[0]
        assert a["coverage_percent"] == 37
        assert a["covered_lines"] == 3
        assert a["uncovered_lines"] == [6, 7, 8, 9, 10]
        assert a["meets_minimum"] is False
        assert files[2] == {"path": "/repo/gone.sh", "error": "unreadable"}

    def test_without_files(self) -> None:
        assert "files" not in build_summary(_report(), include_files=False)

    def test_is_json_serializable(self) -> None:
        data = json.loads(json.dumps(build_summary(_report())))
        assert data["summary"]["total_files"] == 3


class TestBuildTextSummary:
    """Tests for build_text_summary."""

    def test_text_summary(self) -> None:
        assert build_text_summary(_report()) == "Coverage: 50% (5/10 lines)"

    def test_no_data(self) -> None:
        report = CoverageReport()
        report.files["/repo/gone.sh"] = CoverageResult(path="/repo/gone.sh", error="x")
        assert build_text_summary(report) == "No coverage data"
