"""Rich terminal rendering of a coverage run."""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.markup import escape

from critic.coverage.models import CoverageResult, LineClassification
from critic.coverage.ops import CoverageRun
from critic.coverage.report import build_text_summary


def _join(lines: Iterable[int]) -> str:
    return " ".join(str(n) for n in sorted(lines))


def render_result(
    console: Console,
    result: CoverageResult,
    *,
    classification: LineClassification | None = None,
    debug: bool = False,
) -> None:
    """Print one file's coverage section."""
    console.print()
    console.print(f"[cyan]{escape(result.path)}[/cyan]", highlight=False)

    if not result.ok:
        console.print(f"  [red]Error: {escape(result.error or '')}[/red]", highlight=False)
        return

    percent_style = "green" if result.meets_minimum else "red"
    uncovered = _join(result.uncovered_lines) or "none"

    console.print(f"  [magenta]Total LOC: {result.loc}[/magenta]", highlight=False)
    console.print(f"  [green]Covered LOC: {result.lines_hit}[/green]", highlight=False)
    console.print(
        f"  [yellow]Ignored LOC: {len(result.ignored_lines)}[/yellow]", highlight=False
    )
    console.print(
        f"  [{percent_style}]Coverage %: {result.percent}[/{percent_style}]", highlight=False
    )
    console.print(f"  Uncovered Lines: {uncovered}", highlight=False)
    if result.functions_found:
        console.print(
            f"  [blue]Functions: {result.functions_hit}/{result.functions_found}[/blue]",
            highlight=False,
        )

    if debug and classification is not None:
        _render_debug(console, result, classification)


def _render_debug(
    console: Console, result: CoverageResult, classification: LineClassification
) -> None:
    console.print()
    console.print("  Debug info", highlight=False)
    console.print(f"    # lines in file: {classification.total_lines}", highlight=False)
    console.print(f"    # lines of code: {classification.loc}", highlight=False)
    console.print(f"    Empty lines: {_join(classification.blank_or_comment)}", highlight=False)
    console.print(f"    Structural lines: {_join(classification.structural)}", highlight=False)
    console.print(f"    Ignored lines: {_join(classification.ignored)}", highlight=False)
    console.print(f"    Covered lines: {_join(result.covered_lines)}", highlight=False)
    for heredoc in classification.heredocs:
        if not heredoc.terminated:
            console.print(
                f"    [yellow]Unterminated heredoc at line {heredoc.start} "
                f"({escape(heredoc.terminator)}), extended to end of file[/yellow]",
                highlight=False,
            )


def render_run(console: Console, run: CoverageRun, *, debug: bool = False) -> None:
    """Print the coverage report header and every file's section."""
    console.print()
    console.print("[magenta]\\[critic] Coverage Report[/magenta]", highlight=False)
    if not run.report.files:
        console.print("  No source files with declared functions were traced.", highlight=False)
        return
    for path, result in run.report.files.items():
        render_result(
            console,
            result,
            classification=run.classifications.get(path),
            debug=debug,
        )
    console.print()
    console.print(build_text_summary(run.report), highlight=False)
