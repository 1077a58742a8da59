"""critic report command - recompute coverage from retained trace artifacts."""

from pathlib import Path

import click

from critic.cli.utils import coverage_overrides, emit_coverage, load_cli_config
from critic.core.errors import CoverageError
from critic.coverage.ops import collect_from_artifacts


@click.command()
@click.option(
    "--trace",
    "trace_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="xtrace log written during the run",
)
@click.option(
    "--symbols",
    "symbols_file",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="declare -F dump written at exit",
)
@click.option(
    "--spec",
    "spec_file",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Test file that was run (never measured)",
)
@click.option(
    "--harness",
    "harness_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Bootstrap script that sourced the test file (never measured)",
)
@click.option(
    "--base-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory the run started in (default: current directory)",
)
@click.option(
    "--min-percent",
    type=click.IntRange(0, 100),
    default=None,
    help="Minimum coverage percentage per file",
)
@click.option("--fail-under", is_flag=True, help="Exit 1 if a file is below the minimum")
@click.option("--json", "as_json", is_flag=True, help="Print the coverage report as JSON")
@click.option(
    "--lcov",
    "lcov_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write an LCOV file",
)
@click.option("--debug", is_flag=True, help="Print per-file classification details")
@click.pass_context
def report_command(
    ctx: click.Context,
    trace_file: Path,
    symbols_file: Path,
    spec_file: Path,
    harness_file: Path | None,
    base_dir: Path | None,
    min_percent: int | None,
    fail_under: bool,
    as_json: bool,
    lcov_path: Path | None,
    debug: bool,
) -> None:
    """Print the coverage report for a previous run's trace artifacts."""
    base_dir = (base_dir or Path.cwd()).resolve()
    config = load_cli_config(
        ctx,
        base_dir,
        **coverage_overrides(min_percent=min_percent, fail_under=fail_under, debug=debug),
    )

    try:
        run = collect_from_artifacts(
            trace_file,
            symbols_file,
            spec_file=spec_file,
            harness_file=harness_file,
            exclude=config.coverage.exclude,
            include=config.coverage.include,
            minimum_percent=config.coverage.minimum_percent,
            exclude_ignored_from_percent=config.coverage.exclude_ignored_from_percent,
            base_dir=base_dir,
        )
    except CoverageError as e:
        raise click.ClickException(str(e)) from e

    emit_coverage(run, as_json=as_json, lcov_path=lcov_path, debug=config.debug.enabled)

    if config.coverage.fail_under_minimum and not run.report.all_met_minimum:
        ctx.exit(1)
