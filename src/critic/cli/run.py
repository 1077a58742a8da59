"""critic run command - run a bash test file with coverage."""

from pathlib import Path

import click

from critic.cli.utils import coverage_overrides, emit_coverage, load_cli_config
from critic.core.errors import CoverageError, HarnessError
from critic.core.logging import get_logger
from critic.core.progress import pluralize, spinner, status
from critic.coverage.ops import CoverageRun, collect_from_artifacts
from critic.harness.runner import ShellRunner
from critic.harness.session import TraceSession, TraceSessionConfig

log = get_logger("cli.run")


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("spec_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.option("--no-coverage", is_flag=True, help="Run without tracing or coverage report")
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
@click.option("--keep-trace", is_flag=True, help="Keep trace artifacts (implies --debug)")
@click.pass_context
def run_command(
    ctx: click.Context,
    spec_file: Path,
    args: tuple[str, ...],
    no_coverage: bool,
    min_percent: int | None,
    fail_under: bool,
    as_json: bool,
    lcov_path: Path | None,
    debug: bool,
    keep_trace: bool,
) -> None:
    """Run SPEC_FILE under bash and report coverage of the code it sources.

    Extra ARGS are passed to the test file. The exit code is the test file's
    exit code.
    """
    cwd = Path.cwd()
    config = load_cli_config(
        ctx,
        cwd,
        **coverage_overrides(
            no_coverage=no_coverage,
            min_percent=min_percent,
            fail_under=fail_under,
            debug=debug,
            keep_trace=keep_trace,
        ),
    )
    spec_file = spec_file.resolve()
    traced = config.coverage.enabled

    status(f"Running tests in {spec_file.name}", style="banner")

    runner = ShellRunner(config.harness, cwd=cwd)
    coverage: CoverageRun | None = None
    session_config = TraceSessionConfig(retain=config.retain_trace)

    try:
        with TraceSession(session_config) as session:
            result = runner.run(session, spec_file, args, trace=traced)

            if traced:
                try:
                    with spinner("Collecting coverage"):
                        coverage = collect_from_artifacts(
                            session.trace_file,
                            session.symbols_file,
                            spec_file=spec_file,
                            harness_file=session.harness_file,
                            exclude=config.coverage.exclude,
                            include=config.coverage.include,
                            minimum_percent=config.coverage.minimum_percent,
                            exclude_ignored_from_percent=(
                                config.coverage.exclude_ignored_from_percent
                            ),
                            base_dir=cwd,
                        )
                except CoverageError as e:
                    log.error("coverage_failed", error=e.message)
                    status(str(e), style="error")

                if coverage is not None:
                    emit_coverage(
                        coverage, as_json=as_json, lcov_path=lcov_path, debug=config.debug.enabled
                    )

            if config.retain_trace:
                status(f"Trace retained: {session.trace_file}", style="warning")
                status(f"Symbols retained: {session.symbols_file}", style="warning")
    except HarnessError as e:
        raise click.ClickException(str(e)) from e

    exit_code = result.exit_code
    if coverage is not None and exit_code == 0 and config.coverage.fail_under_minimum:
        if not coverage.report.all_met_minimum:
            below = coverage.report.below_minimum
            status(
                f"{pluralize(len(below), 'file')} below "
                f"{config.coverage.minimum_percent}% coverage",
                style="error",
            )
            exit_code = 1

    status(f"Tests completed in {result.duration_sec:.1f}s", style="banner")
    ctx.exit(exit_code)
