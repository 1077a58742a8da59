"""CLI utilities."""

import json
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from critic.config.loader import load_config
from critic.config.models import CriticConfig
from critic.core.errors import CriticError
from critic.core.logging import configure_logging
from critic.coverage.lcov import write_lcov
from critic.coverage.ops import CoverageRun
from critic.coverage.render import render_run
from critic.coverage.report import build_summary


def coverage_overrides(
    *,
    no_coverage: bool = False,
    min_percent: int | None = None,
    fail_under: bool = False,
    debug: bool = False,
    keep_trace: bool = False,
) -> dict[str, Any]:
    """Translate CLI flags into load_config() kwargs; unset flags are omitted."""
    coverage: dict[str, Any] = {}
    if no_coverage:
        coverage["enabled"] = False
    if min_percent is not None:
        coverage["minimum_percent"] = min_percent
    if fail_under:
        coverage["fail_under_minimum"] = True
    if keep_trace:
        coverage["retain_trace_on_debug"] = True

    overrides: dict[str, Any] = {}
    if coverage:
        overrides["coverage"] = coverage
    if debug or keep_trace:
        overrides["debug"] = {"enabled": True}
    return overrides


def load_cli_config(ctx: click.Context, project_root: Path, **overrides: Any) -> CriticConfig:
    """Load config and apply its logging section unless -v was given.

    Raises:
        click.ClickException: On invalid configuration.
    """
    try:
        config = load_config(project_root, **overrides)
    except CriticError as e:
        raise click.ClickException(str(e)) from e

    if not (ctx.obj or {}).get("verbose"):
        configure_logging(config=config.logging)
    return config


def emit_coverage(
    run: CoverageRun,
    *,
    as_json: bool,
    lcov_path: Path | None,
    debug: bool,
) -> None:
    """Print the report (rich or JSON) and write LCOV if requested."""
    if as_json:
        click.echo(json.dumps(build_summary(run.report), indent=2))
    else:
        render_run(Console(soft_wrap=True), run, debug=debug)
    if lcov_path is not None:
        write_lcov(run, lcov_path)
