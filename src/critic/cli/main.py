"""critic CLI - critic command."""

import click

from critic import __version__
from critic.cli.classify import classify_command
from critic.cli.report import report_command
from critic.cli.run import run_command
from critic.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="critic")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """critic - Dead simple testing for bash, with statement coverage.

    Usage: critic run /path/to/test.sh
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(run_command, name="run")
cli.add_command(report_command, name="report")
cli.add_command(classify_command, name="classify")


if __name__ == "__main__":
    cli()
