"""Entry point for ``python -m critic``."""

from critic.cli.main import cli

if __name__ == "__main__":
    cli()
