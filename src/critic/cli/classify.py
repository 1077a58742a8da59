"""critic classify command - show how a source file's lines are classified."""

import json
from pathlib import Path

import click

from critic.coverage.classifier import classify_file


def _ranges(lines: frozenset[int]) -> str:
    """Compress sorted line numbers: [1, 2, 3, 5] -> "1-3,5"."""
    if not lines:
        return "-"
    ordered = sorted(lines)
    parts = []
    start = prev = ordered[0]
    for line in ordered[1:]:
        if line == prev + 1:
            prev = line
            continue
        parts.append(f"{start}-{prev}" if prev > start else str(start))
        start = prev = line
    parts.append(f"{start}-{prev}" if prev > start else str(start))
    return ",".join(parts)


@click.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def classify_command(source: Path, as_json: bool) -> None:
    """Show blank/comment, structural, ignored and heredoc lines of SOURCE."""
    try:
        classification = classify_file(source)
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Cannot read {source}: {e}") from e

    if as_json:
        click.echo(
            json.dumps(
                {
                    "path": str(source),
                    "total_lines": classification.total_lines,
                    "blank_or_comment": sorted(classification.blank_or_comment),
                    "structural": sorted(classification.structural),
                    "ignored": sorted(classification.ignored),
                    "measurable": sorted(classification.measurable),
                    "heredocs": [
                        {
                            "start": h.start,
                            "terminator": h.terminator,
                            "body_end": h.body_end,
                            "terminated": h.terminated,
                        }
                        for h in classification.heredocs
                    ],
                }
            )
        )
        return

    click.echo(f"{source}: {classification.total_lines} lines")
    click.echo(f"  Blank/comment: {_ranges(classification.blank_or_comment)}")
    click.echo(f"  Structural:    {_ranges(classification.structural)}")
    click.echo(f"  Ignored:       {_ranges(classification.ignored)}")
    click.echo(f"  Measurable:    {_ranges(classification.measurable)}")
    for h in classification.heredocs:
        suffix = "" if h.terminated else " (unterminated)"
        click.echo(f"  Heredoc:       {h.start}-{h.body_end} <<{h.terminator}{suffix}")
