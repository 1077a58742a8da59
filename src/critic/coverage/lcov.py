"""LCOV export of a coverage run.

Emits the same record types the LCOV parsers of CI coverage services read:
- SF:<source file path>
- FN:<line>,<name> / FNDA:<hit count>,<name> / FNF / FNH
- DA:<line>,<hit count>
- LF:<lines found> / LH:<lines hit>
- end_of_record

DA records cover measurable lines outside ignore regions, the same lines
the uncovered listing is drawn from. Lines covered only through heredoc
expansion are written with one hit.
"""

from pathlib import Path

from critic.coverage.ops import CoverageRun


def to_lcov(run: CoverageRun) -> str:
    """Render every readable file of the run as LCOV records."""
    out: list[str] = []
    for path, result in run.report.files.items():
        if not result.ok:
            continue
        trace = run.traces.get(path)
        line_hits = trace.line_hits if trace is not None else {}
        symbol_hits = trace.symbol_hits if trace is not None else set()

        out.append("TN:")
        out.append(f"SF:{path}")

        functions = run.registry.symbols_in(path)
        for symbol in functions:
            out.append(f"FN:{symbol.line},{symbol.name}")
        for symbol in functions:
            out.append(f"FNDA:{1 if symbol.name in symbol_hits else 0},{symbol.name}")
        out.append(f"FNF:{len(functions)}")
        out.append(f"FNH:{sum(1 for s in functions if s.name in symbol_hits)}")

        found = 0
        hit = 0
        for line in sorted(result.measurable_lines - result.ignored_lines):
            hits = line_hits.get(line, 0)
            if hits == 0 and line in result.covered_lines:
                hits = 1
            out.append(f"DA:{line},{hits}")
            found += 1
            hit += hits > 0
        out.append(f"LF:{found}")
        out.append(f"LH:{hit}")
        out.append("end_of_record")

    return "\n".join(out) + "\n" if out else ""


def write_lcov(run: CoverageRun, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_lcov(run))
