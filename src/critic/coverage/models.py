"""Coverage data model.

File-centric: every structure here is keyed by an absolute source path.
Classifications and results are recomputed on every run and never persisted.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Heredoc:
    """A heredoc block: start line, delimiter word, and last body line.

    ``body_end`` is the terminator line when ``terminated`` is true,
    otherwise the last line of the file.
    """

    start: int
    terminator: str
    body_end: int
    terminated: bool = True


@dataclass(frozen=True, slots=True)
class LineClassification:
    """Static line classification of one source file.

    The four classifications are computed independently and may overlap.
    """

    path: str
    total_lines: int
    blank_or_comment: frozenset[int] = frozenset()
    structural: frozenset[int] = frozenset()
    ignored: frozenset[int] = frozenset()
    heredocs: tuple[Heredoc, ...] = ()

    @property
    def all_lines(self) -> frozenset[int]:
        return frozenset(range(1, self.total_lines + 1))

    @property
    def measurable(self) -> frozenset[int]:
        """Lines eligible to count toward coverage."""
        return self.all_lines - self.blank_or_comment - self.structural

    @property
    def loc(self) -> int:
        """Lines that are neither blank nor comments."""
        return self.total_lines - len(self.blank_or_comment)


@dataclass(frozen=True, slots=True)
class Symbol:
    """A declared shell function and where it was declared.

    ``file`` and ``line`` are None when the provenance could not be resolved.
    """

    name: str
    file: str | None
    line: int | None

    @property
    def resolved(self) -> bool:
        return self.file is not None and self.line is not None


@dataclass(frozen=True, slots=True)
class TraceEvent:
    """One xtrace record: ``(<file>:<line>):[<symbol>():]<args>``."""

    file: str
    line: int
    symbol: str | None
    args: str


@dataclass(slots=True)
class FileTrace:
    """Trace hits accumulated for a single file."""

    path: str
    line_hits: Counter[int] = field(default_factory=Counter)  # line_number → hit_count
    symbol_hits: set[str] = field(default_factory=set)

    @property
    def covered_lines(self) -> set[int]:
        """Every line hit at least once, each exactly once."""
        return set(self.line_hits)


@dataclass(frozen=True, slots=True)
class CoverageResult:
    """Coverage outcome for a single source file.

    ``covered_lines`` is the full post-expansion covered set; ``lines_hit``
    and ``lines_found`` are the numerator and denominator of ``percent``.
    ``error`` is set (and all line sets are empty) when the file could not be
    read at report time.
    """

    path: str
    total_lines: int = 0
    loc: int = 0
    measurable_lines: frozenset[int] = frozenset()
    ignored_lines: frozenset[int] = frozenset()
    covered_lines: frozenset[int] = frozenset()
    uncovered_lines: tuple[int, ...] = ()
    lines_found: int = 0
    lines_hit: int = 0
    percent: int = 100
    meets_minimum: bool = True
    functions_found: int = 0
    functions_hit: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class CoverageReport:
    """Coverage results for every measured file of one run."""

    minimum_percent: int = 0
    files: dict[str, CoverageResult] = field(default_factory=dict)  # path → result

    @property
    def all_met_minimum(self) -> bool:
        return all(r.meets_minimum for r in self.files.values() if r.ok)

    @property
    def errored_files(self) -> list[str]:
        return [path for path, r in self.files.items() if not r.ok]

    @property
    def below_minimum(self) -> list[str]:
        return [path for path, r in self.files.items() if r.ok and not r.meets_minimum]
