"""Declared-symbol registry.

Built once per run from an explicit enumeration of ``(name, file, line)``
declarations, normally the ``declare -F`` records bash prints under
``shopt -s extdebug``::

    my_func 12 ./lib/my_lib.sh

Symbols declared in an excluded file (the harness bootstrap, the test file,
configured extras) are never subjects. Symbols whose provenance cannot be
resolved are never subjects either: undercounting subject code is preferred
over counting harness code as covered.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from critic.core.logging import get_logger
from critic.coverage.models import Symbol
from critic.coverage.paths import normalize_path

log = get_logger("coverage.registry")

# Pseudo-files bash reports for functions without a source file
_PSEUDO_FILES = frozenset({"", "main", "environment"})

Declaration = tuple[str, str | None, int | None]


def parse_declare_line(record: str) -> Declaration | None:
    """Parse one ``name line file`` record. Returns None for blank input.

    Unparseable line numbers or missing files yield a declaration with
    ``None`` in the unresolved position.
    """
    parts = record.strip().split(maxsplit=2)
    if not parts:
        return None
    if parts[0] == "declare" and len(parts) >= 3 and parts[1].startswith("-"):
        # Plain `declare -F` output without extdebug: "declare -f name"
        return parts[2], None, None

    name = parts[0]
    line: int | None = None
    file: str | None = None
    if len(parts) >= 2:
        try:
            line = int(parts[1])
        except ValueError:
            line = None
    if len(parts) == 3:
        file = parts[2]
    return name, file, line


class SymbolRegistry:
    """Maps declared symbol names to their provenance and subject status."""

    def __init__(self, symbols: Iterable[Symbol], *, excluded_files: Iterable[str]) -> None:
        self._excluded = frozenset(excluded_files)
        self._symbols: dict[str, Symbol] = {}
        for symbol in symbols:
            # Re-declaration overwrites
            self._symbols[symbol.name] = symbol

    @classmethod
    def from_declarations(
        cls,
        declarations: Iterable[Declaration],
        *,
        excluded_files: Iterable[str],
        base_dir: Path | None = None,
    ) -> SymbolRegistry:
        """Build from ``(name, file, line)`` triples, normalizing file paths."""
        symbols = []
        for name, file, line in declarations:
            if file is None or file in _PSEUDO_FILES or line is None or line <= 0:
                log.debug("unresolved_symbol", name=name, file=file, line=line)
                symbols.append(Symbol(name=name, file=None, line=None))
                continue
            symbols.append(Symbol(name=name, file=normalize_path(file, base_dir), line=line))
        return cls(symbols, excluded_files=excluded_files)

    @classmethod
    def from_declare_output(
        cls,
        records: Iterable[str],
        *,
        excluded_files: Iterable[str],
        base_dir: Path | None = None,
    ) -> SymbolRegistry:
        """Build from raw ``declare -F`` records, skipping blank lines."""
        declarations = [d for d in (parse_declare_line(r) for r in records) if d is not None]
        return cls.from_declarations(
            declarations, excluded_files=excluded_files, base_dir=base_dir
        )

    @property
    def symbols(self) -> dict[str, Symbol]:
        return dict(self._symbols)

    @property
    def excluded_files(self) -> frozenset[str]:
        return self._excluded

    def is_subject(self, name: str) -> bool:
        symbol = self._symbols.get(name)
        if symbol is None or not symbol.resolved:
            return False
        return symbol.file not in self._excluded

    @property
    def subject_symbols(self) -> frozenset[str]:
        return frozenset(name for name in self._symbols if self.is_subject(name))

    @property
    def subject_files(self) -> list[str]:
        """Sorted, deduplicated files declaring at least one subject symbol."""
        return sorted(
            {self._symbols[name].file for name in self.subject_symbols}  # type: ignore[misc]
        )

    def symbols_in(self, path: str) -> list[Symbol]:
        """Subject symbols declared in ``path``, ordered by declaring line."""
        found = [
            s for name, s in self._symbols.items() if s.file == path and self.is_subject(name)
        ]
        return sorted(found, key=lambda s: (s.line or 0, s.name))

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, name: object) -> bool:
        return name in self._symbols
