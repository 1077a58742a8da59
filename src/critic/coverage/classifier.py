"""Static line classification of shell sources.

There is no shell grammar here: each pass is a textual heuristic over the
file's lines that returns a set of 1-based line numbers, and the passes are
combined with set algebra by the reporter.

Passes:
- blank_or_comment_lines: empty lines and ``#`` comments
- structural_lines: function headers and lone closing braces
- ignored_lines: ``# critic ignore`` ... ``# critic /ignore`` regions
- find_heredocs: heredoc start lines with their terminator and extent
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

from critic.core.logging import get_logger
from critic.coverage.models import Heredoc, LineClassification

log = get_logger("coverage.classifier")

_FUNCTION_HEADER = re.compile(
    r"""
    ^\s*
    (?:
        function\s+[^\s(){}]+\s*(?:\(\s*\))?   # function name [()]
      | [^\s(){}=#]+\s*\(\s*\)                 # name()
    )
    \s*\{\s*(?:\#.*)?$
    """,
    re.VERBOSE,
)
_CLOSING_BRACE = re.compile(r"^\s*\}\s*$")

_IGNORE_OPEN = re.compile(r"#\s*critic\s+ignore\b")
_IGNORE_CLOSE = re.compile(r"#\s*critic\s+/ignore\b")

# << or <<- followed by a shell word, optionally quoted; <<< is a here-string
_HEREDOC_TOKEN = re.compile(
    r"""(?<!<)<<(?!<)(-?)\s*(?:'([^']+)'|"([^"]+)"|\\?([^\s;&|<>()]+))"""
)
_ARITHMETIC_OPEN = re.compile(r"\(\(|\$\[")


def _is_blank_or_comment(line: str) -> bool:
    stripped = line.lstrip()
    return not stripped or stripped.startswith("#")


def blank_or_comment_lines(lines: Sequence[str]) -> set[int]:
    """Lines that are empty or start with ``#`` after leading whitespace."""
    return {no for no, line in enumerate(lines, start=1) if _is_blank_or_comment(line)}


def structural_lines(lines: Sequence[str]) -> set[int]:
    """Function header lines and lines holding only a closing brace."""
    return {
        no
        for no, line in enumerate(lines, start=1)
        if _FUNCTION_HEADER.match(line) or _CLOSING_BRACE.match(line)
    }


def ignored_lines(lines: Sequence[str]) -> set[int]:
    """Lines inside ignore markers, markers included.

    A second open marker inside a region is ignored; the first close marker
    ends the region. A close marker outside a region has no effect. An open
    marker without a close ignores everything to end of file.
    """
    result: set[int] = set()
    inside = False
    for no, line in enumerate(lines, start=1):
        if not inside:
            if _IGNORE_OPEN.search(line):
                inside = True
                result.add(no)
            continue
        result.add(no)
        if _IGNORE_CLOSE.search(line):
            inside = False
    return result


def _heredoc_start(line: str) -> tuple[str, bool] | None:
    """Return (delimiter, strip_tabs) if the line opens a heredoc."""
    if _is_blank_or_comment(line):
        return None
    match = _HEREDOC_TOKEN.search(line)
    if match is None:
        return None
    arithmetic = _ARITHMETIC_OPEN.search(line)
    if arithmetic is not None and arithmetic.start() < match.start():
        return None
    word = match.group(2) or match.group(3) or match.group(4)
    return word, match.group(1) == "-"


def find_heredocs(lines: Sequence[str], *, path: str = "") -> list[Heredoc]:
    """Locate heredoc blocks.

    The body of a heredoc runs from the line after its start through the
    terminator line. Heredoc bodies are not scanned for further heredocs.
    An unterminated heredoc extends to end of file.
    """
    heredocs: list[Heredoc] = []
    total = len(lines)
    index = 0
    while index < total:
        start = _heredoc_start(lines[index])
        if start is None:
            index += 1
            continue

        word, strip_tabs = start
        end = None
        for j in range(index + 1, total):
            candidate = lines[j].rstrip("\r")
            if strip_tabs:
                candidate = candidate.lstrip("\t")
            if candidate == word:
                end = j
                break

        if end is None:
            log.debug("unterminated_heredoc", path=path, line=index + 1, terminator=word)
            heredocs.append(Heredoc(index + 1, word, total, terminated=False))
            break

        heredocs.append(Heredoc(index + 1, word, end + 1))
        index = end + 1

    return heredocs


def classify_text(text: str, *, path: str = "") -> LineClassification:
    """Classify every line of a source text. Pure function of ``text``.

    Lines are split on newline characters only, matching how bash counts
    ``LINENO``.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return LineClassification(
        path=path,
        total_lines=len(lines),
        blank_or_comment=frozenset(blank_or_comment_lines(lines)),
        structural=frozenset(structural_lines(lines)),
        ignored=frozenset(ignored_lines(lines)),
        heredocs=tuple(find_heredocs(lines, path=path)),
    )


def classify_file(path: Path) -> LineClassification:
    """Read and classify a source file.

    Raises:
        OSError: If the file cannot be read.
    """
    return classify_text(path.read_text(errors="replace"), path=str(path))
