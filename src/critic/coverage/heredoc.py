"""Heredoc coverage expansion.

xtrace reports the command that opens a heredoc but never the literal body
lines, so a covered start line marks the whole block, terminator included,
as covered.
"""

from collections.abc import Iterable

from critic.coverage.models import Heredoc


def expand_heredocs(heredocs: Iterable[Heredoc], covered: Iterable[int]) -> set[int]:
    """Return ``covered`` plus the bodies of heredocs whose start is covered.

    The input is not modified and the result is always a superset of it.
    """
    original = frozenset(covered)
    expanded = set(original)
    for heredoc in heredocs:
        if heredoc.start in original:
            expanded.update(range(heredoc.start + 1, heredoc.body_end + 1))
    return expanded
