"""Source path normalization shared by the registry and the correlator.

Bash reports ``BASH_SOURCE`` exactly as the file was sourced, so the same
file can appear as ``./lib.sh``, ``lib.sh`` or ``/repo/lib.sh``. Paths are
made absolute against the directory the test run started in and normalized
lexically (symlinks are not resolved).
"""

import os
from collections.abc import Iterable
from pathlib import Path


def normalize_path(raw: str, base_dir: Path | None = None) -> str:
    """Return an absolute, lexically normalized path string."""
    expanded = os.path.expanduser(raw)
    if not os.path.isabs(expanded):
        expanded = os.path.join(str(base_dir or Path.cwd()), expanded)
    return os.path.normpath(expanded)


def normalize_paths(raws: Iterable[str | Path], base_dir: Path | None = None) -> frozenset[str]:
    return frozenset(normalize_path(str(raw), base_dir) for raw in raws)
