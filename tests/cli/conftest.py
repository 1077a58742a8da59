"""Shared fixtures for CLI tests."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

LIB = """\
#!/usr/bin/env bash

greet() {
  echo "hello $1"
}

unused() {
  echo never
}
"""


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """No global config file and no legacy switches from the outer environment."""
    for name in ("DEBUG", "CRITIC_COVERAGE_DISABLE", "CRITIC_COVERAGE_MIN_PERCENT"):
        monkeypatch.delenv(name, raising=False)
    with patch("critic.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "no-global.yaml"):
        yield


@pytest.fixture
def project(tmp_path: Path) -> dict[str, Path]:
    """A library, its test file, and the artifacts of one traced run."""
    lib = tmp_path / "lib.sh"
    lib.write_text(LIB)
    spec = tmp_path / "test-lib.sh"
    spec.write_text(f'#!/usr/bin/env bash\nsource "{lib}"\ngreet world\n')

    trace = tmp_path / ".critic-trace-1.log"
    trace.write_text(
        f"({spec}:2):source():source {lib}\n"
        f"({spec}:3):source():greet world\n"
        f"({lib}:4):greet():echo 'hello world'\n"
    )
    symbols = tmp_path / ".critic-symbols-1.log"
    symbols.write_text(f"greet 3 {lib}\nunused 7 {lib}\n")
    return {"root": tmp_path, "lib": lib, "spec": spec, "trace": trace, "symbols": symbols}
