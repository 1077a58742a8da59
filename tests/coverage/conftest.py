"""Shared fixtures for coverage tests: a small traced project on disk."""

from pathlib import Path

import pytest

from critic.coverage.ops import CoverageRun, collect_coverage, excluded_paths
from critic.coverage.registry import SymbolRegistry

LIB = """\
#!/usr/bin/env bash

greet() {
  echo "hello $1"
}

unused() {
  echo never
}
"""

SPEC = """\
#!/usr/bin/env bash
spec_helper() {
  greet "$1"
}
spec_helper world
"""


@pytest.fixture
def project(tmp_path: Path) -> dict[str, Path]:
    """lib.sh with a covered and an uncovered function, plus its test file."""
    lib = tmp_path / "lib.sh"
    lib.write_text(LIB)
    spec = tmp_path / "test-lib.sh"
    spec.write_text(SPEC)
    harness = tmp_path / "critic-harness.sh"
    harness.write_text("#!/usr/bin/env bash\n")
    return {"root": tmp_path, "lib": lib, "spec": spec, "harness": harness}


@pytest.fixture
def declare_records(project: dict[str, Path]) -> list[str]:
    """``declare -F`` records as the bootstrap's exit hook writes them."""
    return [
        f"greet 3 {project['lib']}",
        f"unused 7 {project['lib']}",
        f"spec_helper 2 {project['spec']}",
        f"__critic_finish 20 {project['harness']}",
    ]


@pytest.fixture
def trace_records(project: dict[str, Path]) -> list[str]:
    """xtrace log of running the test file once."""
    lib, spec, harness = project["lib"], project["spec"], project["harness"]
    return [
        f"({harness}:41):source {spec} world",
        f"({spec}:5):source():spec_helper world",
        f"({spec}:3):spec_helper():greet world",
        f"({lib}:4):greet():echo 'hello world'",
        "garbage text with no structure",
        f"({lib}:4):greet():echo 'hello again'",
        f"({harness}:21):__critic_finish():local __critic_status=0",
    ]


@pytest.fixture
def registry(
    project: dict[str, Path], declare_records: list[str]
) -> SymbolRegistry:
    excluded = excluded_paths(project["harness"], project["spec"], base_dir=project["root"])
    return SymbolRegistry.from_declare_output(
        declare_records, excluded_files=excluded, base_dir=project["root"]
    )


@pytest.fixture
def coverage_run(
    project: dict[str, Path], registry: SymbolRegistry, trace_records: list[str]
) -> CoverageRun:
    return collect_coverage(trace_records, registry, base_dir=project["root"])
