"""Tests for source path normalization."""

from pathlib import Path

import pytest

from critic.coverage.paths import normalize_path, normalize_paths


class TestNormalizePath:
    """Tests for normalize_path."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("lib.sh", "/repo/lib.sh"),
            ("./lib.sh", "/repo/lib.sh"),
            ("src/../lib.sh", "/repo/lib.sh"),
            ("/abs//dir/./lib.sh", "/abs/dir/lib.sh"),
        ],
    )
    def test_normalizes(self, raw: str, expected: str) -> None:
        assert normalize_path(raw, Path("/repo")) == expected

    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert normalize_path("lib.sh") == str(Path.cwd() / "lib.sh")

    def test_expands_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", "/home/tester")
        assert normalize_path("~/lib.sh") == "/home/tester/lib.sh"


class TestNormalizePaths:
    """Tests for normalize_paths."""

    def test_deduplicates_spellings(self) -> None:
        paths = normalize_paths(["lib.sh", "./lib.sh", Path("/repo/lib.sh")], Path("/repo"))
        assert paths == frozenset({"/repo/lib.sh"})
