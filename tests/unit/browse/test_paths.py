"""Tests for lexical path canonicalization."""

from pathlib import Path

import pytest

from repo_viewer.browse.paths import canonical_segments, canonicalize, confine
from repo_viewer.core.exceptions import NotFoundError


@pytest.mark.unit
class TestCanonicalize:
    """Tests for canonicalize."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("", ""),
            (".", ""),
            ("/", ""),
            ("README.md", "README.md"),
            ("/src/app.py", "src/app.py"),
            ("src//app.py", "src/app.py"),
            ("./src/./app.py", "src/app.py"),
            ("src/../README.md", "README.md"),
            ("src/lib/../../docs/", "docs"),
            ("a/b/c/../../..", ""),
            ("src\\app.py", "src/app.py"),
        ],
    )
    def test_canonical_forms(self, raw: str, expected: str) -> None:
        assert canonicalize(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [
            "..",
            "../",
            "../etc/passwd",
            "/../../etc/passwd",
            "src/../../secret",
            "a/b/../../../x",
            "./..",
            "..\\..\\windows",
        ],
    )
    def test_escape_is_rejected(self, raw: str) -> None:
        with pytest.raises(NotFoundError):
            canonicalize(raw)

    def test_escape_is_not_clamped(self) -> None:
        # "../README.md" must not quietly become "README.md"
        assert canonical_segments("../README.md") is None

    def test_nul_byte_rejected(self) -> None:
        with pytest.raises(NotFoundError):
            canonicalize("src/app\x00.py")

    def test_depth_never_negative(self) -> None:
        # Every prefix of an accepted path stays at or below the root
        raw = "a/../b/./c/../../d"
        depth = 0
        for segment in raw.split("/"):
            if segment == "..":
                depth -= 1
            elif segment not in ("", "."):
                depth += 1
            assert depth >= 0
        assert canonicalize(raw) == "d"


@pytest.mark.unit
class TestConfine:
    """Tests for confine."""

    def test_root(self, tmp_path: Path) -> None:
        assert confine(tmp_path, "") == tmp_path

    def test_descendant(self, tmp_path: Path) -> None:
        assert confine(tmp_path, "src/app.py") == tmp_path / "src" / "app.py"

    def test_non_canonical_input_is_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(NotFoundError):
            confine(tmp_path / "repo", "../outside")

    def test_absolute_input_is_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(NotFoundError):
            confine(tmp_path, "/etc/passwd")
