"""Pytest configuration and fixtures."""

import subprocess
from pathlib import Path

import pytest

from repo_viewer.core.models.repository import RepositoryDefinition
from tests.factories import RepositoryDefinitionFactory


def git(*args: str, cwd: Path) -> str:
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
    )
    return result.stdout.strip()


def commit_all(repo_path: Path, message: str) -> str:
    git("add", ".", cwd=repo_path)
    git("commit", "-m", message, cwd=repo_path)
    return git("rev-parse", "HEAD", cwd=repo_path)


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    root = tmp_path / "repos"
    root.mkdir()
    return root


@pytest.fixture
def upstream_repo(tmp_path: Path) -> Path:
    """Create a temporary Git repository acting as the remote."""
    repo_path = tmp_path / "upstream"
    repo_path.mkdir()

    git("init", cwd=repo_path)
    git("config", "user.email", "test@test.com", cwd=repo_path)
    git("config", "user.name", "Test", cwd=repo_path)

    (repo_path / "README.md").write_text("# Hello\n")
    (repo_path / "src").mkdir()
    (repo_path / "src" / "app.py").write_text("print('hello')\n")
    commit_all(repo_path, "Initial commit")

    return repo_path


@pytest.fixture
def demo_repo() -> RepositoryDefinition:
    return RepositoryDefinitionFactory(name="demo", path="octocat/hello")


@pytest.fixture
def demo_tree(storage_root: Path, demo_repo: RepositoryDefinition) -> Path:
    """Materialized clone of ``demo_repo`` without going through git."""
    root = demo_repo.local_root(storage_root)
    (root / ".git").mkdir(parents=True)
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    (root / "README.md").write_text("# Hello\n")
    (root / "a.txt").write_text("a\n")
    (root / "b.txt").write_text("b\n")
    (root / "a").mkdir()
    (root / "c").mkdir()
    (root / "src").mkdir()
    (root / "src" / "app.py").write_text("print('hello')\n")
    (root / "docs").mkdir()
    (root / "docs" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    return root
