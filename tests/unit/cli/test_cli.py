"""Tests for the command line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from repo_viewer.cli import cli
from repo_viewer.config import get_settings


@pytest.fixture
def settings_env(tmp_path: Path, storage_root: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    config_file = tmp_path / "config.yml"
    languages_file = tmp_path / "languages.json"
    languages_file.write_text(json.dumps([{"name": "python", "extensions": ["py"]}]))

    monkeypatch.setenv("REPO_VIEWER_CONFIG_FILE", str(config_file))
    monkeypatch.setenv("REPO_VIEWER_STORAGE_ROOT", str(storage_root))
    monkeypatch.setenv("REPO_VIEWER_LANGUAGES_FILE", str(languages_file))
    get_settings.cache_clear()
    yield config_file
    get_settings.cache_clear()


@pytest.mark.unit
class TestCLI:
    """Tests for the click commands."""

    def test_repos(self, settings_env: Path) -> None:
        settings_env.write_text("repos:\n  demo:\n    url: octocat/hello\n")
        result = CliRunner().invoke(cli, ["repos"])
        assert result.exit_code == 0
        assert "demo: https://github.com/octocat/hello" in result.output

    def test_repos_config_error(self, settings_env: Path) -> None:
        settings_env.write_text("repos:\n  demo:\n    url: bare\n")
        result = CliRunner().invoke(cli, ["repos"])
        assert result.exit_code == 1

    def test_show_directory(self, settings_env: Path, demo_tree: Path) -> None:
        settings_env.write_text("repos:\n  demo:\n    url: octocat/hello\n")
        result = CliRunner().invoke(cli, ["show", "demo", "src"])
        assert result.exit_code == 0
        assert "demo / src" in result.output
        assert "  app.py" in result.output

    def test_show_text(self, settings_env: Path, demo_tree: Path) -> None:
        settings_env.write_text("repos:\n  demo:\n    url: octocat/hello\n")
        result = CliRunner().invoke(cli, ["show", "demo", "src/app.py"])
        assert result.exit_code == 0
        assert "[python]" in result.output
        assert "print('hello')" in result.output

    def test_show_traversal(self, settings_env: Path, demo_tree: Path) -> None:
        settings_env.write_text("repos:\n  demo:\n    url: octocat/hello\n")
        result = CliRunner().invoke(cli, ["show", "demo", "../../.."])
        assert result.exit_code == 1

    def test_sync(self, settings_env: Path, upstream_repo: Path) -> None:
        settings_env.write_text(f"repos:\n  demo:\n    url: {upstream_repo.as_uri()}\n")
        runner = CliRunner()

        first = runner.invoke(cli, ["sync"])
        assert first.exit_code == 0
        assert "cloned" in first.output

        second = runner.invoke(cli, ["sync"])
        assert second.exit_code == 0
        assert "up_to_date" in second.output

    def test_sync_failure_exit_code(self, settings_env: Path, tmp_path: Path) -> None:
        missing = (tmp_path / "missing").as_uri()
        settings_env.write_text(f"repos:\n  demo:\n    url: {missing}\n")
        result = CliRunner().invoke(cli, ["sync"])
        assert result.exit_code == 1
        assert "failed" in result.output
