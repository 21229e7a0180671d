"""Tests for Settings."""

from pathlib import Path

import pytest

from repo_viewer.config.settings import Settings


@pytest.mark.unit
class TestSettings:
    """Tests for Settings."""

    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.api_port == 8080
        assert settings.default_host == "github.com"
        assert not settings.is_production

    def test_paths_expand_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("REPO_VIEWER_LANGUAGES_FILE", "~/languages.json")
        settings = Settings(
            _env_file=None,
            storage_root="~/repos",
            config_file="~/repos/config.yml",
            static_dir="~/static",
        )
        assert settings.storage_root == tmp_path / "repos"
        assert settings.config_file == tmp_path / "repos" / "config.yml"
        assert settings.languages_file == tmp_path / "languages.json"
        assert settings.static_dir == tmp_path / "static"

    def test_production(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REPO_VIEWER_ENVIRONMENT", "Production")
        assert Settings(_env_file=None).is_production
