"""Tests for the language table loader."""

import json
from pathlib import Path

import pytest

from repo_viewer.browse.languages import (
    ImplicitExtension,
    ManyExtensions,
    SingleExtension,
    build_language_map,
    load_language_map,
    parse_language_entries,
)
from repo_viewer.core.exceptions import ConfigError


@pytest.mark.unit
class TestLanguageTable:
    """Tests for language table parsing."""

    def test_variants(self) -> None:
        entries = parse_language_entries(
            [
                {"name": "python", "extensions": ["py", "pyw"]},
                {"name": "javascript", "extensions": "js"},
                {"name": "go"},
            ]
        )
        assert isinstance(entries[0], ManyExtensions)
        assert isinstance(entries[1], SingleExtension)
        assert isinstance(entries[2], ImplicitExtension)

    def test_flattened_map(self) -> None:
        mapping = build_language_map(
            parse_language_entries(
                [
                    {"name": "python", "extensions": ["py", "pyw"]},
                    {"name": "javascript", "extensions": "js"},
                    {"name": "go"},
                    {"name": "null-ext", "extensions": None},
                ]
            )
        )
        assert mapping == {
            "py": "python",
            "pyw": "python",
            "js": "javascript",
            "go": "go",
            "null-ext": "null-ext",
        }

    def test_later_entries_win(self) -> None:
        mapping = build_language_map(
            parse_language_entries(
                [{"name": "c", "extensions": "h"}, {"name": "cpp", "extensions": ["h"]}]
            )
        )
        assert mapping["h"] == "cpp"

    @pytest.mark.parametrize(
        "data",
        [
            {"name": "python"},
            [{"extensions": "py"}],
            [{"name": "python", "extensions": 3}],
            [{"name": "python", "extensions": ["py", 3]}],
            ["python"],
        ],
    )
    def test_malformed(self, data) -> None:
        with pytest.raises(ConfigError):
            parse_language_entries(data)

    def test_load_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "languages.json"
        path.write_text(json.dumps([{"name": "python", "extensions": "py"}]))
        assert load_language_map(path) == {"py": "python"}

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert load_language_map(tmp_path / "languages.json") == {}

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "languages.json"
        path.write_text("[{")
        with pytest.raises(ConfigError):
            load_language_map(path)
