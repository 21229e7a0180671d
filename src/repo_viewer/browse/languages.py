"""Loader for the external language lookup table.

The table is a JSON list of ``{"name": ..., "extensions": ...}`` objects where
``extensions`` is a string, a list of strings, or missing entirely. Each entry
is parsed into one explicit variant and flattened into an extension map.
"""

import json
from pathlib import Path
from typing import Annotated, Any, Literal

import structlog
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from repo_viewer.core.exceptions import ConfigError

logger = structlog.get_logger(__name__)


class SingleExtension(BaseModel):
    kind: Literal["single"] = "single"
    name: str
    extension: str

    def extensions(self) -> list[str]:
        return [self.extension]


class ManyExtensions(BaseModel):
    kind: Literal["many"] = "many"
    name: str
    extension_list: list[str]

    def extensions(self) -> list[str]:
        return list(self.extension_list)


class ImplicitExtension(BaseModel):
    """No extensions listed: the language name doubles as its extension."""

    kind: Literal["implicit"] = "implicit"
    name: str

    def extensions(self) -> list[str]:
        return [self.name]


LanguageEntry = Annotated[
    SingleExtension | ManyExtensions | ImplicitExtension,
    Field(discriminator="kind"),
]

_entries_adapter = TypeAdapter(list[LanguageEntry])


def _tag(raw: Any) -> dict:
    """Attach the variant tag to one raw table entry."""
    if not isinstance(raw, dict) or not isinstance(raw.get("name"), str):
        raise ConfigError(
            "Language entry must be an object with a string 'name'",
            details={"entry": repr(raw)},
        )
    extensions = raw.get("extensions")
    if extensions is None:
        return {"kind": "implicit", "name": raw["name"]}
    if isinstance(extensions, str):
        return {"kind": "single", "name": raw["name"], "extension": extensions}
    if isinstance(extensions, list):
        return {"kind": "many", "name": raw["name"], "extension_list": extensions}
    raise ConfigError(
        f"Unsupported 'extensions' value for language {raw['name']!r}",
        details={"language": raw["name"], "extensions": repr(extensions)},
    )


def parse_language_entries(data: Any) -> list[LanguageEntry]:
    """Parse the decoded JSON document into tagged entries."""
    if not isinstance(data, list):
        raise ConfigError("Language table must be a JSON list")
    try:
        return _entries_adapter.validate_python([_tag(raw) for raw in data])
    except ValidationError as e:
        raise ConfigError(f"Invalid language table: {e}") from e


def build_language_map(entries: list[LanguageEntry]) -> dict[str, str]:
    """Flatten entries into ``{extension: language}``. Later entries win."""
    mapping: dict[str, str] = {}
    for entry in entries:
        for extension in entry.extensions():
            mapping[extension] = entry.name
    return mapping


def load_language_map(path: Path) -> dict[str, str]:
    """Read the language table at ``path``.

    A missing file yields an empty table; a malformed one is a ConfigError.
    """
    path = Path(path)
    if not path.exists():
        logger.warning("Language table not found, text previews disabled", path=str(path))
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(
            f"Failed to read language table: {e}",
            details={"path": str(path)},
        ) from e

    mapping = build_language_map(parse_language_entries(data))
    logger.info("Language table loaded", path=str(path), extensions=len(mapping))
    return mapping
