"""Loads repository and credential definitions from the YAML config file.

Example::

    auth:
      github.com:
        username: octocat
        password: ghp_xxx
    repos:
      demo:
        url: octocat/hello
      docs:
        url: https://gitlab.com/group/project
        dir: docs
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError

from repo_viewer.browse.paths import canonical_segments
from repo_viewer.core.exceptions import ConfigError
from repo_viewer.core.models.repository import (
    Credential,
    RepositoryDefinition,
    RepositoryRegistry,
)

logger = structlog.get_logger(__name__)


class AuthEntry(BaseModel):
    username: str
    password: str = ""


class RepoEntry(BaseModel):
    url: str = Field(..., min_length=1)
    dir: str = ""


class ConfigDocument(BaseModel):
    """Shape of the YAML file."""

    auth: dict[str, AuthEntry] = Field(default_factory=dict)
    repos: dict[str, RepoEntry] = Field(default_factory=dict)


def normalize_url(
    raw_url: str,
    default_host: str,
    credentials: Mapping[str, Credential],
    repo_name: str | None = None,
) -> str:
    """Expand shorthand repository URLs.

    - ``name`` becomes ``<default host username>/name``
    - ``owner/name`` becomes ``https://<default host>/owner/name``
    - anything with two or more slashes is returned unchanged

    Raises:
        ConfigError: a bare name is used but no credential exists for the
            default host to supply the owner.
    """
    url = raw_url.strip()
    if "/" not in url:
        credential = credentials.get(default_host)
        if credential is None:
            raise ConfigError(
                f"Repository {repo_name or url!r} uses a bare name but no "
                f"credential is configured for {default_host}",
                details={"repo": repo_name, "url": raw_url, "host": default_host},
            )
        url = f"{credential.username}/{url}"
    if url.count("/") == 1:
        url = f"https://{default_host}/{url}"
    return url


def _parse_definition(
    name: str,
    entry: RepoEntry,
    default_host: str,
    credentials: Mapping[str, Credential],
) -> RepositoryDefinition:
    url = normalize_url(entry.url, default_host, credentials, repo_name=name)
    if any(ord(c) < 32 or ord(c) == 127 for c in url):
        raise ConfigError(
            f"URL for repository {name!r} contains control characters",
            details={"repo": name, "url": url},
        )
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise ConfigError(
            f"Invalid URL for repository {name!r}: {e}",
            details={"repo": name, "url": url},
        ) from e

    host = parts.netloc.rpartition("@")[2]
    path_segments = canonical_segments(parts.path)
    # Local file:/// mirrors have no host component
    if not parts.scheme or not path_segments or (not host and parts.scheme != "file"):
        raise ConfigError(
            f"Invalid URL for repository {name!r}: {url}",
            details={"repo": name, "url": url},
        )

    subdirectory = canonical_segments(entry.dir)
    if subdirectory is None:
        raise ConfigError(
            f"Directory for repository {name!r} escapes the clone: {entry.dir}",
            details={"repo": name, "dir": entry.dir},
        )

    return RepositoryDefinition(
        name=name,
        raw_url=entry.url,
        url=url,
        scheme=parts.scheme,
        host=host,
        path="/".join(path_segments),
        subdirectory="/".join(subdirectory),
    )


class ConfigStore:
    """Builds a fresh RepositoryRegistry from the config file on every load."""

    def __init__(self, config_file: Path, default_host: str = "github.com") -> None:
        self._config_file = Path(config_file)
        self._default_host = default_host

    def load(self) -> RepositoryRegistry:
        """Read and parse the config file.

        Raises:
            ConfigError: on any read, parse or normalization failure. Nothing
                is partially applied.
        """
        try:
            text = self._config_file.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(
                f"Failed to read config file: {e}",
                details={"path": str(self._config_file)},
            ) from e
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML in config file: {e}",
                details={"path": str(self._config_file)},
            ) from e

        registry = self.parse(data or {})
        logger.info(
            "Config loaded",
            path=str(self._config_file),
            repos=len(registry.repositories),
            hosts=len(registry.credentials),
        )
        return registry

    def parse(self, data: Any) -> RepositoryRegistry:
        """Build a registry from an already decoded document."""
        try:
            document = ConfigDocument.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config document: {e}") from e

        credentials = {
            host: Credential(host=host, username=auth.username, password=auth.password)
            for host, auth in document.auth.items()
        }
        repositories = {
            name: _parse_definition(name, entry, self._default_host, credentials)
            for name, entry in document.repos.items()
        }
        return RepositoryRegistry(repositories=repositories, credentials=credentials)
