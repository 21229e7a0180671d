"""Resolves untrusted request paths inside a repository's browsable root."""

import os
import stat
from pathlib import Path
from urllib.parse import quote

import structlog

from repo_viewer.browse.classifier import ContentClassifier, file_extension
from repo_viewer.browse.paths import canonicalize, confine
from repo_viewer.core.exceptions import InternalError, NotFoundError
from repo_viewer.core.models.browse import (
    Breadcrumb,
    BrowseResult,
    Classification,
    DirectoryEntry,
    PathResolution,
    Presentation,
)
from repo_viewer.core.models.repository import RepositoryRegistry

logger = structlog.get_logger(__name__)

# Version-control metadata never shown in listings
HIDDEN_DIRECTORIES = frozenset({".git"})


def repo_url(repo_name: str, relative_path: str = "") -> str:
    """Browse link for a location, e.g. ``/demo/src/app.py``."""
    url = "/" + quote(repo_name, safe="")
    if relative_path:
        url += "/" + quote(relative_path)
    return url


def sort_entries(entries: list[DirectoryEntry]) -> list[DirectoryEntry]:
    """Directories first, then files, each group by case-sensitive name."""
    return sorted(entries, key=lambda e: (not e.is_directory, e.name))


def build_breadcrumbs(repo_name: str, relative_path: str, is_directory: bool) -> list[Breadcrumb]:
    """Trail from the repository root to ``relative_path``.

    The last crumb is inert and bold; every crumb before it links somewhere.
    """
    if not relative_path:
        return [Breadcrumb(name=repo_name, url="", bold=True, is_directory=True)]

    crumbs = [Breadcrumb(name=repo_name, url=repo_url(repo_name), bold=True, is_directory=True)]
    segments = relative_path.split("/")
    for index, segment in enumerate(segments):
        is_last = index == len(segments) - 1
        cumulative = "/".join(segments[: index + 1])
        crumbs.append(
            Breadcrumb(
                name=segment,
                url="" if is_last else repo_url(repo_name, cumulative),
                bold=is_last,
                is_directory=is_directory if is_last else True,
            )
        )
    return crumbs


class PathResolver:
    """Maps (repository, raw path) onto a confined local location."""

    def __init__(self, storage_root: Path, classifier: ContentClassifier) -> None:
        self._storage_root = Path(storage_root)
        self._classifier = classifier

    def locate(self, registry: RepositoryRegistry, repo_name: str, raw_path: str) -> PathResolution:
        """Canonicalize, confine and stat a path without listing or classifying it."""
        repo = registry.get(repo_name)
        if repo is None:
            raise NotFoundError(
                f"Repository not found: {repo_name}",
                details={"repo": repo_name},
            )

        relative_path = canonicalize(raw_path)
        root = repo.browse_root(self._storage_root)
        absolute_path = confine(root, relative_path)

        try:
            is_directory = stat.S_ISDIR(absolute_path.stat().st_mode)
        except (FileNotFoundError, NotADirectoryError) as e:
            raise NotFoundError(
                f"Path not found: {relative_path}",
                details={"repo": repo_name, "path": relative_path},
            ) from e
        except OSError as e:
            raise InternalError(
                f"Failed to stat {relative_path or '/'}: {e}",
                details={"repo": repo_name, "path": relative_path},
            ) from e

        self._check_symlinks(root, absolute_path, repo_name, relative_path)

        return PathResolution(
            repository_name=repo_name,
            relative_path=relative_path,
            absolute_path=absolute_path,
            is_directory=is_directory,
        )

    def resolve(
        self,
        registry: RepositoryRegistry,
        repo_name: str,
        raw_path: str = "",
        force_raw: bool = False,
    ) -> BrowseResult:
        """Resolve a request into a listing or a file classification.

        Raises:
            NotFoundError: unknown repository, missing path or a path that
                would leave the repository's browsable root.
            InternalError: any other filesystem failure.
        """
        resolution = self.locate(registry, repo_name, raw_path)
        breadcrumbs = build_breadcrumbs(
            repo_name, resolution.relative_path, resolution.is_directory
        )

        if resolution.is_directory:
            return BrowseResult(
                resolution=resolution,
                breadcrumbs=breadcrumbs,
                entries=self.list_directory(resolution),
                classification=Classification(presentation=Presentation.DIRECTORY),
            )

        extension = file_extension(resolution.absolute_path.name)
        return BrowseResult(
            resolution=resolution,
            breadcrumbs=breadcrumbs,
            classification=self._classifier.classify(extension, force_raw),
        )

    def list_directory(self, resolution: PathResolution) -> list[DirectoryEntry]:
        entries = []
        try:
            with os.scandir(resolution.absolute_path) as it:
                for child in it:
                    is_directory = child.is_dir()
                    if is_directory and child.name in HIDDEN_DIRECTORIES:
                        continue
                    child_path = (
                        f"{resolution.relative_path}/{child.name}"
                        if resolution.relative_path
                        else child.name
                    )
                    entries.append(
                        DirectoryEntry(
                            name=child.name,
                            url=repo_url(resolution.repository_name, child_path),
                            is_directory=is_directory,
                        )
                    )
        except OSError as e:
            raise InternalError(
                f"Failed to list {resolution.relative_path or '/'}: {e}",
                details={
                    "repo": resolution.repository_name,
                    "path": resolution.relative_path,
                },
            ) from e
        return sort_entries(entries)

    @staticmethod
    def _check_symlinks(root: Path, absolute_path: Path, repo_name: str, relative_path: str) -> None:
        """Reject symlinks inside the clone that point outside the browsable root."""
        real_root = root.resolve()
        real_path = absolute_path.resolve()
        if real_path != real_root and real_root not in real_path.parents:
            logger.warning(
                "Symlink escapes repository root",
                repo=repo_name,
                path=relative_path,
            )
            raise NotFoundError(
                f"Path not found: {relative_path}",
                details={"repo": repo_name, "path": relative_path},
            )
