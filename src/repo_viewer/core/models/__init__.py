"""Domain models for Repo Viewer."""

from repo_viewer.core.models.browse import (
    Breadcrumb,
    BrowseResult,
    Classification,
    DirectoryEntry,
    PathResolution,
    Presentation,
)
from repo_viewer.core.models.repository import (
    Credential,
    RepositoryDefinition,
    RepositoryRegistry,
    SyncOutcome,
    SyncResult,
)

__all__ = [
    "Credential",
    "RepositoryDefinition",
    "RepositoryRegistry",
    "SyncOutcome",
    "SyncResult",
    "Presentation",
    "Classification",
    "PathResolution",
    "Breadcrumb",
    "DirectoryEntry",
    "BrowseResult",
]
