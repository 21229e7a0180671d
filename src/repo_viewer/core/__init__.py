"""Core domain models and exceptions for Repo Viewer."""

from repo_viewer.core.exceptions import (
    ConfigError,
    InternalError,
    NotFoundError,
    RepoViewerError,
    SyncError,
)
from repo_viewer.core.models import (
    Breadcrumb,
    BrowseResult,
    Classification,
    Credential,
    DirectoryEntry,
    PathResolution,
    Presentation,
    RepositoryDefinition,
    RepositoryRegistry,
    SyncOutcome,
    SyncResult,
)

__all__ = [
    # Models
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
    # Exceptions
    "RepoViewerError",
    "ConfigError",
    "SyncError",
    "NotFoundError",
    "InternalError",
]
