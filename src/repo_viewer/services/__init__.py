"""Business logic services for Repo Viewer."""

from repo_viewer.services.browsing import BrowsingService
from repo_viewer.services.refresh import RefreshService, RegistryHolder

__all__ = [
    "BrowsingService",
    "RefreshService",
    "RegistryHolder",
]
