"""Browsing service."""

from repo_viewer.browse.resolver import PathResolver
from repo_viewer.core.exceptions import InternalError
from repo_viewer.core.models.browse import BrowseResult, PathResolution
from repo_viewer.services.refresh import RegistryHolder


class BrowsingService:
    """Service for read-only access to synchronized repositories."""

    def __init__(self, resolver: PathResolver, holder: RegistryHolder) -> None:
        self._resolver = resolver
        self._holder = holder

    def list_repositories(self) -> list[str]:
        return self._holder.current.names

    def browse(self, repo_name: str, path: str = "", raw: bool = False) -> BrowseResult:
        """Resolve a request against the registry snapshot taken right now."""
        registry = self._holder.current
        return self._resolver.resolve(registry, repo_name, path, force_raw=raw)

    @staticmethod
    def read_text(resolution: PathResolution) -> str:
        """File content for previews; undecodable bytes are replaced."""
        try:
            return resolution.absolute_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise InternalError(
                f"Failed to read {resolution.relative_path}: {e}",
                details={
                    "repo": resolution.repository_name,
                    "path": resolution.relative_path,
                },
            ) from e
