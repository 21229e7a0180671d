"""Domain exceptions for Repo Viewer."""


class RepoViewerError(Exception):
    """Base exception for all Repo Viewer errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(RepoViewerError):
    """Raised when the repository configuration is missing or malformed.

    Fatal to a single refresh cycle only; the previous registry stays live.
    """


class SyncError(RepoViewerError):
    """Raised when cloning or pulling a single repository fails."""


class NotFoundError(RepoViewerError):
    """Raised for unknown repositories, missing paths or out-of-bounds paths."""


class InternalError(RepoViewerError):
    """Raised on unexpected filesystem failures while serving content."""
