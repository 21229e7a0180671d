"""Git integration module for Repo Viewer."""

from repo_viewer.git.sync import GitSyncEngine

__all__ = ["GitSyncEngine"]
