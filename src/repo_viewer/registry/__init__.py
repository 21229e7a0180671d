"""Repository registry loading and URL normalization."""

from repo_viewer.registry.store import ConfigStore, normalize_url

__all__ = ["ConfigStore", "normalize_url"]
