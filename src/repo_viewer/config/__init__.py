"""Configuration for Repo Viewer."""

from repo_viewer.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
