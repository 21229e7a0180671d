"""Repo Viewer: mirrors remote git repositories and serves them read-only."""

__version__ = "0.1.0"
