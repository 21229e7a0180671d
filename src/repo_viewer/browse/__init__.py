"""Path confinement, content classification and directory listing."""

from repo_viewer.browse.classifier import ContentClassifier
from repo_viewer.browse.languages import load_language_map
from repo_viewer.browse.paths import canonicalize, confine
from repo_viewer.browse.resolver import PathResolver

__all__ = [
    "ContentClassifier",
    "PathResolver",
    "canonicalize",
    "confine",
    "load_language_map",
]
