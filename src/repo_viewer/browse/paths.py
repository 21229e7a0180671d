"""Lexical path canonicalization for untrusted request paths.

Nothing here touches the filesystem.
"""

from pathlib import Path

from repo_viewer.core.exceptions import NotFoundError


def canonical_segments(raw_path: str) -> list[str] | None:
    """Resolve ``.`` and ``..`` segments of ``raw_path``.

    Backslashes are treated as separators. Returns ``None`` when a ``..``
    would climb above the starting point.
    """
    segments: list[str] = []
    for segment in raw_path.replace("\\", "/").split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if not segments:
                return None
            segments.pop()
            continue
        segments.append(segment)
    return segments


def canonicalize(raw_path: str) -> str:
    """Return the canonical relative form of ``raw_path`` ("" for the root).

    Raises:
        NotFoundError: if the path escapes its root.
    """
    segments = canonical_segments(raw_path)
    if segments is None or any("\x00" in s for s in segments):
        raise NotFoundError(
            f"Path not found: {raw_path}",
            details={"path": raw_path},
        )
    return "/".join(segments)


def confine(root: Path, relative_path: str) -> Path:
    """Join a canonical relative path onto ``root`` and check the boundary.

    Raises:
        NotFoundError: if the joined path is not ``root`` or a descendant of it.
    """
    parts = relative_path.split("/") if relative_path else []
    candidate = root.joinpath(*parts)
    if any(part in ("", ".", "..") for part in parts) or (
        candidate != root and root not in candidate.parents
    ):
        raise NotFoundError(
            f"Path not found: {relative_path}",
            details={"path": relative_path},
        )
    return candidate
