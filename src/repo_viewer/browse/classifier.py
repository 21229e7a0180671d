"""Decides how a file is presented."""

from collections.abc import Mapping

from repo_viewer.core.models.browse import Classification, Presentation

IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "svg", "gif"})


def file_extension(name: str) -> str:
    """Extension after the last dot, without the dot ("" if none)."""
    _, dot, extension = name.rpartition(".")
    return extension if dot else ""


class ContentClassifier:
    """Maps a file extension to image, highlighted text, or raw bytes."""

    def __init__(self, languages: Mapping[str, str] | None = None) -> None:
        self._languages = dict(languages or {})

    def classify(self, extension: str, force_raw: bool = False) -> Classification:
        if force_raw:
            return Classification(presentation=Presentation.RAW)
        if extension in IMAGE_EXTENSIONS:
            return Classification(presentation=Presentation.IMAGE)
        language = self._languages.get(extension)
        if language is not None:
            return Classification(presentation=Presentation.TEXT, language=language)
        return Classification(presentation=Presentation.RAW)
