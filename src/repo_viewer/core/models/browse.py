"""Models produced when browsing a repository."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class Presentation(str, Enum):
    """How a resolved location is presented."""

    DIRECTORY = "directory"
    IMAGE = "image"
    TEXT = "text"
    RAW = "raw"


class Classification(BaseModel):
    """Presentation decision for a file."""

    presentation: Presentation
    language: str | None = None  # only set for TEXT

    class Config:
        frozen = True


class PathResolution(BaseModel):
    """A request path confined to a repository's browsable root."""

    repository_name: str
    relative_path: str  # canonical, "" for the root
    absolute_path: Path
    is_directory: bool

    @property
    def is_root(self) -> bool:
        return self.relative_path == ""


class Breadcrumb(BaseModel):
    """One link in the trail from the repository root to the current node."""

    name: str
    url: str = ""  # empty when inert
    bold: bool = False
    is_directory: bool = False


class DirectoryEntry(BaseModel):
    """An immediate child of a browsed directory."""

    name: str
    url: str
    is_directory: bool


class BrowseResult(BaseModel):
    """Everything a renderer needs for one browsed location."""

    resolution: PathResolution
    breadcrumbs: list[Breadcrumb]
    entries: list[DirectoryEntry] = Field(default_factory=list)
    classification: Classification

    @property
    def presentation(self) -> Presentation:
        return self.classification.presentation
