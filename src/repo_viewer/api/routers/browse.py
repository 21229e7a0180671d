"""Repository browsing endpoints."""

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import FileResponse
from pydantic import BaseModel, Field

from repo_viewer.api.dependencies import BrowsingServiceDep
from repo_viewer.browse.resolver import repo_url
from repo_viewer.core.exceptions import InternalError, NotFoundError
from repo_viewer.core.models.browse import (
    Breadcrumb,
    BrowseResult,
    DirectoryEntry,
    Presentation,
)
from repo_viewer.services.browsing import BrowsingService

router = APIRouter()


# --- Response models ---

class RepositoryListResponse(BaseModel):
    """Configured repositories."""

    repositories: list[str]


class BrowseResponse(BaseModel):
    """A directory listing or a file preview, ready for a renderer."""

    path: str
    presentation: Presentation
    breadcrumbs: list[Breadcrumb]
    entries: list[DirectoryEntry] = Field(default_factory=list)
    language: str | None = None
    content: str | None = None
    image_url: str | None = None


def _to_response(service: BrowsingService, result: BrowseResult) -> BrowseResponse | FileResponse:
    resolution = result.resolution
    if result.presentation == Presentation.RAW:
        return FileResponse(resolution.absolute_path)

    response = BrowseResponse(
        path="/".join(p for p in (resolution.repository_name, resolution.relative_path) if p),
        presentation=result.presentation,
        breadcrumbs=result.breadcrumbs,
        entries=result.entries,
    )
    if result.presentation == Presentation.IMAGE:
        response.image_url = repo_url(resolution.repository_name, resolution.relative_path) + "?raw=true"
    elif result.presentation == Presentation.TEXT:
        response.language = result.classification.language
        response.content = service.read_text(resolution)
    return response


def _browse(service: BrowsingService, repo: str, path: str, raw: bool) -> BrowseResponse | FileResponse:
    try:
        return _to_response(service, service.browse(repo, path, raw=raw))
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Not Found",
        )
    except InternalError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message,
        )


# --- Endpoints ---

@router.get("/", response_model=RepositoryListResponse)
def list_repositories(service: BrowsingServiceDep) -> RepositoryListResponse:
    """List configured repositories."""
    return RepositoryListResponse(repositories=service.list_repositories())


@router.get("/{repo}", response_model=None)
def browse_root(repo: str, service: BrowsingServiceDep, raw: str = "false"):
    """Directory listing at the repository root."""
    return _browse(service, repo, "", raw == "true")


@router.get("/{repo}/{path:path}", response_model=None)
def browse_path(repo: str, path: str, service: BrowsingServiceDep, raw: str = "false"):
    """Listing, preview or raw bytes for a path inside a repository."""
    return _browse(service, repo, path, raw == "true")
