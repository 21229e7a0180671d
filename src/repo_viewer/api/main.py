"""FastAPI application factory."""

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from repo_viewer import __version__
from repo_viewer.api.dependencies import create_services
from repo_viewer.api.routers import browse
from repo_viewer.config import get_settings
from repo_viewer.config.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Starts the background refresh loop, which loads the config and syncs
    every repository immediately and then once per interval.
    """
    settings = get_settings()
    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.is_production,
    )

    app.state.browsing_service, app.state.refresh_service = create_services(settings)
    refresh_task = asyncio.create_task(
        app.state.refresh_service.run_periodic(settings.refresh_interval)
    )

    yield

    # Cleanup
    refresh_task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await refresh_task


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Repo Viewer",
        description="Read-only browser for mirrored git repositories",
        version=__version__,
        # Every top-level path segment is a repository name
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    # Static assets take precedence over repository names
    if settings.static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")

    app.include_router(browse.router, tags=["Browse"])

    return app


def run() -> None:
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "repo_viewer.api.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
    )


if __name__ == "__main__":
    run()
