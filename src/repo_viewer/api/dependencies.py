"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from repo_viewer.config import Settings, get_settings
from repo_viewer.services.browsing import BrowsingService
from repo_viewer.services.refresh import RefreshService


def create_services(settings: Settings) -> tuple[BrowsingService, RefreshService]:
    """Wire the browsing and refresh services around one shared registry holder."""
    from repo_viewer.browse.classifier import ContentClassifier
    from repo_viewer.browse.languages import load_language_map
    from repo_viewer.browse.resolver import PathResolver
    from repo_viewer.git.sync import GitSyncEngine
    from repo_viewer.registry.store import ConfigStore
    from repo_viewer.services.refresh import RegistryHolder

    holder = RegistryHolder()
    classifier = ContentClassifier(load_language_map(settings.languages_file))
    resolver = PathResolver(settings.storage_root, classifier)

    store = ConfigStore(settings.config_file, default_host=settings.default_host)
    engine = GitSyncEngine(
        settings.storage_root,
        timeout=settings.sync_timeout,
        max_workers=settings.sync_workers,
    )

    return (
        BrowsingService(resolver=resolver, holder=holder),
        RefreshService(store=store, engine=engine, holder=holder),
    )


def get_browsing_service(request: Request) -> BrowsingService:
    """Get the browsing service from app state."""
    state = request.app.state
    if hasattr(state, "browsing_service"):
        return state.browsing_service

    # Initialize on first request when the lifespan did not run
    state.browsing_service, state.refresh_service = create_services(get_settings())
    return state.browsing_service


# Type aliases for dependency injection
BrowsingServiceDep = Annotated[BrowsingService, Depends(get_browsing_service)]
