"""Periodic config reload and repository synchronization."""

import asyncio
from datetime import datetime, timezone

import structlog

from repo_viewer.core.exceptions import ConfigError
from repo_viewer.core.models.repository import RepositoryRegistry, SyncResult
from repo_viewer.git.sync import GitSyncEngine
from repo_viewer.registry.store import ConfigStore

logger = structlog.get_logger(__name__)


class RegistryHolder:
    """Publishes the current registry snapshot.

    Replacement is a single reference assignment, so readers always see
    either the old or the new snapshot in full and never wait on a refresh.
    """

    def __init__(self, registry: RepositoryRegistry | None = None) -> None:
        self._registry = registry or RepositoryRegistry()

    @property
    def current(self) -> RepositoryRegistry:
        return self._registry

    def publish(self, registry: RepositoryRegistry) -> None:
        self._registry = registry


class RefreshService:
    """Runs the load + sync cycle once or on a fixed interval."""

    def __init__(
        self,
        store: ConfigStore,
        engine: GitSyncEngine,
        holder: RegistryHolder,
    ) -> None:
        self._store = store
        self._engine = engine
        self._holder = holder
        self._last_results: list[SyncResult] = []
        self._last_refresh: datetime | None = None

    @property
    def last_results(self) -> list[SyncResult]:
        return list(self._last_results)

    @property
    def last_refresh(self) -> datetime | None:
        return self._last_refresh

    def reload_config(self) -> RepositoryRegistry:
        """Load the config and publish it; the old snapshot survives a ConfigError."""
        try:
            registry = self._store.load()
        except ConfigError as e:
            logger.error(
                "Config reload failed, keeping previous registry",
                error=e.message,
                previous_loaded_at=self._holder.current.loaded_at.isoformat(),
                **e.details,
            )
            return self._holder.current
        self._holder.publish(registry)
        return registry

    def refresh(self) -> list[SyncResult]:
        """One full cycle: reload config, then sync every repository."""
        registry = self.reload_config()
        results = self._engine.sync_all(registry)
        self._last_results = results
        self._last_refresh = datetime.now(timezone.utc)
        return results

    async def run_periodic(self, interval: float) -> None:
        """Refresh now and then every ``interval`` seconds until cancelled."""
        while True:
            try:
                await asyncio.to_thread(self.refresh)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Refresh cycle crashed")
            await asyncio.sleep(interval)
