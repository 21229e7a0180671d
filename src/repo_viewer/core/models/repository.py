"""Repository configuration models."""

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, SecretStr


class Credential(BaseModel):
    """HTTP credentials for a single remote host."""

    host: str
    username: str
    password: SecretStr = SecretStr("")

    class Config:
        frozen = True


class RepositoryDefinition(BaseModel):
    """A configured repository with its normalized remote location."""

    name: str
    raw_url: str
    url: str  # normalized, e.g. https://github.com/org/repo
    scheme: str
    host: str
    path: str  # remote path without the leading slash
    subdirectory: str = ""  # canonical, "" for the clone root

    class Config:
        frozen = True

    def local_root(self, storage_root: Path) -> Path:
        """Where the clone lives: storage_root/host/path."""
        return Path(storage_root) / self.host / self.path

    def browse_root(self, storage_root: Path) -> Path:
        """Root of what may be browsed inside the clone."""
        root = self.local_root(storage_root)
        return root / self.subdirectory if self.subdirectory else root


class RepositoryRegistry(BaseModel):
    """Immutable snapshot of every configured repository and credential.

    A refresh builds a new registry; nothing mutates one after it is published.
    """

    repositories: dict[str, RepositoryDefinition] = Field(default_factory=dict)
    credentials: dict[str, Credential] = Field(default_factory=dict)
    loaded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        frozen = True

    def get(self, name: str) -> RepositoryDefinition | None:
        return self.repositories.get(name)

    def credential_for(self, host: str) -> Credential | None:
        return self.credentials.get(host)

    @property
    def names(self) -> list[str]:
        return sorted(self.repositories)


class SyncOutcome(str, Enum):
    """Result of synchronizing one repository."""

    CLONED = "cloned"
    UPDATED = "updated"
    UP_TO_DATE = "up_to_date"
    FAILED = "failed"


class SyncResult(BaseModel):
    """Outcome of a single clone-or-pull."""

    repo_name: str
    outcome: SyncOutcome
    commit: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome != SyncOutcome.FAILED
