"""Clone-or-pull synchronization of configured repositories using subprocess."""

import base64
import os
import shutil
import subprocess
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import structlog

from repo_viewer.core.exceptions import SyncError
from repo_viewer.core.models.repository import (
    Credential,
    RepositoryDefinition,
    RepositoryRegistry,
    SyncOutcome,
    SyncResult,
)

logger = structlog.get_logger(__name__)


def auth_header(credential: Credential) -> str:
    """HTTP basic auth header passed to git through ``-c``, never stored."""
    token = f"{credential.username}:{credential.password.get_secret_value()}"
    encoded = base64.b64encode(token.encode("utf-8")).decode("ascii")
    return f"Authorization: Basic {encoded}"


class GitSyncEngine:
    """Keeps a shallow local copy of every configured repository up to date.

    Uses subprocess + git CLI directly (no gitpython dependency). Each
    repository owns a disjoint directory under ``storage_root`` so several
    can be synchronized in parallel.
    """

    def __init__(
        self,
        storage_root: Path,
        timeout: float = 300.0,
        max_workers: int = 4,
    ) -> None:
        self._storage_root = Path(storage_root)
        self._timeout = timeout
        self._max_workers = max_workers

    @property
    def storage_root(self) -> Path:
        return self._storage_root

    def _run_git(
        self,
        *args: str,
        cwd: Path | None = None,
        credential: Credential | None = None,
        timeout: float | None = None,
    ) -> str:
        """Run a git command and return stdout."""
        command = ["git"]
        if credential is not None:
            command += ["-c", f"http.extraHeader={auth_header(credential)}"]
        command += args

        try:
            result = subprocess.run(
                command,
                cwd=cwd,
                capture_output=True,
                text=True,
                check=True,
                timeout=timeout or self._timeout,
                env={**os.environ, "GIT_TERMINAL_PROMPT": "0"},
            )
        except subprocess.CalledProcessError as e:
            raise SyncError(
                f"git {args[0]} failed: {e.stderr.strip() or f'exit status {e.returncode}'}",
                details={"operation": args[0], "returncode": e.returncode},
            ) from e
        except subprocess.TimeoutExpired as e:
            raise SyncError(
                f"git {args[0]} timed out after {e.timeout:.0f}s",
                details={"operation": args[0]},
            ) from e
        except FileNotFoundError as e:
            raise SyncError("git executable not found", details={"operation": args[0]}) from e
        return result.stdout.strip()

    @staticmethod
    def is_cloned(local_root: Path) -> bool:
        """A repository counts as cloned once its git metadata exists."""
        return (local_root / ".git").exists()

    def sync_one(
        self,
        repo: RepositoryDefinition,
        credential: Credential | None = None,
        timeout: float | None = None,
    ) -> SyncResult:
        """Clone ``repo`` if absent, otherwise pull it.

        Raises:
            SyncError: on any clone or pull failure, including timeouts.
        """
        local_root = repo.local_root(self._storage_root)
        try:
            if not self.is_cloned(local_root):
                return self._clone(repo, local_root, credential, timeout)
            return self._pull(repo, local_root, credential, timeout)
        except SyncError as e:
            e.details.setdefault("repo", repo.name)
            raise
        except OSError as e:
            raise SyncError(
                f"Failed to prepare {local_root}: {e}",
                details={"repo": repo.name},
            ) from e
        except (ValueError, UnicodeError) as e:
            # NUL bytes in arguments, undecodable git output
            raise SyncError(
                f"git invocation failed: {e}",
                details={"repo": repo.name},
            ) from e

    def _clone(
        self,
        repo: RepositoryDefinition,
        local_root: Path,
        credential: Credential | None,
        timeout: float | None,
    ) -> SyncResult:
        if local_root.exists():
            # Leftover from an interrupted clone
            logger.warning("Removing directory without git metadata", repo=repo.name, path=str(local_root))
            shutil.rmtree(local_root)
        local_root.parent.mkdir(parents=True, exist_ok=True)

        self._run_git(
            "clone", "--depth", "1", "--", repo.url, str(local_root),
            credential=credential,
            timeout=timeout,
        )
        commit = self._run_git("rev-parse", "HEAD", cwd=local_root)
        logger.info("Repository cloned", repo=repo.name, url=repo.url, commit=commit[:12])
        return SyncResult(repo_name=repo.name, outcome=SyncOutcome.CLONED, commit=commit)

    def _pull(
        self,
        repo: RepositoryDefinition,
        local_root: Path,
        credential: Credential | None,
        timeout: float | None,
    ) -> SyncResult:
        before = self._run_git("rev-parse", "HEAD", cwd=local_root)
        self._run_git(
            "pull", "--ff-only", "origin",
            cwd=local_root,
            credential=credential,
            timeout=timeout,
        )
        after = self._run_git("rev-parse", "HEAD", cwd=local_root)

        if before == after:
            logger.debug("Repository already up to date", repo=repo.name, commit=after[:12])
            return SyncResult(repo_name=repo.name, outcome=SyncOutcome.UP_TO_DATE, commit=after)

        logger.info(
            "Repository updated",
            repo=repo.name,
            previous=before[:12],
            commit=after[:12],
        )
        return SyncResult(repo_name=repo.name, outcome=SyncOutcome.UPDATED, commit=after)

    def sync_all(self, registry: RepositoryRegistry) -> list[SyncResult]:
        """Synchronize every repository; one failure never stops the others.

        Results come back in repository-name order.
        """
        repos = [registry.repositories[name] for name in registry.names]
        if not repos:
            return []

        def _sync(repo: RepositoryDefinition) -> SyncResult:
            try:
                return self.sync_one(repo, registry.credential_for(repo.host))
            except SyncError as e:
                logger.error(
                    "Repository sync failed",
                    repo=repo.name,
                    operation=e.details.get("operation"),
                    error=e.message,
                )
                return SyncResult(repo_name=repo.name, outcome=SyncOutcome.FAILED, error=e.message)
            except Exception as e:
                logger.exception("Repository sync crashed", repo=repo.name)
                return SyncResult(repo_name=repo.name, outcome=SyncOutcome.FAILED, error=str(e))

        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(repos))) as pool:
            results = list(pool.map(_sync, repos))

        failed = sum(1 for r in results if not r.ok)
        logger.info("Sync cycle complete", repos=len(results), failed=failed)
        return results
