"""History resolution across git, Perforce and Subversion.

The resolver tries each backend in a fixed order and returns the first
history it gets. Backends that do not apply to the path (tool missing, not a
repository, untracked) are skipped; an invalid path stops the search at
once. If nothing applies, the result is an empty ``provider="none"``
history. If some backend failed for any other reason, every failure is
reported together.

Example:
    ```python
    from lineage import HistoryResolver

    resolver = HistoryResolver()
    result = resolver.resolve("/work/project/src/main.c")
    for entry in result.entries:
        print(entry.display_id, entry.author, entry.summary)

    newest = result.entries[0]
    data = resolver.fetch_entry_content(newest, result, "/work/project/src/main.c")
    ```
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, cast

from lineage.config import LineageConfig
from lineage.exceptions import BackendError, HistoryResolutionError
from lineage.logging import get_logger
from lineage.runners.command import CommandRunner
from lineage.vcs.factory import create_backend, create_backends
from lineage.vcs.models import HistoryEntry, HistoryResult, Provider

if TYPE_CHECKING:
    from lineage.git.backend import GitBackend
    from lineage.p4.backend import P4Backend
    from lineage.svn.backend import SvnBackend
    from lineage.vcs.protocol import HistoryBackend

__all__ = [
    "AsyncHistoryResolver",
    "HistoryResolver",
    "fetch_git_content",
    "fetch_p4_content",
    "fetch_svn_content",
    "resolve_history",
]

logger = get_logger(__name__)


class HistoryResolver:
    """Resolve a file's history from whichever VCS tracks it.

    Stateless between calls: every :meth:`resolve` starts from scratch and
    nothing is cached.

    Args:
        config: Loaded configuration. Defaults to ``LineageConfig()``.
        runner: Runner shared by the p4 and svn backends.
        backends: Backends in trial order. Defaults to git, p4, svn.
    """

    def __init__(
        self,
        config: LineageConfig | None = None,
        *,
        runner: CommandRunner | None = None,
        backends: Sequence[HistoryBackend] | None = None,
    ) -> None:
        self._config = config or LineageConfig()
        self._runner = runner or CommandRunner()
        if backends is None:
            backends = create_backends(self._config, self._runner)
        self._backends = tuple(backends)
        self._by_provider: dict[Provider, HistoryBackend] = {
            backend.provider: backend for backend in self._backends
        }

    @property
    def backends(self) -> tuple[HistoryBackend, ...]:
        """Backends in trial order."""
        return self._backends

    def _backend_for(self, provider: Provider) -> HistoryBackend:
        backend = self._by_provider.get(provider)
        if backend is None:
            backend = create_backend(provider, self._config, self._runner)
            self._by_provider[provider] = backend
        return backend

    # -----------------------------------------------------------------
    # History
    # -----------------------------------------------------------------

    def resolve(self, path: Path | str) -> HistoryResult:
        """Return the history of the file at *path*.

        Args:
            path: Absolute path of a file on disk.

        Returns:
            The first backend's history, or an empty ``Provider.NONE``
            result when no backend applies.

        Raises:
            InvalidInputError: If *path* is not an existing file.
            HistoryResolutionError: If every backend failed and at least one
                failure was not a "no history here" condition.
        """
        failures: list[tuple[HistoryBackend, BackendError]] = []
        for backend in self._backends:
            provider = backend.provider.value
            try:
                result = backend.history(path)
            except BackendError as e:
                logger.debug("backend_skipped", provider=provider, error=e.message)
                failures.append((backend, e))
                continue
            logger.info(
                "history_resolved",
                provider=provider,
                path=str(path),
                entries=len(result.entries),
            )
            return result

        soft = [backend.is_no_history(error) for backend, error in failures]
        if all(soft):
            logger.info("history_not_tracked", path=str(path))
            return HistoryResult.empty(Path(path).name)

        error = HistoryResolutionError(
            [(backend.provider.value, err) for backend, err in failures]
        )
        logger.warning("history_resolution_failed", path=str(path), error=error.message)
        raise error

    # -----------------------------------------------------------------
    # Content
    # -----------------------------------------------------------------

    def fetch_git_content(
        self, repo_root: Path | str, revision_id: str, path: str
    ) -> str:
        """Text of repository-relative *path* at commit *revision_id*."""
        backend = cast("GitBackend", self._backend_for(Provider.GIT))
        return backend.content(repo_root, revision_id, path)

    def fetch_p4_content(
        self, path: str, revision_id: str, working_path: Path | str
    ) -> bytes:
        """Bytes of *path* as submitted in change *revision_id*."""
        backend = cast("P4Backend", self._backend_for(Provider.P4))
        return backend.content(path, revision_id, working_path)

    def fetch_svn_content(self, revision_id: str, working_path: Path | str) -> bytes:
        """Bytes of *working_path* as of revision *revision_id*."""
        backend = cast("SvnBackend", self._backend_for(Provider.SVN))
        return backend.content(revision_id, working_path)

    def fetch_entry_content(
        self,
        entry: HistoryEntry,
        result: HistoryResult,
        working_path: Path | str,
    ) -> bytes:
        """Content recorded by *entry*, from the provider that produced it.

        Args:
            entry: An entry of *result*.
            result: The history the entry came from (git needs its root).
            working_path: The local file the history was resolved for.

        Raises:
            ValueError: If *entry* has no backing provider.
        """
        if entry.provider is Provider.NONE:
            raise ValueError("Entry has no provider to fetch content from")
        backend = self._backend_for(entry.provider)
        return backend.entry_content(entry, result, working_path)


class AsyncHistoryResolver:
    """Async wrapper for HistoryResolver.

    Delegates every call to a synchronous HistoryResolver running in a
    worker thread, so event-loop callers stay responsive while the VCS
    tools run.

    Example:
        ```python
        resolver = AsyncHistoryResolver()
        result = await resolver.resolve("/work/project/src/main.c")
        ```
    """

    def __init__(
        self,
        config: LineageConfig | None = None,
        *,
        resolver: HistoryResolver | None = None,
    ) -> None:
        self._sync = resolver or HistoryResolver(config)

    async def resolve(self, path: Path | str) -> HistoryResult:
        """Resolve history in a worker thread."""
        return await asyncio.to_thread(self._sync.resolve, path)

    async def fetch_git_content(
        self, repo_root: Path | str, revision_id: str, path: str
    ) -> str:
        return await asyncio.to_thread(
            self._sync.fetch_git_content, repo_root, revision_id, path
        )

    async def fetch_p4_content(
        self, path: str, revision_id: str, working_path: Path | str
    ) -> bytes:
        return await asyncio.to_thread(
            self._sync.fetch_p4_content, path, revision_id, working_path
        )

    async def fetch_svn_content(
        self, revision_id: str, working_path: Path | str
    ) -> bytes:
        return await asyncio.to_thread(
            self._sync.fetch_svn_content, revision_id, working_path
        )

    async def fetch_entry_content(
        self,
        entry: HistoryEntry,
        result: HistoryResult,
        working_path: Path | str,
    ) -> bytes:
        return await asyncio.to_thread(
            self._sync.fetch_entry_content, entry, result, working_path
        )


# =============================================================================
# Module-level convenience functions
# =============================================================================


def resolve_history(
    path: Path | str, config: LineageConfig | None = None
) -> HistoryResult:
    """Resolve the history of *path* with a fresh :class:`HistoryResolver`."""
    return HistoryResolver(config).resolve(path)


def fetch_git_content(
    repo_root: Path | str,
    revision_id: str,
    path: str,
    config: LineageConfig | None = None,
) -> str:
    """Text of *path* at git commit *revision_id* under *repo_root*."""
    return HistoryResolver(config).fetch_git_content(repo_root, revision_id, path)


def fetch_p4_content(
    path: str,
    revision_id: str,
    working_path: Path | str,
    config: LineageConfig | None = None,
) -> bytes:
    """Bytes of p4 *path* at change *revision_id*."""
    return HistoryResolver(config).fetch_p4_content(path, revision_id, working_path)


def fetch_svn_content(
    revision_id: str,
    working_path: Path | str,
    config: LineageConfig | None = None,
) -> bytes:
    """Bytes of svn *working_path* at revision *revision_id*."""
    return HistoryResolver(config).fetch_svn_content(revision_id, working_path)
