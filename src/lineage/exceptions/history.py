"""History resolution exceptions.

Three families, matching how the resolver treats them:

- :class:`InvalidInputError`: the request itself is unusable (no such file,
  malformed revision). Never triggers a fallback.
- :class:`NoHistoryError`: the backend is not applicable to this path (tool
  missing, not a repository, untracked). The resolver moves on.
- :class:`BackendError`: the tool ran and failed for some other reason.
  Surfaced once every backend has been tried.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from lineage.exceptions.base import LineageError


class InvalidInputError(LineageError):
    """Base exception for requests that no backend could satisfy."""

    pass


class InvalidPathError(InvalidInputError):
    """Path is not an existing regular file or has no parent directory.

    Attributes:
        message: Human-readable error message.
        path: The offending path.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = path
        super().__init__(message)


class InvalidRevisionError(InvalidInputError):
    """Revision identifier has the wrong format for its provider.

    Attributes:
        message: Human-readable error message.
        revision: The rejected revision identifier.
    """

    def __init__(self, message: str, revision: str | None = None) -> None:
        self.revision = revision
        super().__init__(message)


class BackendError(LineageError):
    """A backend tool ran and failed.

    Attributes:
        message: Human-readable error message (usually the tool's stderr).
        provider: Provider value of the backend that failed (``"git"``...).
        stderr: Raw stderr from the tool, when there was one.
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        stderr: str | None = None,
    ) -> None:
        self.provider = provider
        self.stderr = stderr
        super().__init__(message)


class NoHistoryError(BackendError):
    """The backend has no usable history for the path."""

    pass


class ToolNotFoundError(NoHistoryError):
    """The backend's CLI is not on the execution path.

    Attributes:
        executable: Name of the missing executable.
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        executable: str | None = None,
    ) -> None:
        self.executable = executable
        super().__init__(message, provider=provider)


class NotARepositoryError(NoHistoryError):
    """No repository or working copy root could be resolved."""

    pass


class OutsideRepositoryError(NoHistoryError):
    """The path lies outside the resolved repository root.

    Attributes:
        path: The queried path.
        repo_root: The root it was expected to be under.
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        path: Path | str | None = None,
        repo_root: Path | str | None = None,
    ) -> None:
        self.path = path
        self.repo_root = repo_root
        super().__init__(message, provider=provider)


class NotTrackedError(NoHistoryError):
    """The path exists inside the repository but is not tracked."""

    pass


class HistoryResolutionError(LineageError):
    """Every backend failed and at least one failure was operational.

    Attributes:
        message: ``"<provider>: <error>"`` for each backend, one per line.
        failures: ``(provider, error)`` pairs in trial order.
    """

    def __init__(
        self,
        failures: Sequence[tuple[str, BackendError]],
    ) -> None:
        self.failures = tuple(failures)
        message = "\n".join(
            f"{provider}: {error.message}" for provider, error in self.failures
        )
        super().__init__(message)


__all__ = [
    "BackendError",
    "HistoryResolutionError",
    "InvalidInputError",
    "InvalidPathError",
    "InvalidRevisionError",
    "NoHistoryError",
    "NotARepositoryError",
    "NotTrackedError",
    "OutsideRepositoryError",
    "ToolNotFoundError",
]
