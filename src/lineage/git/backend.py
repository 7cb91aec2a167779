"""Git history backend built on GitPython's command wrapper.

GitPython's :class:`git.cmd.Git` runs the ``git`` CLI for us and reports a
missing executable as :class:`git.exc.GitCommandNotFound`. Commands run with
``with_exceptions=False`` so that non-zero exits come back as
``(status, stdout, stderr)`` and can be classified here.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path, PurePosixPath

#: GitPython reads this once, while ``git`` is first imported.
GIT_REFRESH_ENV = "GIT_PYTHON_REFRESH"


@contextmanager
def quiet_gitpython_refresh() -> Iterator[None]:
    """Silence GitPython's import-time git check for the duration of the block.

    Without this, importing GitPython on a host that has no git binary raises
    ImportError; the resolver needs a missing git to be an ordinary soft
    failure. An existing setting is left alone, and the override is removed
    again on exit so it never reaches the host process or its children.
    """
    if GIT_REFRESH_ENV in os.environ:
        yield
        return
    os.environ[GIT_REFRESH_ENV] = "quiet"
    try:
        yield
    finally:
        os.environ.pop(GIT_REFRESH_ENV, None)


with quiet_gitpython_refresh():
    from git.cmd import Git
    from git.exc import GitCommandNotFound

from lineage.config import GitConfig  # noqa: E402
from lineage.exceptions import (  # noqa: E402
    BackendError,
    InvalidPathError,
    NotARepositoryError,
    NotTrackedError,
    OutsideRepositoryError,
    ToolNotFoundError,
)
from lineage.git.parser import parse_git_log  # noqa: E402
from lineage.logging import get_logger  # noqa: E402
from lineage.runners.command import preview_output  # noqa: E402
from lineage.vcs.classify import NoHistoryMatcher  # noqa: E402
from lineage.vcs.inputs import require_file  # noqa: E402
from lineage.vcs.models import HistoryEntry, HistoryResult, Provider  # noqa: E402

__all__ = ["GitBackend", "LOG_FORMAT"]

logger = get_logger(__name__)

#: hash, author time, author name, subject; tab separated.
LOG_FORMAT = "%H%x09%at%x09%an%x09%s"

#: Keeps non-ASCII paths unescaped in ``--name-status`` output and matches
#: pathspecs literally, so names with ``*`` or ``[`` are not globs.
_GLOBAL_OPTIONS = ("-c", "core.quotePath=false", "--literal-pathspecs")


class GitBackend:
    """History and content for files inside git working trees.

    Args:
        config: Git settings (no-history allow-list).
        preview_chars: Raw-output characters kept in diagnostic logs.
    """

    def __init__(
        self,
        config: GitConfig | None = None,
        *,
        preview_chars: int = 4000,
    ) -> None:
        self._config = config or GitConfig()
        self._matcher = NoHistoryMatcher(
            Provider.GIT.value, self._config.no_history_patterns
        )
        self._preview_chars = preview_chars

    @property
    def provider(self) -> Provider:
        return Provider.GIT

    # =====================================================================
    # Internal helpers
    # =====================================================================

    def _git(
        self,
        cwd: Path,
        *args: str,
        strip_newline: bool = True,
    ) -> tuple[int, str, str]:
        """Run ``git <args>`` in *cwd* and return ``(status, stdout, stderr)``.

        Raises:
            ToolNotFoundError: If git is not installed.
        """
        argv = [Git.GIT_PYTHON_GIT_EXECUTABLE or "git", *_GLOBAL_OPTIONS, *args]
        try:
            status, stdout, stderr = Git(str(cwd)).execute(
                argv,
                with_extended_output=True,
                with_exceptions=False,
                strip_newline_in_stdout=strip_newline,
            )
        except GitCommandNotFound as e:
            raise ToolNotFoundError(
                "git CLI not found on PATH",
                provider=Provider.GIT.value,
                executable=argv[0],
            ) from e
        return status, str(stdout), str(stderr)

    @staticmethod
    def _failure_text(status: int, stdout: str, stderr: str) -> str:
        return stderr.strip() or stdout.strip() or f"git exited with status {status}"

    def repo_root(self, directory: Path) -> Path:
        """Return the top-level directory of the working tree containing *directory*.

        Raises:
            NotARepositoryError: If *directory* is not inside a git work tree.
        """
        status, stdout, stderr = self._git(directory, "rev-parse", "--show-toplevel")
        root = stdout.strip()
        if status != 0 or not root:
            raise NotARepositoryError(
                self._failure_text(status, stdout, stderr),
                provider=Provider.GIT.value,
                stderr=stderr,
            )
        return Path(root).resolve()

    def _is_tracked(self, root: Path, relative_path: str) -> bool:
        status, _, _ = self._git(
            root, "ls-files", "--error-unmatch", "--", relative_path
        )
        return status == 0

    # =====================================================================
    # History
    # =====================================================================

    def history(self, path: Path | str) -> HistoryResult:
        """Return the history of *path*, following renames.

        Raises:
            InvalidPathError: If *path* is not an existing file.
            NoHistoryError: If git is missing or does not track *path*.
            BackendError: If ``git log`` fails.
        """
        file_path, parent = require_file(path)
        root = self.repo_root(parent)
        try:
            relative_path = file_path.relative_to(root).as_posix()
        except ValueError as e:
            raise OutsideRepositoryError(
                f"{file_path} is outside repository {root}",
                provider=Provider.GIT.value,
                path=file_path,
                repo_root=root,
            ) from e

        if not self._is_tracked(root, relative_path):
            raise NotTrackedError(
                f"{relative_path} is not tracked by git",
                provider=Provider.GIT.value,
            )

        status, stdout, stderr = self._git(
            root,
            "log",
            "--follow",
            "-M",
            "--name-status",
            f"--format={LOG_FORMAT}",
            "--",
            relative_path,
        )
        if status != 0:
            raise BackendError(
                self._failure_text(status, stdout, stderr),
                provider=Provider.GIT.value,
                stderr=stderr,
            )

        entries = parse_git_log(stdout, relative_path)
        if not entries and stdout.strip():
            logger.warning(
                "git_log_unparsed",
                path=relative_path,
                output=preview_output(stdout, self._preview_chars),
            )
        logger.debug(
            "git_history_resolved",
            repo_root=str(root),
            path=relative_path,
            entries=len(entries),
        )
        return HistoryResult(
            provider=Provider.GIT,
            repo_root=str(root),
            relative_path=relative_path,
            entries=tuple(entries),
        )

    # =====================================================================
    # Content
    # =====================================================================

    def content(self, repo_root: Path | str, revision_id: str, path: str) -> str:
        """Return the text of *path* as it was at *revision_id*.

        Args:
            repo_root: Working tree root the path is relative to.
            revision_id: Commit hash (abbreviated hashes work).
            path: Repository-relative path; backslashes are accepted.

        Raises:
            InvalidPathError: If *repo_root* is not a directory.
            ToolNotFoundError: If git is missing.
            BackendError: If ``git show`` fails.
        """
        root = Path(repo_root)
        if not root.is_dir():
            raise InvalidPathError(
                f"Repository root is not a directory: {repo_root}", path=repo_root
            )
        object_path = str(PurePosixPath(path.replace("\\", "/")))
        status, stdout, stderr = self._git(
            root, "show", f"{revision_id}:{object_path}", strip_newline=False
        )
        if status != 0:
            raise BackendError(
                self._failure_text(status, stdout, stderr),
                provider=Provider.GIT.value,
                stderr=stderr,
            )
        return stdout

    def entry_content(
        self,
        entry: HistoryEntry,
        result: HistoryResult,
        working_path: Path | str,
    ) -> bytes:
        """Content of *entry* for the provider-independent retrieval path."""
        if result.repo_root is None:
            raise InvalidPathError(
                "Git history result has no repository root", path=working_path
            )
        text = self.content(result.repo_root, entry.revision_id, entry.path)
        return text.encode("utf-8", errors="surrogateescape")

    def is_no_history(self, error: BackendError) -> bool:
        return self._matcher.is_no_history(error)
