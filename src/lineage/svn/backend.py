"""Subversion history backend."""

from __future__ import annotations

from pathlib import Path

from lineage.config import SvnConfig
from lineage.exceptions import BackendError, ToolNotFoundError
from lineage.logging import get_logger
from lineage.runners.command import CommandRunner, preview_output
from lineage.runners.models import CommandResult
from lineage.svn.parser import parse_svn_log
from lineage.vcs.classify import NoHistoryMatcher
from lineage.vcs.inputs import (
    require_file,
    require_numeric_revision,
    working_directory,
)
from lineage.vcs.models import HistoryEntry, HistoryResult, Provider

__all__ = ["SvnBackend"]

logger = get_logger(__name__)

_NON_INTERACTIVE = "--non-interactive"


class SvnBackend:
    """History and content for files in a Subversion working copy.

    Args:
        config: svn settings (executable, allow-list).
        runner: Optional pre-configured CommandRunner. Created if not provided.
        preview_chars: Raw-output characters kept in diagnostic logs.
    """

    def __init__(
        self,
        config: SvnConfig | None = None,
        runner: CommandRunner | None = None,
        *,
        preview_chars: int = 4000,
    ) -> None:
        self._config = config or SvnConfig()
        self._runner = runner or CommandRunner()
        self._matcher = NoHistoryMatcher(
            Provider.SVN.value, self._config.no_history_patterns
        )
        self._preview_chars = preview_chars

    @property
    def provider(self) -> Provider:
        return Provider.SVN

    def _run_svn(self, args: list[str], directory: Path) -> CommandResult:
        result = self._runner.run([self._config.executable, *args], cwd=directory)
        if result.not_found:
            raise ToolNotFoundError(
                f"{self._config.executable} CLI not found on PATH",
                provider=Provider.SVN.value,
                executable=self._config.executable,
            )
        return result

    def working_copy_root(self, file_path: Path, directory: Path) -> Path | None:
        """Best-effort working copy root for *file_path*.

        Returns:
            The root, or None when svn cannot tell.

        Raises:
            ToolNotFoundError: If svn is missing.
        """
        result = self._run_svn(
            ["info", "--show-item", "wc-root", _NON_INTERACTIVE, str(file_path)],
            directory,
        )
        root = result.stdout.strip()
        if not result.success or not root:
            logger.debug(
                "svn_wc_root_unavailable",
                path=str(file_path),
                error=result.error_message if not result.success else None,
            )
            return None
        return Path(root).resolve()

    def history(self, path: Path | str) -> HistoryResult:
        """Return the log of *path*.

        Raises:
            InvalidPathError: If *path* is not an existing file.
            ToolNotFoundError: If svn is missing.
            BackendError: If ``svn log`` fails.
        """
        file_path, parent = require_file(path)
        root = self.working_copy_root(file_path, parent)

        relative_path = file_path.name
        if root is not None:
            try:
                relative_path = file_path.relative_to(root).as_posix()
            except ValueError:
                logger.debug(
                    "svn_path_outside_wc_root", path=str(file_path), root=str(root)
                )

        result = self._run_svn(
            ["log", "--xml", "-v", _NON_INTERACTIVE, str(file_path)], parent
        )
        if not result.success:
            raise BackendError(
                result.error_message,
                provider=Provider.SVN.value,
                stderr=result.stderr,
            )

        entries = parse_svn_log(result.stdout, relative_path)
        if not entries and result.stdout.strip():
            logger.info(
                "svn_log_empty",
                path=relative_path,
                output=preview_output(result.stdout, self._preview_chars),
            )
        logger.debug(
            "svn_history_resolved",
            repo_root=str(root) if root else None,
            path=relative_path,
            entries=len(entries),
        )
        return HistoryResult(
            provider=Provider.SVN,
            repo_root=str(root) if root else None,
            relative_path=relative_path,
            entries=tuple(entries),
        )

    def content(self, revision_id: str, working_path: Path | str) -> bytes:
        """Return the bytes of *working_path* as of revision *revision_id*.

        svn traces the working file's history back to that revision, so
        earlier names are followed automatically.

        Raises:
            InvalidRevisionError: If *revision_id* is not all digits.
            InvalidPathError: If *working_path* has no usable directory.
            ToolNotFoundError: If svn is missing.
            BackendError: If ``svn cat`` fails.
        """
        revision = require_numeric_revision(revision_id)
        directory = working_directory(working_path)
        result = self._run_svn(
            ["cat", "-r", revision, _NON_INTERACTIVE, str(working_path)], directory
        )
        if not result.success:
            raise BackendError(
                result.error_message,
                provider=Provider.SVN.value,
                stderr=result.stderr,
            )
        return result.stdout_bytes

    def entry_content(
        self,
        entry: HistoryEntry,
        result: HistoryResult,
        working_path: Path | str,
    ) -> bytes:
        return self.content(entry.revision_id, working_path)

    def is_no_history(self, error: BackendError) -> bool:
        return self._matcher.is_no_history(error)
