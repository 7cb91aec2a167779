"""Perforce history backend.

Runs ``p4 -ztag filelog`` from the file's own directory so that p4 picks up
the client workspace (and ``P4CONFIG`` file) that applies to it.
"""

from __future__ import annotations

from pathlib import Path

from lineage.config import P4Config
from lineage.exceptions import BackendError, NotTrackedError, ToolNotFoundError
from lineage.logging import get_logger
from lineage.p4.p4config import config_env_override
from lineage.p4.parser import parse_ztag_filelog
from lineage.runners.command import CommandRunner, preview_output
from lineage.runners.models import CommandResult
from lineage.vcs.classify import NoHistoryMatcher
from lineage.vcs.inputs import (
    require_file,
    require_numeric_revision,
    working_directory,
)
from lineage.vcs.models import HistoryEntry, HistoryResult, Provider

__all__ = ["P4Backend"]

logger = get_logger(__name__)


class P4Backend:
    """History and content for files in a Perforce client workspace.

    Args:
        config: p4 settings (executable, config file names, allow-list).
        runner: Optional pre-configured CommandRunner. Created if not provided.
        preview_chars: Raw-output characters kept in diagnostic logs.
    """

    def __init__(
        self,
        config: P4Config | None = None,
        runner: CommandRunner | None = None,
        *,
        preview_chars: int = 4000,
    ) -> None:
        self._config = config or P4Config()
        self._runner = runner or CommandRunner()
        self._matcher = NoHistoryMatcher(
            Provider.P4.value, self._config.no_history_patterns
        )
        self._preview_chars = preview_chars

    @property
    def provider(self) -> Provider:
        return Provider.P4

    def _env_for(self, directory: Path) -> dict[str, str]:
        override = config_env_override(
            directory,
            self._config.config_filenames,
            env_var=self._config.config_env_var,
        )
        if override:
            logger.debug("p4config_discovered", directory=str(directory), **override)
        return override

    def _run_p4(self, args: list[str], directory: Path) -> CommandResult:
        """Run ``p4 <args>`` in *directory*; raise on any failure."""
        command = [self._config.executable, *args]
        result = self._runner.run(command, cwd=directory, env=self._env_for(directory))
        if result.not_found:
            raise ToolNotFoundError(
                f"{self._config.executable} CLI not found on PATH",
                provider=Provider.P4.value,
                executable=self._config.executable,
            )
        if not result.success:
            raise BackendError(
                result.error_message,
                provider=Provider.P4.value,
                stderr=result.stderr,
            )
        return result

    def history(self, path: Path | str) -> HistoryResult:
        """Return the filelog of *path*.

        Raises:
            InvalidPathError: If *path* is not an existing file.
            ToolNotFoundError: If p4 is missing.
            BackendError: If ``p4 filelog`` fails.
        """
        file_path, parent = require_file(path)
        queried = str(file_path)
        result = self._run_p4(["-ztag", "filelog", "-l", queried], parent)

        log = parse_ztag_filelog(result.stdout, queried)
        warning = result.stderr.strip()
        if not log.entries and warning and self._matcher.matches(warning):
            # p4 reports files outside the client view as warnings, exit 0.
            raise NotTrackedError(
                warning, provider=Provider.P4.value, stderr=result.stderr
            )
        if not log.entries:
            # p4 succeeded, so an empty log is a valid answer.
            logger.info(
                "p4_filelog_empty",
                path=queried,
                output=preview_output(result.stdout, self._preview_chars),
            )
        logger.debug(
            "p4_history_resolved",
            path=queried,
            depot_path=log.depot_path,
            entries=len(log.entries),
        )
        return HistoryResult(
            provider=Provider.P4,
            repo_root=None,
            relative_path=log.depot_path or queried,
            entries=tuple(log.entries),
        )

    def content(self, path: str, revision_id: str, working_path: Path | str) -> bytes:
        """Return the bytes of *path* as submitted in change *revision_id*.

        Args:
            path: Depot or local path of the file.
            revision_id: Change number.
            working_path: Local file (or directory) selecting the client.

        Raises:
            InvalidRevisionError: If *revision_id* is not all digits.
            InvalidPathError: If *working_path* has no usable directory.
            ToolNotFoundError: If p4 is missing.
            BackendError: If ``p4 print`` fails.
        """
        change = require_numeric_revision(revision_id)
        directory = working_directory(working_path)
        result = self._run_p4(["print", "-q", f"{path}@={change}"], directory)
        return result.stdout_bytes

    def entry_content(
        self,
        entry: HistoryEntry,
        result: HistoryResult,
        working_path: Path | str,
    ) -> bytes:
        return self.content(entry.path, entry.revision_id, working_path)

    def is_no_history(self, error: BackendError) -> bool:
        return self._matcher.is_no_history(error)
