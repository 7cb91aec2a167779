"""Command runner for blocking subprocess execution.

This module provides the CommandRunner class used by every backend to invoke
its CLI: working directory validation, per-call environment overrides, and
classification of "tool missing" versus "tool failed".
"""

from __future__ import annotations

import os
import subprocess
import time
from pathlib import Path
from typing import TYPE_CHECKING

from lineage.exceptions import WorkingDirectoryError
from lineage.logging import get_logger
from lineage.runners.models import CommandResult

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

__all__ = ["CommandRunner", "preview_output"]

logger = get_logger(__name__)

#: Default number of characters kept by :func:`preview_output`.
PREVIEW_LIMIT = 4000

#: Marker substituted for line breaks in previews.
NEWLINE_MARKER = "⏎"


def preview_output(text: str, limit: int = PREVIEW_LIMIT) -> str:
    """Return *text* as a single log-friendly line.

    CR, LF and CRLF each collapse into one visible marker, then the result
    is cut at *limit* characters.

    Example:
        >>> preview_output("a\\r\\nb\\nc", limit=10)
        'a⏎b⏎c'
    """
    flattened = (
        text.replace("\r\n", NEWLINE_MARKER)
        .replace("\r", NEWLINE_MARKER)
        .replace("\n", NEWLINE_MARKER)
    )
    if len(flattened) <= limit:
        return flattened
    return flattened[:limit] + f"... [truncated {len(flattened) - limit} chars]"


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


class CommandRunner:
    """Execute commands synchronously with environment control.

    Each call blocks until the child exits. There is no timeout unless one
    is configured, and nothing is retried.

    Attributes:
        cwd: Default working directory for command execution.
        timeout: Default timeout in seconds (None for no timeout).

    Example:
        ```python
        runner = CommandRunner()
        result = runner.run(["svn", "info"], cwd=Path("/work/trunk"))
        if not result.success:
            print(result.error_message)
        ```
    """

    def __init__(
        self,
        cwd: Path | None = None,
        timeout: float | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the CommandRunner.

        Args:
            cwd: Working directory for commands. If None, uses current directory.
            timeout: Default timeout in seconds. None disables it.
            env: Additional environment variables merged over os.environ.
        """
        self._cwd = cwd
        self._timeout = timeout
        self._extra_env = dict(env or {})

    @property
    def cwd(self) -> Path | None:
        """Default working directory for command execution."""
        return self._cwd

    @property
    def timeout(self) -> float | None:
        """Default timeout in seconds."""
        return self._timeout

    def _validate_cwd(self, cwd: Path | None) -> None:
        """Raise WorkingDirectoryError if *cwd* is not a directory."""
        if cwd is not None and not cwd.is_dir():
            raise WorkingDirectoryError(
                f"Working directory does not exist: {cwd}",
                path=cwd,
            )

    def _build_env(self, extra_env: Mapping[str, str] | None = None) -> dict[str, str]:
        """Build the child environment without touching os.environ."""
        env = os.environ.copy()
        env.update(self._extra_env)
        if extra_env:
            env.update(extra_env)
        return env

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        """Execute a command and return the result.

        Args:
            command: Command and arguments as a sequence (no shell expansion).
            cwd: Override working directory for this command.
            env: Additional environment variables for this launch only.
            timeout: Override timeout. Use 0 or negative for no timeout.

        Returns:
            CommandResult. A missing executable yields ``not_found=True`` and
            returncode 127 instead of raising.

        Raises:
            WorkingDirectoryError: If the working directory does not exist.
        """
        effective_cwd = cwd if cwd is not None else self._cwd
        self._validate_cwd(effective_cwd)

        effective_timeout = timeout if timeout is not None else self._timeout
        if effective_timeout is not None and effective_timeout <= 0:
            effective_timeout = None

        argv = tuple(str(part) for part in command)
        logger.debug("command_started", command=list(argv), cwd=str(effective_cwd))

        start_time = time.monotonic()
        try:
            completed = subprocess.run(
                argv,
                cwd=effective_cwd,
                env=self._build_env(env),
                capture_output=True,
                stdin=subprocess.DEVNULL,
                timeout=effective_timeout,
                check=False,
            )
        except FileNotFoundError:
            return CommandResult(
                command=argv,
                returncode=127,
                stdout="",
                stderr=f"Command not found: {argv[0]}",
                duration_ms=int((time.monotonic() - start_time) * 1000),
                not_found=True,
            )
        except PermissionError:
            return CommandResult(
                command=argv,
                returncode=126,
                stdout="",
                stderr=f"Permission denied: {argv[0]}",
                duration_ms=int((time.monotonic() - start_time) * 1000),
            )
        except subprocess.TimeoutExpired as e:
            stdout = e.stdout if isinstance(e.stdout, bytes) else b""
            return CommandResult(
                command=argv,
                returncode=-1,
                stdout=_decode(stdout),
                stderr=_decode(e.stderr if isinstance(e.stderr, bytes) else None),
                duration_ms=int((time.monotonic() - start_time) * 1000),
                timed_out=True,
                stdout_bytes=stdout,
            )

        duration_ms = int((time.monotonic() - start_time) * 1000)
        result = CommandResult(
            command=argv,
            returncode=completed.returncode,
            stdout=_decode(completed.stdout),
            stderr=_decode(completed.stderr),
            duration_ms=duration_ms,
            stdout_bytes=completed.stdout or b"",
        )
        logger.debug(
            "command_finished",
            tool=argv[0],
            returncode=result.returncode,
            duration_ms=duration_ms,
        )
        return result
