"""Data models for subprocess runners.

All models are frozen dataclasses with slots.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["CommandResult"]


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of executing a single command.

    Attributes:
        command: The command that was executed.
        returncode: Exit code from the command (0 = success).
        stdout: Standard output decoded as UTF-8 (invalid bytes replaced).
        stderr: Standard error decoded as UTF-8 (invalid bytes replaced).
        duration_ms: Execution time in milliseconds.
        timed_out: True if the command exceeded its timeout limit.
        not_found: True if the executable could not be found.
        stdout_bytes: Raw standard output, for binary file content.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    duration_ms: int
    timed_out: bool = False
    not_found: bool = False
    stdout_bytes: bytes = b""

    @property
    def tool(self) -> str:
        """Name of the executable that was run."""
        return self.command[0] if self.command else ""

    @property
    def success(self) -> bool:
        """True if command completed successfully (returncode 0, no timeout)."""
        return self.returncode == 0 and not self.timed_out and not self.not_found

    @property
    def error_message(self) -> str:
        """Best description of a failure.

        Non-empty stderr first, then non-empty stdout (some tools report
        errors there), then a synthesized exit status message.
        """
        stderr = self.stderr.strip()
        if stderr:
            return stderr
        stdout = self.stdout.strip()
        if stdout:
            return stdout
        if self.timed_out:
            return f"{self.tool} timed out"
        return f"{self.tool} exited with status {self.returncode}"
