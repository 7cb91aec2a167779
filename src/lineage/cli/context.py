"""CLI context and exit codes for lineage."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from lineage.config import LineageConfig

__all__ = ["CLIContext", "ExitCode"]


class ExitCode(IntEnum):
    """Exit codes for the lineage CLI.

    - 0 for success
    - 1 for failure (backend or resolution error)
    - 2 for invalid input (bad path or revision)
    - 130 for keyboard interrupt (128 + SIGINT=2)
    """

    SUCCESS = 0
    FAILURE = 1
    INVALID_INPUT = 2
    INTERRUPTED = 130


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global options and configuration shared by every command.

    Attributes:
        config: Loaded lineage configuration.
        quiet: Suppress non-essential output.
    """

    config: LineageConfig
    quiet: bool = False
