"""lineage exception hierarchy.

This package organizes lineage exceptions into domain-specific modules.

All exceptions can be imported from this package:
    from lineage.exceptions import BackendError, ConfigError, LineageError
"""

from __future__ import annotations

# Base exception
from lineage.exceptions.base import LineageError

# Configuration exceptions
from lineage.exceptions.config import ConfigError

# History resolution exceptions
from lineage.exceptions.history import (
    BackendError,
    HistoryResolutionError,
    InvalidInputError,
    InvalidPathError,
    InvalidRevisionError,
    NoHistoryError,
    NotARepositoryError,
    NotTrackedError,
    OutsideRepositoryError,
    ToolNotFoundError,
)

# Runner exceptions
from lineage.exceptions.runner import (
    RunnerError,
    WorkingDirectoryError,
)

__all__ = [
    # Base
    "LineageError",
    # Config
    "ConfigError",
    # History
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
    # Runner
    "RunnerError",
    "WorkingDirectoryError",
]
