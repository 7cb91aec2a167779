"""HistoryBackend protocol definition.

:class:`~lineage.git.backend.GitBackend`,
:class:`~lineage.p4.backend.P4Backend` and
:class:`~lineage.svn.backend.SvnBackend` satisfy it via structural typing;
no explicit inheritance required.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from lineage.exceptions import BackendError
from lineage.vcs.models import HistoryEntry, HistoryResult, Provider


@runtime_checkable
class HistoryBackend(Protocol):
    """One version-control system, seen through the resolver's eyes."""

    @property
    def provider(self) -> Provider:
        """Provider value stamped on this backend's results."""
        ...

    def history(self, path: Path | str) -> HistoryResult:
        """Return the history of the file at *path*.

        Raises:
            InvalidInputError: If *path* is unusable for any backend.
            NoHistoryError: If this backend does not apply to *path*.
            BackendError: If the tool failed for another reason.
        """
        ...

    def entry_content(
        self,
        entry: HistoryEntry,
        result: HistoryResult,
        working_path: Path | str,
    ) -> bytes:
        """Return the file content recorded by *entry*."""
        ...

    def is_no_history(self, error: BackendError) -> bool:
        """True if *error* means "no usable history here"."""
        ...
