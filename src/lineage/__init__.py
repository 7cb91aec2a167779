"""lineage: file history from git, Perforce or Subversion.

Given a path on disk, lineage works out which version-control system tracks
it, reads that file's history through the system's CLI, and returns one
normalized :class:`HistoryResult`. Historical content can then be fetched
for any entry.
"""

from __future__ import annotations

from lineage.vcs import (
    AsyncHistoryResolver,
    HistoryEntry,
    HistoryResolver,
    HistoryResult,
    Provider,
    fetch_git_content,
    fetch_p4_content,
    fetch_svn_content,
    resolve_history,
)

__version__ = "0.3.0"

__all__ = [
    "AsyncHistoryResolver",
    "HistoryEntry",
    "HistoryResolver",
    "HistoryResult",
    "Provider",
    "__version__",
    "fetch_git_content",
    "fetch_p4_content",
    "fetch_svn_content",
    "resolve_history",
]
