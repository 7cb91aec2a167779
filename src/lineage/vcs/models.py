"""Provider-agnostic history models.

Every backend normalizes its tool's output into these frozen dataclasses.
``to_dict()`` produces the camelCase wire shape consumed by the desktop
shell and by ``lineage history --format json``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

__all__ = ["HistoryEntry", "HistoryResult", "Provider"]

#: Length of the abbreviated git hash shown to users.
SHORT_HASH_LENGTH = 7


class Provider(str, Enum):
    """Version-control system that produced a history result."""

    GIT = "git"
    P4 = "p4"
    SVN = "svn"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """One historical revision of a file.

    Attributes:
        provider: Backend the revision came from.
        revision_id: Commit hash (git) or change/revision number (p4, svn).
        timestamp: Seconds since the epoch (UTC), 0 if unknown.
        author: Author or submitting user, possibly empty.
        summary: Commit message; svn messages may span several lines.
        path: The file's path as it existed at this revision.
        deleted: True if this revision deleted the path.
    """

    provider: Provider
    revision_id: str
    timestamp: int = 0
    author: str = ""
    summary: str = ""
    path: str = ""
    deleted: bool = False

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError(f"History entry {self.revision_id!r} has an empty path")

    @property
    def short_id(self) -> str:
        """Abbreviated revision id (seven characters for git)."""
        if self.provider is Provider.GIT:
            return self.revision_id[:SHORT_HASH_LENGTH]
        return self.revision_id

    @property
    def display_id(self) -> str:
        """Revision id the way each tool's users write it."""
        if self.provider is Provider.P4:
            return f"CL {self.revision_id}"
        if self.provider is Provider.SVN:
            return f"r{self.revision_id}"
        return self.short_id

    @property
    def label(self) -> str:
        """Virtual path naming historical content, e.g. ``git:1a2b3c4:src/a.c``."""
        return f"{self.provider.value}:{self.short_id}:{self.path}"

    def to_dict(self) -> dict[str, object]:
        return {
            "provider": self.provider.value,
            "hash": self.revision_id,
            "timestamp": self.timestamp,
            "author": self.author,
            "summary": self.summary,
            "path": self.path,
            "deleted": self.deleted,
        }


@dataclass(frozen=True, slots=True)
class HistoryResult:
    """History of one file from one backend.

    Attributes:
        provider: Backend that had history, or ``Provider.NONE``.
        repo_root: Absolute repository / working copy root, when known.
        relative_path: Path relative to ``repo_root``; for p4 the depot
            path; the bare file name when no root is known.
        entries: Revisions, newest first, in the order the tool emitted them.
    """

    provider: Provider
    repo_root: str | None
    relative_path: str
    entries: tuple[HistoryEntry, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls, relative_path: str) -> HistoryResult:
        """Result for a path that no backend tracks."""
        return cls(
            provider=Provider.NONE,
            repo_root=None,
            relative_path=relative_path,
            entries=(),
        )

    def find(self, revision_id: str) -> HistoryEntry | None:
        """Return the entry with *revision_id*.

        Git ids also match by prefix, so an abbreviated hash works.
        """
        for entry in self.entries:
            if entry.revision_id == revision_id:
                return entry
        if self.provider is Provider.GIT and revision_id:
            for entry in self.entries:
                if entry.revision_id.startswith(revision_id.lower()):
                    return entry
        return None

    def to_dict(self) -> dict[str, object]:
        return {
            "provider": self.provider.value,
            "repoRoot": self.repo_root,
            "relativePath": self.relative_path,
            "entries": [entry.to_dict() for entry in self.entries],
        }
