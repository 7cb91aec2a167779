"""Parser for ``p4 -ztag filelog`` output.

Tagged output is one ``... key value`` pair per line. Per-revision keys carry
an index suffix (``change0``, ``time1``, ``how0,0``) that is stripped before
matching::

    ... depotFile //depot/main/a.c
    ... rev0 3
    ... change0 1234
    ... action0 edit
    ... time0 1700000000
    ... user0 ada
    ... desc0 Fix overflow

A ``change`` key starts a new entry; ``depotFile`` persists until the next
one. Lines without the tag prefix are ignored and nothing here raises, so a
truncated stream yields whatever entries were complete enough to flush.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from lineage.vcs.models import HistoryEntry, Provider

__all__ = ["ZtagLog", "parse_ztag_filelog", "split_ztag_line"]

_TAG_PREFIX = "... "

_KEY_SUFFIX = re.compile(r"[0-9,]+$")


def split_ztag_line(line: str) -> tuple[str, str] | None:
    """Split ``... key value`` into ``(logical_key, value)``.

    Returns None for lines that are not tagged.
    """
    stripped = line.rstrip("\r\n")
    if not stripped.startswith(_TAG_PREFIX):
        return None
    body = stripped[len(_TAG_PREFIX) :]
    key, _, value = body.partition(" ")
    key = _KEY_SUFFIX.sub("", key)
    if not key:
        return None
    return key, value


@dataclass(slots=True)
class ZtagLog:
    """Parsed filelog.

    Attributes:
        entries: One entry per change, in tool order (newest first).
        depot_path: Last ``depotFile`` seen, or None.
    """

    entries: list[HistoryEntry] = field(default_factory=list)
    depot_path: str | None = None


@dataclass(slots=True)
class _PendingChange:
    change: str
    path: str
    timestamp: int = 0
    author: str = ""
    summary: str = ""
    deleted: bool = False

    def to_entry(self) -> HistoryEntry:
        return HistoryEntry(
            provider=Provider.P4,
            revision_id=self.change,
            timestamp=self.timestamp,
            author=self.author,
            summary=self.summary,
            path=self.path,
            deleted=self.deleted,
        )


@dataclass(slots=True)
class _ZtagWalk:
    queried_path: str
    log: ZtagLog = field(default_factory=ZtagLog)
    pending: _PendingChange | None = None

    def flush(self) -> None:
        if self.pending is not None and self.pending.change:
            self.log.entries.append(self.pending.to_entry())
        self.pending = None

    def feed(self, key: str, value: str) -> None:
        if key == "depotFile":
            if value:
                self.log.depot_path = value
            return
        if key == "change":
            self.flush()
            self.pending = _PendingChange(
                change=value.strip(),
                path=self.log.depot_path or self.queried_path,
            )
            return
        if self.pending is None:
            return
        if key == "time":
            try:
                self.pending.timestamp = int(value.strip())
            except ValueError:
                self.pending.timestamp = 0
        elif key == "user":
            self.pending.author = value
        elif key == "desc":
            if not self.pending.summary and value.strip():
                self.pending.summary = value.strip()
        elif key == "action":
            if "delete" in value:
                self.pending.deleted = True


def parse_ztag_filelog(output: str, queried_path: str) -> ZtagLog:
    """Parse ``p4 -ztag filelog`` output.

    Args:
        output: Raw stdout of the filelog query.
        queried_path: Path passed to p4; used as the entry path until a
            ``depotFile`` key is seen.

    Returns:
        :class:`ZtagLog` with entries and the last depot path seen.
    """
    walk = _ZtagWalk(queried_path=queried_path)
    for line in output.splitlines():
        tagged = split_ztag_line(line)
        if tagged is None:
            continue
        walk.feed(*tagged)
    walk.flush()
    return walk.log
