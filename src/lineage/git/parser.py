"""Parser for ``git log --name-status`` output.

Expected input, produced with ``--format=%H%x09%at%x09%an%x09%s``::

    3f2a...9c\t1700000000\tAda\tRename a.txt to b.txt
    <blank>
    R100\ta.txt\tb.txt
    91bd...e0\t1690000000\tAda\tAdd a.txt
    <blank>
    A\ta.txt

The walk follows the file backwards through renames: when a rename's new
name is the path being followed, older commits are matched against the old
name instead.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field

from lineage.vcs.models import HistoryEntry, Provider

__all__ = ["parse_git_log", "unquote_path"]

_HEX_DIGITS = frozenset(string.hexdigits)

#: hash, timestamp, author, subject
_HEADER_FIELDS = 4

#: Escapes git uses inside double-quoted path names (see ``core.quotePath``).
_C_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    '"': '"',
    "\\": "\\",
}
_OCTAL_DIGITS = frozenset("01234567")


def unquote_path(value: str) -> str:
    """Undo git's C-style quoting of a path field.

    Git wraps a path in double quotes when it contains ``"``, ``\\``, or a
    control character, and escapes those characters inside. Octal escapes
    (``\\303\\251``) stand for raw bytes and are decoded as UTF-8. Unquoted
    values are returned unchanged.
    """
    if len(value) < 2 or value[0] != '"' or value[-1] != '"':
        return value
    body = value[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != "\\" or i + 1 == len(body):
            out += ch.encode("utf-8", errors="surrogateescape")
            i += 1
            continue
        octal = body[i + 1 : i + 4]
        if len(octal) == 3 and all(d in _OCTAL_DIGITS for d in octal):
            out.append(int(octal, 8) & 0xFF)
            i += 4
            continue
        escaped = body[i + 1]
        out += _C_ESCAPES.get(escaped, escaped).encode(
            "utf-8", errors="surrogateescape"
        )
        i += 2
    return out.decode("utf-8", errors="surrogateescape")


def _is_commit_hash(value: str) -> bool:
    return bool(value) and all(ch in _HEX_DIGITS for ch in value)


def _parse_timestamp(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return 0


@dataclass(slots=True)
class _PendingCommit:
    revision_id: str
    timestamp: int
    author: str
    summary: str
    path: str
    touched: bool = False
    deleted: bool = False

    def to_entry(self) -> HistoryEntry:
        return HistoryEntry(
            provider=Provider.GIT,
            revision_id=self.revision_id,
            timestamp=self.timestamp,
            author=self.author,
            summary=self.summary,
            path=self.path,
            deleted=self.deleted,
        )


@dataclass(slots=True)
class _GitLogWalk:
    """Forward pass over log lines, one instance per parse."""

    path_of_interest: str
    entries: list[HistoryEntry] = field(default_factory=list)
    pending: _PendingCommit | None = None

    def flush(self) -> None:
        if self.pending is not None and self.pending.touched:
            self.entries.append(self.pending.to_entry())
        self.pending = None

    def start_commit(self, fields: list[str]) -> None:
        self.flush()
        self.pending = _PendingCommit(
            revision_id=fields[0],
            timestamp=_parse_timestamp(fields[1]),
            author=fields[2],
            summary=fields[3],
            path=self.path_of_interest,
        )

    def apply_status(self, fields: list[str]) -> None:
        if self.pending is None or not fields[0]:
            return
        code = fields[0][0].upper()
        if code in ("R", "C"):
            if len(fields) < 3:
                return
            old_path, new_path = unquote_path(fields[1]), unquote_path(fields[2])
            if not old_path or not new_path:
                return
            if self.path_of_interest in (old_path, new_path):
                self.pending.touched = True
            if code == "R" and new_path == self.path_of_interest:
                self.path_of_interest = old_path
            return
        if len(fields) < 2:
            return
        if unquote_path(fields[1]) == self.path_of_interest:
            self.pending.touched = True
            if code == "D":
                self.pending.deleted = True


def parse_git_log(output: str, relative_path: str) -> list[HistoryEntry]:
    """Turn ``git log --name-status`` output into history entries.

    Args:
        output: Raw stdout of the log query.
        relative_path: Repository-relative path being followed, with ``/``
            separators.

    Returns:
        Entries for commits whose status lines touch the followed path,
        newest first. Each entry's ``path`` is the file's name at that
        commit.
    """
    walk = _GitLogWalk(path_of_interest=relative_path)
    for raw_line in output.split("\n"):
        line = raw_line.rstrip("\r")
        if not line.strip():
            continue
        fields = line.split("\t", _HEADER_FIELDS - 1)
        if len(fields) >= _HEADER_FIELDS and _is_commit_hash(fields[0]):
            walk.start_commit(fields)
            continue
        walk.apply_status(line.split("\t"))
    walk.flush()
    return walk.entries
