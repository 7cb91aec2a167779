"""Line-oriented scanner for ``svn log --xml -v`` output.

svn's log XML is shallow and stable, so entries are picked out with
substring searches rather than a full XML parser::

    <logentry
       revision="42">
    <author>ada</author>
    <date>2024-03-01T10:00:00.000000Z</date>
    <paths>
    <path
       action="D"
       kind="file">/trunk/old.c</path>
    </paths>
    <msg>First line
    second line</msg>
    </logentry>

Attributes may sit on the tag's line or on continuation lines, and ``<msg>``
may span any number of lines.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from xml.sax.saxutils import unescape

from lineage.vcs.models import HistoryEntry, Provider

__all__ = ["parse_svn_date", "parse_svn_log"]

_REVISION_ATTR = re.compile(r'revision="(\d+)"')

_DELETE_ACTION = 'action="D"'

_ENTITIES = {"&quot;": '"', "&apos;": "'"}


def _xml_text(value: str) -> str:
    return unescape(value, _ENTITIES)


def _tag_value(line: str, tag: str) -> str | None:
    """Return the text between ``<tag>`` and ``</tag>`` on one line."""
    open_tag = f"<{tag}>"
    close_tag = f"</{tag}>"
    start = line.find(open_tag)
    if start == -1:
        return None
    start += len(open_tag)
    end = line.find(close_tag, start)
    if end == -1:
        return None
    return _xml_text(line[start:end])


def parse_svn_date(value: str) -> int:
    """Convert an svn ISO-8601 date to epoch seconds, 0 if unparsable."""
    text = value.strip()
    if not text:
        return 0
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return 0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


@dataclass(slots=True)
class _PendingLogEntry:
    revision: str | None = None
    author: str = ""
    timestamp: int = 0
    summary: str = ""
    deleted: bool = False
    message_lines: list[str] | None = None


@dataclass(slots=True)
class _SvnLogScan:
    """Forward pass over XML lines, one instance per parse."""

    path: str
    entries: list[HistoryEntry] = field(default_factory=list)
    pending: _PendingLogEntry | None = None

    def feed(self, line: str) -> None:
        pending = self.pending
        if pending is not None and pending.message_lines is not None:
            self._collect_message(pending, pending.message_lines, line)
            return

        if "<logentry" in line:
            if pending is not None:
                self.close()
            self.pending = pending = _PendingLogEntry()
        if pending is None:
            return

        if pending.revision is None:
            match = _REVISION_ATTR.search(line)
            if match:
                pending.revision = match.group(1)

        if _DELETE_ACTION in line:
            pending.deleted = True

        author = _tag_value(line, "author")
        if author is not None:
            pending.author = author

        date = _tag_value(line, "date")
        if date is not None:
            pending.timestamp = parse_svn_date(date)

        if "<msg>" in line:
            message = _tag_value(line, "msg")
            if message is not None:
                pending.summary = message
            else:
                pending.message_lines = [line[line.find("<msg>") + len("<msg>") :]]
        elif "<msg/>" in line or "<msg />" in line:
            pending.summary = ""

        if "</logentry>" in line:
            self.close()

    def _collect_message(
        self, pending: _PendingLogEntry, message_lines: list[str], line: str
    ) -> None:
        end = line.find("</msg>")
        if end == -1:
            message_lines.append(line)
            return
        message_lines.append(line[:end])
        pending.summary = _xml_text("\n".join(message_lines))
        pending.message_lines = None
        if "</logentry>" in line[end:]:
            self.close()

    def close(self) -> None:
        pending = self.pending
        self.pending = None
        if pending is None or not pending.revision:
            return
        self.entries.append(
            HistoryEntry(
                provider=Provider.SVN,
                revision_id=pending.revision,
                timestamp=pending.timestamp,
                author=pending.author,
                summary=pending.summary,
                path=self.path,
                deleted=pending.deleted,
            )
        )


def parse_svn_log(output: str, path: str) -> list[HistoryEntry]:
    """Parse verbose XML log output into history entries.

    Args:
        output: Raw stdout of ``svn log --xml -v``.
        path: Path recorded on every entry (working-copy relative).

    Returns:
        Entries in tool order (newest first). Entries without a revision
        number, and a final entry cut off before ``</logentry>``, are
        dropped.
    """
    scan = _SvnLogScan(path=path)
    for line in output.splitlines():
        scan.feed(line.rstrip("\r"))
    return scan.entries
