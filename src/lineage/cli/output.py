"""Output formatting for lineage CLI commands."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from rich.table import Table
from rich.text import Text

from lineage.vcs.models import HistoryResult

__all__ = [
    "OutputFormat",
    "format_error",
    "format_json",
    "format_timestamp",
    "history_table",
]


class OutputFormat(str, Enum):
    """Supported output formats for CLI commands."""

    TEXT = "text"
    JSON = "json"


def format_error(
    message: str, details: list[str] | None = None, suggestion: str | None = None
) -> str:
    """Format an error message with optional details and suggestion.

    Example:
        >>> print(format_error("No history", details=["git: boom"]))
        Error: No history
          git: boom
    """
    lines = [f"Error: {message}"]

    if details:
        for detail in details:
            lines.append(f"  {detail}")

    if suggestion:
        lines.append(f"Suggestion: {suggestion}")

    return "\n".join(lines)


def format_json(data: Any) -> str:
    """Format data as indented JSON."""
    return json.dumps(data, indent=2)


def format_timestamp(timestamp: int) -> str:
    """Render epoch seconds as local time, or ``-`` when unknown."""
    if timestamp <= 0:
        return "-"
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc).astimezone()
    return moment.strftime("%Y-%m-%d %H:%M")


def history_table(result: HistoryResult, limit: int | None = None) -> Table:
    """Build a Rich table of *result*'s entries, newest first."""
    title = f"{result.relative_path} ({result.provider.value})"
    table = Table(title=Text(title), show_lines=False)
    table.add_column("Revision", style="cyan", no_wrap=True)
    table.add_column("Date", no_wrap=True)
    table.add_column("Author", style="green")
    table.add_column("Summary")
    table.add_column("Path", style="dim")

    entries = result.entries if limit is None else result.entries[:limit]
    for entry in entries:
        first_line = entry.summary.splitlines()[0] if entry.summary else ""
        summary = Text(first_line)
        if entry.deleted:
            summary = Text.assemble(("(deleted) ", "red"), first_line)
        table.add_row(
            entry.display_id,
            format_timestamp(entry.timestamp),
            Text(entry.author),
            summary,
            Text(entry.path),
        )
    return table
