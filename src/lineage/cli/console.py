"""Shared Rich Console instance for lineage CLI output.

Rich Console handles TTY detection: styled output in terminals, plain text
when piped. Errors and notices go through ``click.echo(err=True)``.
"""

from __future__ import annotations

from rich.console import Console

__all__ = ["console"]

console = Console()
