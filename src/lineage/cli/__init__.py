"""Command-line interface for lineage."""

from __future__ import annotations

from lineage.cli.context import CLIContext, ExitCode

__all__ = ["CLIContext", "ExitCode"]
