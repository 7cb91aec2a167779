"""Subprocess execution for backend CLIs."""

from __future__ import annotations

from lineage.runners.command import CommandRunner, preview_output
from lineage.runners.models import CommandResult

__all__ = ["CommandResult", "CommandRunner", "preview_output"]
