"""Git backend: rename-following log parsing and blob retrieval via GitPython."""

from __future__ import annotations

from lineage.git.backend import LOG_FORMAT, GitBackend
from lineage.git.parser import parse_git_log

__all__ = ["GitBackend", "LOG_FORMAT", "parse_git_log"]
