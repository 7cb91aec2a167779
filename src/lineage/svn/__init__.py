"""Subversion (svn) backend: XML log scanning and ``svn cat``."""

from __future__ import annotations

from lineage.svn.backend import SvnBackend
from lineage.svn.parser import parse_svn_date, parse_svn_log

__all__ = ["SvnBackend", "parse_svn_date", "parse_svn_log"]
