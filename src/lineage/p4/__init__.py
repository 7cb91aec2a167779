"""Perforce (p4) backend: tagged filelog parsing and file printing."""

from __future__ import annotations

from lineage.p4.backend import P4Backend
from lineage.p4.p4config import config_env_override, find_p4config
from lineage.p4.parser import ZtagLog, parse_ztag_filelog

__all__ = [
    "P4Backend",
    "ZtagLog",
    "config_env_override",
    "find_p4config",
    "parse_ztag_filelog",
]
