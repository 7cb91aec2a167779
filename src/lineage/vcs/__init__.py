"""Provider-independent history layer.

Provides the :class:`HistoryBackend` protocol that the git, p4 and svn
backends satisfy, the normalized models, and :class:`HistoryResolver`, which
tries the backends in order.
"""

from __future__ import annotations

from lineage.vcs.factory import DEFAULT_PROVIDER_ORDER, create_backend, create_backends
from lineage.vcs.models import HistoryEntry, HistoryResult, Provider
from lineage.vcs.protocol import HistoryBackend
from lineage.vcs.resolver import (
    AsyncHistoryResolver,
    HistoryResolver,
    fetch_git_content,
    fetch_p4_content,
    fetch_svn_content,
    resolve_history,
)

__all__ = [
    "AsyncHistoryResolver",
    "DEFAULT_PROVIDER_ORDER",
    "HistoryBackend",
    "HistoryEntry",
    "HistoryResolver",
    "HistoryResult",
    "Provider",
    "create_backend",
    "create_backends",
    "fetch_git_content",
    "fetch_p4_content",
    "fetch_svn_content",
    "resolve_history",
]
