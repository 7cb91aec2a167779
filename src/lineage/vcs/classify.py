"""Allow-lists that recognize "no history here" in tool error text.

Tool messages vary across versions, so the lists live in configuration
rather than in backend code. Messages that match nothing are logged so
that new wording shows up instead of being silently treated as fatal.
"""

from __future__ import annotations

from collections.abc import Iterable

from lineage.exceptions import BackendError, NoHistoryError
from lineage.logging import get_logger

__all__ = ["NoHistoryMatcher"]

logger = get_logger(__name__)


class NoHistoryMatcher:
    """Case-insensitive substring matcher for one provider's error text.

    Args:
        provider: Provider value used in log records.
        patterns: Substrings that mark a message as "no usable history".

    Example:
        ```python
        matcher = NoHistoryMatcher("svn", ["e155007", "not a working copy"])
        matcher.matches("svn: E155007: '/tmp' is not a working copy")  # True
        ```
    """

    def __init__(self, provider: str, patterns: Iterable[str]) -> None:
        self._provider = provider
        self._patterns = tuple(p.lower() for p in patterns if p)

    @property
    def patterns(self) -> tuple[str, ...]:
        return self._patterns

    def matches(self, message: str) -> bool:
        """Return True if *message* contains any allow-listed substring."""
        lowered = message.lower()
        return any(pattern in lowered for pattern in self._patterns)

    def is_no_history(self, error: BackendError) -> bool:
        """Classify *error* for the resolver's fallback decision.

        Structured :class:`NoHistoryError` instances are soft without any
        text matching. Anything else is soft only if its text matches; an
        unmatched message is logged at warning level.
        """
        if isinstance(error, NoHistoryError):
            return True
        if self.matches(error.message) or (
            error.stderr is not None and self.matches(error.stderr)
        ):
            return True
        logger.warning(
            "unclassified_backend_error",
            provider=self._provider,
            error=error.message,
        )
        return False
