from __future__ import annotations


class LineageError(Exception):
    """Base exception class for all lineage-specific errors.

    This is the root of the lineage exception hierarchy. Callers can catch
    it at their boundary (the CLI, a GUI shell) while letting system
    exceptions propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            result = resolve_history("/work/src/main.c")
        except LineageError as e:
            logger.error("history_failed", error=e.message)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the LineageError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
