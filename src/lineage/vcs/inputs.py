"""Input validation shared by every backend.

These checks raise :class:`~lineage.exceptions.InvalidInputError`
subclasses, which the resolver never treats as a reason to fall back.
"""

from __future__ import annotations

from pathlib import Path

from lineage.exceptions import InvalidPathError, InvalidRevisionError

__all__ = ["require_file", "require_numeric_revision", "working_directory"]


def require_file(path: Path | str) -> tuple[Path, Path]:
    """Validate that *path* is an existing regular file.

    Args:
        path: Path to check. Relative paths resolve against the cwd.

    Returns:
        ``(file, parent)`` as absolute, symlink-resolved paths.

    Raises:
        InvalidPathError: If the path is missing, not a regular file, or has
            no parent directory.
    """
    candidate = Path(path)
    if not candidate.is_file():
        raise InvalidPathError(f"Not a file: {path}", path=path)
    resolved = candidate.resolve()
    parent = resolved.parent
    if parent == resolved or not parent.is_dir():
        raise InvalidPathError(f"Path has no parent directory: {path}", path=path)
    return resolved, parent


def require_numeric_revision(revision_id: str) -> str:
    """Validate a change/revision number made only of decimal digits.

    Raises:
        InvalidRevisionError: If *revision_id* is empty or not all digits.
    """
    if not revision_id or not (revision_id.isascii() and revision_id.isdigit()):
        raise InvalidRevisionError(
            f"Invalid revision: {revision_id!r}", revision=revision_id
        )
    return revision_id


def working_directory(working_path: Path | str) -> Path:
    """Directory a content query runs from.

    *working_path* may be the local file (which need not exist any more) or
    a directory.

    Raises:
        InvalidPathError: If neither the path nor its parent is a directory.
    """
    candidate = Path(working_path).expanduser()
    if candidate.is_dir():
        return candidate.resolve()
    parent = candidate.parent
    if not parent.is_dir():
        raise InvalidPathError(
            f"No working directory for: {working_path}", path=working_path
        )
    return parent.resolve()
