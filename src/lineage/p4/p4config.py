"""Discovery of Perforce ``P4CONFIG`` files.

p4 reads connection settings from the file named by ``P4CONFIG``, searching
upward from its working directory. When the user has not set ``P4CONFIG``
we look for a file with one of the usual names and pass that name to p4 for
a single launch.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from pathlib import Path

__all__ = ["config_env_override", "find_p4config"]


def find_p4config(start: Path, names: Sequence[str]) -> str | None:
    """Search *start* and its parents for a file named one of *names*.

    Within a directory, *names* are tried in order; the nearest directory
    wins.

    Returns:
        The matching file name (not its path), or None.
    """
    for directory in (start, *start.parents):
        for name in names:
            if (directory / name).is_file():
                return name
    return None


def config_env_override(
    start: Path,
    names: Sequence[str],
    env_var: str = "P4CONFIG",
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Environment additions for one p4 launch from *start*.

    Empty when *env_var* is already set or no config file is found.
    """
    current = os.environ if environ is None else environ
    if current.get(env_var):
        return {}
    name = find_p4config(start, names)
    if name is None:
        return {}
    return {env_var: name}
