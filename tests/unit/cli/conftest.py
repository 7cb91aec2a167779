"""Shared fixtures for CLI command tests.

Common fixtures available from parent conftest.py:
- cli_runner: Click CLI test runner (from tests/conftest.py)
- temp_dir: Temporary directory for test files (from tests/conftest.py)
- clean_env: Clean environment without LINEAGE_ vars (from tests/conftest.py)
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from lineage.vcs.models import HistoryEntry, HistoryResult, Provider

SHA_NEW = "1a2b3c4d" + "0" * 32
SHA_OLD = "9f8e7d6c" + "0" * 32


@pytest.fixture
def cli_home(
    clean_env: None, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Working directory and HOME for CLI runs, with a file to query."""
    monkeypatch.chdir(temp_dir)
    monkeypatch.setenv("HOME", str(temp_dir))
    (temp_dir / "a.c").write_text("int a;\n")
    return temp_dir


@pytest.fixture
def git_result(cli_home: Path) -> HistoryResult:
    """A two-commit git history for ``a.c`` with a rename."""
    return HistoryResult(
        provider=Provider.GIT,
        repo_root=str(cli_home),
        relative_path="a.c",
        entries=(
            HistoryEntry(
                provider=Provider.GIT,
                revision_id=SHA_NEW,
                timestamp=1700000000,
                author="Ada",
                summary="Rename [bold]old[/bold] to a.c\n\nbody",
                path="a.c",
            ),
            HistoryEntry(
                provider=Provider.GIT,
                revision_id=SHA_OLD,
                timestamp=1690000000,
                author="Bob",
                summary="Add old.c",
                path="old.c",
            ),
        ),
    )


@pytest.fixture
def mock_resolver() -> Iterator[MagicMock]:
    """Patch HistoryResolver in both command modules with one mock instance."""
    instance = MagicMock()
    with (
        patch("lineage.cli.commands.history.HistoryResolver", return_value=instance),
        patch("lineage.cli.commands.show.HistoryResolver", return_value=instance),
    ):
        yield instance
