"""Temporary git repositories built with GitPython."""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from git import Actor, Repo

#: Author used for every fixture commit.
TEST_AUTHOR = Actor("Test User", "test@example.com")


@pytest.fixture
def git_repo(tmp_path: Path) -> Generator[Repo, None, None]:
    """Create an empty git repository with a configured identity.

    Yields:
        The GitPython Repo; its working tree is ``tmp_path / "repo"``.
    """
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    repo = Repo.init(repo_path)
    with repo.config_writer() as writer:
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("user", "name", "Test User")
        writer.set_value("commit", "gpgsign", "false")
    yield repo
    repo.close()


CommitFile = Callable[..., str]


@pytest.fixture
def commit_file(git_repo: Repo) -> CommitFile:
    """Factory: write *content* to *relative_path* and commit it.

    Returns the new commit's hexsha.
    """

    def _commit(relative_path: str, content: str, message: str) -> str:
        root = Path(git_repo.working_tree_dir or "")
        target = root / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
        git_repo.index.add([relative_path])
        commit = git_repo.index.commit(
            message, author=TEST_AUTHOR, committer=TEST_AUTHOR
        )
        return commit.hexsha

    return _commit
