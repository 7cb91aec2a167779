"""End-to-end history resolution against a real git repository.

p4 and svn are pointed at executables that do not exist, so they take the
"tool not found" path exactly as on a machine without those clients.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner
from git import Repo

from lineage.config import LineageConfig, P4Config, SvnConfig
from lineage.main import cli
from lineage.vcs.models import Provider
from lineage.vcs.resolver import AsyncHistoryResolver, HistoryResolver
from tests.fixtures.git import CommitFile

pytestmark = pytest.mark.requires_git


@pytest.fixture
def offline_config(lineage_config: LineageConfig) -> LineageConfig:
    return lineage_config.model_copy(
        update={
            "p4": P4Config(executable="lineage-test-missing-p4"),
            "svn": SvnConfig(executable="lineage-test-missing-svn"),
        }
    )


def test_resolve_and_fetch_git_history(
    git_repo: Repo, commit_file: CommitFile, offline_config: LineageConfig
) -> None:
    first = commit_file("docs/guide.md", "# Guide\n", "Add guide")
    commit_file("docs/guide.md", "# Guide\n\nMore.\n", "Expand guide")
    working = Path(git_repo.working_tree_dir or "") / "docs" / "guide.md"
    resolver = HistoryResolver(offline_config)

    result = resolver.resolve(working)

    assert result.provider is Provider.GIT
    assert result.relative_path == "docs/guide.md"
    assert len(result.entries) == 2
    oldest = result.find(first[:10])
    assert oldest is not None
    assert resolver.fetch_entry_content(oldest, result, working) == b"# Guide\n"


def test_untracked_file_everywhere_is_empty_history(
    tmp_path: Path, offline_config: LineageConfig, monkeypatch: pytest.MonkeyPatch
) -> None:
    loose = tmp_path / "loose"
    loose.mkdir()
    target = loose / "scratch.txt"
    target.write_text("x\n")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))

    result = HistoryResolver(offline_config).resolve(target)

    assert result.provider is Provider.NONE
    assert result.relative_path == "scratch.txt"
    assert result.entries == ()


@pytest.mark.asyncio
async def test_async_resolver(
    git_repo: Repo, commit_file: CommitFile, offline_config: LineageConfig
) -> None:
    commit_file("a.txt", "a\n", "Add a")
    working = Path(git_repo.working_tree_dir or "") / "a.txt"

    result = await AsyncHistoryResolver(offline_config).resolve(working)

    assert [e.summary for e in result.entries] == ["Add a"]


def test_cli_show_round_trip(
    git_repo: Repo,
    commit_file: CommitFile,
    clean_env: None,
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    sha = commit_file("notes.txt", "first draft\n", "Draft")
    commit_file("notes.txt", "final\n", "Final")
    monkeypatch.chdir(Path(git_repo.working_tree_dir or ""))
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("LINEAGE_P4__EXECUTABLE", "lineage-test-missing-p4")
    monkeypatch.setenv("LINEAGE_SVN__EXECUTABLE", "lineage-test-missing-svn")

    result = CliRunner().invoke(cli, ["show", "notes.txt", sha[:7]])

    assert result.exit_code == 0
    assert result.stdout_bytes == b"first draft\n"
