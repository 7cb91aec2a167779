"""Tests for SvnBackend with a mocked CommandRunner."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from lineage.exceptions import (
    BackendError,
    InvalidPathError,
    InvalidRevisionError,
    ToolNotFoundError,
)
from lineage.svn.backend import SvnBackend
from lineage.vcs.models import HistoryEntry, HistoryResult, Provider
from tests.fixtures.runners import make_not_found, make_result

LOG_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<log>
<logentry
   revision="7">
<author>ada</author>
<date>2024-03-01T10:00:00.000000Z</date>
<msg>Tweak</msg>
</logentry>
</log>
"""


@pytest.fixture
def working_copy(tmp_path: Path) -> Path:
    wc = tmp_path / "wc"
    (wc / "src").mkdir(parents=True)
    (wc / "src" / "a.c").write_text("int a;\n")
    return wc.resolve()


@pytest.fixture
def backend(mock_runner: MagicMock) -> SvnBackend:
    return SvnBackend(runner=mock_runner)


class TestSvnBackendHistory:
    """Tests for SvnBackend.history()."""

    def test_history_relative_to_wc_root(
        self, backend: SvnBackend, mock_runner: MagicMock, working_copy: Path
    ) -> None:
        mock_runner.run.side_effect = [
            make_result(stdout=f"{working_copy}\n"),
            make_result(stdout=LOG_XML),
        ]
        target = working_copy / "src" / "a.c"

        result = backend.history(target)

        assert result.provider is Provider.SVN
        assert result.repo_root == str(working_copy)
        assert result.relative_path == "src/a.c"
        assert [e.revision_id for e in result.entries] == ["7"]
        assert result.entries[0].path == "src/a.c"

        info_call, log_call = mock_runner.run.call_args_list
        assert info_call.args[0] == [
            "svn",
            "info",
            "--show-item",
            "wc-root",
            "--non-interactive",
            str(target),
        ]
        assert log_call.args[0] == [
            "svn",
            "log",
            "--xml",
            "-v",
            "--non-interactive",
            str(target),
        ]
        assert log_call.kwargs["cwd"] == target.parent

    def test_unknown_root_falls_back_to_file_name(
        self, backend: SvnBackend, mock_runner: MagicMock, working_copy: Path
    ) -> None:
        mock_runner.run.side_effect = [
            make_result(returncode=1, stderr="svn: E155007: not a working copy"),
            make_result(stdout=LOG_XML),
        ]

        result = backend.history(working_copy / "src" / "a.c")

        assert result.repo_root is None
        assert result.relative_path == "a.c"

    def test_root_not_containing_file_falls_back_to_file_name(
        self,
        backend: SvnBackend,
        mock_runner: MagicMock,
        working_copy: Path,
        tmp_path: Path,
    ) -> None:
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        mock_runner.run.side_effect = [
            make_result(stdout=str(elsewhere)),
            make_result(stdout=LOG_XML),
        ]

        result = backend.history(working_copy / "src" / "a.c")

        assert result.relative_path == "a.c"

    def test_log_failure_raises_backend_error(
        self, backend: SvnBackend, mock_runner: MagicMock, working_copy: Path
    ) -> None:
        mock_runner.run.side_effect = [
            make_result(returncode=1, stderr="svn: E155007: not a working copy"),
            make_result(
                returncode=1,
                stderr="svn: E155007: '/wc/src' is not a working copy",
            ),
        ]

        with pytest.raises(BackendError) as exc_info:
            backend.history(working_copy / "src" / "a.c")

        assert exc_info.value.provider == "svn"
        assert backend.is_no_history(exc_info.value) is True

    def test_auth_failure_is_not_soft(
        self, backend: SvnBackend, mock_runner: MagicMock, working_copy: Path
    ) -> None:
        mock_runner.run.side_effect = [
            make_result(stdout=str(working_copy)),
            make_result(returncode=1, stderr="svn: E170001: Authorization failed"),
        ]

        with pytest.raises(BackendError) as exc_info:
            backend.history(working_copy / "src" / "a.c")

        assert backend.is_no_history(exc_info.value) is False

    def test_missing_svn_raises_tool_not_found(
        self, backend: SvnBackend, mock_runner: MagicMock, working_copy: Path
    ) -> None:
        mock_runner.run.return_value = make_not_found("svn")

        with pytest.raises(ToolNotFoundError):
            backend.history(working_copy / "src" / "a.c")

    def test_directory_is_invalid_input(
        self, backend: SvnBackend, mock_runner: MagicMock, working_copy: Path
    ) -> None:
        with pytest.raises(InvalidPathError):
            backend.history(working_copy / "src")

        mock_runner.run.assert_not_called()


class TestSvnBackendContent:
    """Tests for SvnBackend.content()."""

    def test_cat_at_revision(
        self, backend: SvnBackend, mock_runner: MagicMock, working_copy: Path
    ) -> None:
        mock_runner.run.return_value = make_result(stdout_bytes=b"old body\n")
        target = working_copy / "src" / "a.c"

        data = backend.content("7", target)

        assert data == b"old body\n"
        args, kwargs = mock_runner.run.call_args
        assert args[0] == ["svn", "cat", "-r", "7", "--non-interactive", str(target)]
        assert kwargs["cwd"] == target.parent

    @pytest.mark.parametrize("revision", ["", "HEAD", "r7", "7:8"])
    def test_non_numeric_revision_rejected(
        self,
        backend: SvnBackend,
        mock_runner: MagicMock,
        working_copy: Path,
        revision: str,
    ) -> None:
        with pytest.raises(InvalidRevisionError):
            backend.content(revision, working_copy / "src" / "a.c")

        mock_runner.run.assert_not_called()

    def test_cat_failure_raises(
        self, backend: SvnBackend, mock_runner: MagicMock, working_copy: Path
    ) -> None:
        mock_runner.run.return_value = make_result(
            returncode=1, stderr="svn: E195012: Unable to find repository location"
        )

        with pytest.raises(BackendError):
            backend.content("7", working_copy / "src" / "a.c")

    def test_entry_content_uses_working_path(
        self, backend: SvnBackend, mock_runner: MagicMock, working_copy: Path
    ) -> None:
        mock_runner.run.return_value = make_result(stdout="x")
        entry = HistoryEntry(provider=Provider.SVN, revision_id="3", path="src/a.c")
        result = HistoryResult(
            provider=Provider.SVN,
            repo_root=str(working_copy),
            relative_path="src/a.c",
            entries=(entry,),
        )
        target = working_copy / "src" / "a.c"

        backend.entry_content(entry, result, target)

        assert mock_runner.run.call_args.args[0][-1] == str(target)
