"""Tests for shared input validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from lineage.exceptions import InvalidPathError, InvalidRevisionError
from lineage.vcs.inputs import (
    require_file,
    require_numeric_revision,
    working_directory,
)


class TestRequireFile:
    """Tests for require_file()."""

    def test_returns_resolved_file_and_parent(self, tmp_path: Path) -> None:
        target = tmp_path / "a.txt"
        target.write_text("x")

        resolved, parent = require_file(str(target))

        assert resolved == target.resolve()
        assert parent == target.resolve().parent

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidPathError) as exc_info:
            require_file(tmp_path / "missing.txt")

        assert exc_info.value.path == tmp_path / "missing.txt"

    def test_directory(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidPathError):
            require_file(tmp_path)

    def test_symlink_is_resolved(self, tmp_path: Path) -> None:
        real_dir = tmp_path / "real"
        real_dir.mkdir()
        target = real_dir / "a.txt"
        target.write_text("x")
        link = tmp_path / "link.txt"
        link.symlink_to(target)

        resolved, parent = require_file(link)

        assert resolved == target.resolve()
        assert parent == real_dir.resolve()


class TestRequireNumericRevision:
    """Tests for require_numeric_revision()."""

    @pytest.mark.parametrize("revision", ["0", "7", "1234567890"])
    def test_accepts_digits(self, revision: str) -> None:
        assert require_numeric_revision(revision) == revision

    @pytest.mark.parametrize("revision", ["", " 7", "7 ", "+7", "0x10", "٣", "HEAD"])
    def test_rejects_everything_else(self, revision: str) -> None:
        with pytest.raises(InvalidRevisionError) as exc_info:
            require_numeric_revision(revision)

        assert exc_info.value.revision == revision


class TestWorkingDirectory:
    """Tests for working_directory()."""

    def test_directory_is_used_as_is(self, tmp_path: Path) -> None:
        assert working_directory(tmp_path) == tmp_path.resolve()

    def test_file_uses_parent(self, tmp_path: Path) -> None:
        target = tmp_path / "a.txt"
        target.write_text("x")

        assert working_directory(target) == tmp_path.resolve()

    def test_deleted_file_uses_parent(self, tmp_path: Path) -> None:
        assert working_directory(tmp_path / "gone.txt") == tmp_path.resolve()

    def test_missing_parent(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidPathError):
            working_directory(tmp_path / "no" / "such" / "file.txt")
