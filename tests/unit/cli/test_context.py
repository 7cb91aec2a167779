"""Unit tests for CLIContext and ExitCode."""

from __future__ import annotations

import dataclasses

from lineage.cli.context import CLIContext, ExitCode
from lineage.config import LineageConfig


def test_exit_codes() -> None:
    assert ExitCode.SUCCESS == 0
    assert ExitCode.FAILURE == 1
    assert ExitCode.INVALID_INPUT == 2
    assert ExitCode.INTERRUPTED == 130


def test_context_carries_only_what_commands_read() -> None:
    names = [f.name for f in dataclasses.fields(CLIContext)]

    assert names == ["config", "quiet"]


def test_context_defaults_to_not_quiet() -> None:
    cli_ctx = CLIContext(config=LineageConfig())

    assert cli_ctx.quiet is False
