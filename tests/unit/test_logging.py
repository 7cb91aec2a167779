"""Tests for the lineage.logging module."""

from __future__ import annotations

import json
import logging
import os
from unittest.mock import patch

import pytest
import structlog

from lineage.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def _reset_context() -> None:
    clear_context()


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_explicit_level(self) -> None:
        configure_logging(level=logging.DEBUG)

        assert logging.getLogger().level == logging.DEBUG

    def test_level_from_env(self) -> None:
        with patch.dict(os.environ, {"LINEAGE_LOG_LEVEL": "info"}):
            configure_logging()

        assert logging.getLogger().level == logging.INFO

    def test_unknown_level_name_falls_back_to_warning(self) -> None:
        with patch.dict(os.environ, {"LINEAGE_LOG_LEVEL": "chatty"}):
            configure_logging()

        assert logging.getLogger().level == logging.WARNING

    def test_repeated_calls_keep_one_handler(self) -> None:
        configure_logging()
        configure_logging()

        assert len(logging.getLogger().handlers) == 1

    def test_json_output_goes_to_stderr(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(force_json=True, level=logging.INFO)

        get_logger("lineage.test").info("history_resolved", provider="svn")

        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip().splitlines()[-1])
        assert record["event"] == "history_resolved"
        assert record["provider"] == "svn"
        assert record["level"] == "info"

    def test_json_via_env(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.dict(os.environ, {"LINEAGE_LOG_FORMAT": "json"}):
            configure_logging(level=logging.WARNING)

        get_logger("lineage.test").warning("unclassified_backend_error")

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["event"] == "unclassified_backend_error"

    def test_below_level_is_dropped(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(force_json=True, level=logging.WARNING)

        get_logger("lineage.test").debug("command_started")

        assert "command_started" not in capsys.readouterr().err


class TestContext:
    """Tests for bind_context and clear_context."""

    def test_bound_context_is_included(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(force_json=True, level=logging.INFO)
        bind_context(path="/work/a.c")

        get_logger("lineage.test").info("history_resolved")

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["path"] == "/work/a.c"

    def test_clear_context(self) -> None:
        bind_context(path="/work/a.c")
        clear_context()

        assert structlog.contextvars.get_contextvars() == {}
