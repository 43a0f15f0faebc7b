"""Tests for structlog configuration and the console renderer."""

import json
from collections.abc import Iterator

import pytest
import structlog

from taskboard.db import TransactionalStore
from taskboard.db.store import log as store_log
from taskboard.logging import BoardRenderer, configure_logging, get_logger, is_configured


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


class TestBoardRenderer:
    """Tests for the pipe-separated renderer."""

    def test_plain_line(self) -> None:
        renderer = BoardRenderer(colors=False)
        line = renderer(
            None,
            "warning",
            {
                "timestamp": "10:00:00",
                "level": "warning",
                "logger": "taskboard.db.store",
                "event": "Transaction rolled back",
                "error": "RuntimeError",
            },
        )
        assert line == "10:00:00 | warning | db       | Transaction rolled back error=RuntimeError"

    def test_component_from_logger_name(self) -> None:
        assert BoardRenderer._component("taskboard.columns.manager") == "columns"
        assert BoardRenderer._component("sqlalchemy") == "sqlalchemy"
        assert BoardRenderer._component("") == "board"

    def test_private_keys_hidden(self) -> None:
        renderer = BoardRenderer(colors=False)
        line = renderer(None, "info", {"event": "x", "_internal": 1, "visible": 2})
        assert "visible=2" in line
        assert "_internal" not in line

    def test_colors_wrap_output(self) -> None:
        renderer = BoardRenderer(colors=True)
        line = renderer(None, "info", {"event": "Task moved", "ok": True})
        assert "\033[" in line
        assert "Task moved" in line

    def test_exception_rendered(self) -> None:
        renderer = BoardRenderer(colors=False)
        try:
            raise ValueError("bad order")
        except ValueError:
            line = renderer(None, "error", {"event": "failed", "exc_info": True})
        assert "ValueError: bad order" in line


class TestConfigureLogging:
    """Tests for configure_logging and get_logger."""

    def test_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="INFO", colors=False)
        assert is_configured() is True

        get_logger("taskboard.columns.manager").info("Column created", column_id="review")

        out = capsys.readouterr().out
        assert "| columns  | Column created column_id=review" in out

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="WARNING", colors=False)
        log = get_logger("taskboard.sequence")

        log.info("hidden")
        log.warning("shown")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "shown" in out

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="INFO", json_output=True)

        get_logger("taskboard.tasks.workflow").info("Task moved", task_id="t1")

        record = json.loads(capsys.readouterr().out.strip())
        assert record["event"] == "Task moved"
        assert record["task_id"] == "t1"
        assert record["logger_name"] == "taskboard.tasks.workflow"
        assert record["level"] == "info"

    def test_module_logger_picks_up_later_configuration(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Loggers created before configure_logging still use the new settings."""
        log = get_logger("taskboard.db.store")
        configure_logging(level="INFO", json_output=True)

        log.info("after")

        assert json.loads(capsys.readouterr().out.strip())["event"] == "after"

    def test_module_level_logger_renders_component(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Loggers bound at import time carry their module name to the renderer."""
        configure_logging(level="INFO", colors=False)
        store_log.info("Transaction rolled back", error="RuntimeError")

        out = capsys.readouterr().out
        assert "| db       | Transaction rolled back error=RuntimeError" in out

    def test_rollback_warning_logged_through_store(
        self, store: TransactionalStore, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(level="INFO", colors=False)

        with pytest.raises(RuntimeError):
            with store.transaction():
                raise RuntimeError("boom")

        assert "| warning | db       | Transaction rolled back error=RuntimeError" in (
            capsys.readouterr().out
        )
