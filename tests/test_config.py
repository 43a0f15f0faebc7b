"""Tests for BoardConfig settings loading."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from taskboard.config import BoardConfig


def _config(**kwargs: object) -> BoardConfig:
    return BoardConfig(_env_file=None, **kwargs)  # type: ignore[arg-type]


class TestDefaults:
    """Tests for default values."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TASKBOARD_DATABASE_URL", raising=False)
        monkeypatch.delenv("TASKBOARD_ENVIRONMENT", raising=False)
        cfg = _config()
        assert cfg.environment == "development"
        assert cfg.database_url == "sqlite:///taskboard.db"
        assert cfg.seed_default_columns is True
        assert cfg.is_sqlite is True
        assert cfg.is_memory_database is False


class TestEnvironment:
    """Tests for TASKBOARD_* environment variables."""

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TASKBOARD_DATABASE_URL", "postgresql://u:p@db/board")
        monkeypatch.setenv("TASKBOARD_LOG_LEVEL", "DEBUG")
        cfg = _config()
        assert cfg.database_url == "postgresql://u:p@db/board"
        assert cfg.log_level == "DEBUG"
        assert cfg.is_sqlite is False

    def test_invalid_log_level(self) -> None:
        with pytest.raises(PydanticValidationError):
            _config(log_level="LOUD")


class TestMemoryDatabase:
    """Tests for in-memory database detection and the production guard."""

    @pytest.mark.parametrize(
        "url",
        ["sqlite://", "sqlite:///:memory:", "sqlite+pysqlite:///:memory:"],
    )
    def test_memory_urls(self, url: str) -> None:
        assert _config(database_url=url).is_memory_database is True

    def test_file_url_is_not_memory(self) -> None:
        assert _config(database_url="sqlite:////var/lib/board.db").is_memory_database is False

    def test_production_rejects_memory_database(self) -> None:
        with pytest.raises(PydanticValidationError, match="in-memory"):
            _config(environment="production", database_url="sqlite://")

    def test_production_accepts_file_database(self) -> None:
        cfg = _config(environment="production", database_url="sqlite:////data/board.db")
        assert cfg.environment == "production"
