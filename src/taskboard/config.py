"""Configuration for the taskboard engine - storage and logging settings."""

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BoardConfig(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TASKBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Runtime environment",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines instead of the themed console format",
    )

    # Storage
    database_url: str = Field(
        default="sqlite:///taskboard.db",
        description="SQLAlchemy database URL for the board store",
    )
    database_echo: bool = Field(
        default=False,
        description="Echo SQL statements (debugging only)",
    )
    seed_default_columns: bool = Field(
        default=True,
        description="Insert the default workflow columns when initializing the schema",
    )

    @model_validator(mode="after")
    def validate_production_storage(self) -> "BoardConfig":
        """Refuse a throwaway in-memory database in production."""
        if self.environment == "production" and self.is_memory_database:
            raise ValueError(
                "An in-memory database_url is forbidden in production. "
                "Point TASKBOARD_DATABASE_URL at a file or server database."
            )
        return self

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured store is SQLite."""
        return self.database_url.startswith("sqlite")

    @property
    def is_memory_database(self) -> bool:
        """Whether the configured store lives only in process memory."""
        return self.database_url in ("sqlite://", "sqlite:///:memory:") or (
            self.is_sqlite and ":memory:" in self.database_url
        )


# Default config instance
config = BoardConfig()
