"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./ledger.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    # Off when the schema is managed by alembic
    create_tables: bool = True


class LoggingSettings(BaseModel):
    level: str = "INFO"
    directory: Path = Field(default=Path("logs"))
    file_name: str = "bank_ledger.log"
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5


class LedgerSettings(BaseModel):
    # Retries after an optimistic version conflict on account save.
    max_conflict_retries: int = Field(default=3, ge=0)
    check_incoming_pending_on_delete: bool = False


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Bank Ledger Transfers"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    logging: LoggingSettings = LoggingSettings()
    ledger: LedgerSettings = LedgerSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def log_file(self) -> Path:
        return self.logging.directory / self.logging.file_name


@lru_cache()
def get_settings() -> Settings:
    return Settings()
