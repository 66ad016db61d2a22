"""Application settings."""

from functools import lru_cache
import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_DATABASE_URL = "postgresql://localhost:5432/todoapp"
DEFAULT_PORT = 5000


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "todo-api"
    database_url: str = ""
    storage_backend: Literal["postgres", "memory"] = "postgres"
    host: str = "0.0.0.0"
    port: int | None = Field(default=None, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="TODO_",
        extra="ignore",
        env_file=(PROJECT_ROOT / ".env", PROJECT_ROOT / ".env.local"),
        env_file_encoding="utf-8",
    )

    def resolved_database_url(self) -> str:
        return self.database_url or os.getenv("DATABASE_URL", "") or DEFAULT_DATABASE_URL

    def resolved_port(self) -> int:
        if self.port is not None:
            return self.port
        raw_value = os.getenv("PORT")
        if raw_value is None:
            return DEFAULT_PORT
        try:
            port = int(raw_value)
        except ValueError:
            return DEFAULT_PORT
        # Same bounds as the TODO_PORT field; anything else falls back to the default.
        if not 1 <= port <= 65535:
            return DEFAULT_PORT
        return port


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
