"""Client application settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class ClientSettings(BaseSettings):
    """Runtime settings for the browser/console client.

    `server_url` has no default: without it the client has nothing to talk to.
    """

    app_name: str = "todo-web"
    server_url: str = ""
    client_host: str = "0.0.0.0"
    client_port: int = Field(default=5173, ge=1, le=65535)
    request_timeout_s: float = Field(default=10.0, gt=0)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="TODO_",
        extra="ignore",
        env_file=(PROJECT_ROOT / ".env", PROJECT_ROOT / ".env.local"),
        env_file_encoding="utf-8",
    )

    @field_validator("server_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    def require_server_url(self) -> str:
        if not self.server_url:
            raise RuntimeError("TODO_SERVER_URL is required to start the client.")
        return self.server_url


@lru_cache(maxsize=1)
def get_client_settings() -> ClientSettings:
    return ClientSettings()
