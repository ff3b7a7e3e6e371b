from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "WARNING"

    gitlab_url: str = ""
    gitlab_token: str = ""

    store_backend: str = "gitlab"
    memory_fixture_path: Path | None = None
    jobs_per_page: int = Field(default=50, ge=1)
    request_timeout_seconds: int = Field(default=30, ge=1)

    erase_concurrency: int | None = Field(default=None, ge=1)
    default_expiration_days: int = Field(default=100, ge=0)
