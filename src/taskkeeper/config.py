"""Application settings loaded from the environment (+ optional .env)."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Runtime settings, overridable via TASKKEEPER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TASKKEEPER_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "taskkeeper"

    # Storage
    database_path: Path = BASE_DIR / "tasks.db"

    # Logging
    log_level: str = "INFO"
    log_dir: Path | None = None

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
