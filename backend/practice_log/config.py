from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Practice Log API"
    app_system_name: str = "Practice Log Collection System"
    app_version: str = "1.0.0"
    app_env: str = "development"
    cors_origins: list[str] = ["*"]

    # Record store
    database_url: str = "postgresql://localhost:5432"
    database_name: str = "homework_db"
    connect_timeout_seconds: float = 10.0
    socket_timeout_seconds: float = 30.0

    # Warm up the store connection in the background after startup
    eager_connect: bool = True
    connect_grace_seconds: float = 3.0

    # Request handling
    trust_forwarded_for: bool = False    # take client IP from X-Forwarded-For
    default_page_size: int = 20
    max_page_size: int = 500
    clamp_negative_counters: bool = False

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_storage: str = "INFO"          # connector lifecycle + repositories

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
