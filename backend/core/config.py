"""
Catalog Console Configuration

Uses pydantic-settings for type-safe environment variable loading.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

DEFAULT_CATALOG_API_URL = "http://localhost:8000/api"

# Find .env file: check CWD first, then parent (project root)
_env_file = Path(".env")
if not _env_file.exists():
    _parent_env = Path(__file__).resolve().parent.parent.parent / ".env"
    if _parent_env.exists():
        _env_file = _parent_env


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Catalog Console"
    app_version: str = "1.0.0"
    app_env: str = "local"
    debug: bool = False

    # Remote catalog REST API
    catalog_api_url: str = DEFAULT_CATALOG_API_URL
    catalog_api_token: str = ""
    catalog_api_timeout: float = 10.0

    # Console behaviour
    page_size: int = 10
    notification_history: int = 50

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    model_config = {
        "env_file": str(_env_file),
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


def is_local_env(raw_env: str) -> bool:
    env = raw_env.strip().lower()
    return env in {"", "local", "dev", "development", "test"}


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    settings = Settings()
    _enforce_runtime_guardrails(settings)
    return settings


def _enforce_runtime_guardrails(settings: Settings) -> None:
    if settings.page_size < 1:
        raise ValueError("page_size must be at least 1")
    if settings.notification_history < 1:
        raise ValueError("notification_history must be at least 1")
    if is_local_env(settings.app_env):
        return

    if settings.debug:
        raise ValueError("Refusing to start with debug=true outside local/dev/test")
    if settings.catalog_api_url.rstrip("/") == DEFAULT_CATALOG_API_URL:
        raise ValueError("Refusing to start with the default catalog API URL outside local/dev/test")
