"""Application configuration."""

import os
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path.home() / ".macros"
    timezone: str | None = None
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="MACROS_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_timezone(raw: str | None) -> ZoneInfo | None:
    """Return the configured zone, or None to use the system local zone."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if not cleaned:
        return None
    return ZoneInfo(cleaned)
