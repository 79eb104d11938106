"""Application configuration."""

import os
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_key: str
    records_table: str = "records"
    off_base_url: str = "https://world.openfoodfacts.org"
    shared_store_dir: Path = Path(".fit_tracker/shared")
    timezone: str = "UTC"
    widget_refresh_seconds: int = 300
    lookup_cache_ttl_seconds: int = 86400
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def zone(self) -> ZoneInfo:
        """Return the configured local time zone."""
        return ZoneInfo(self.timezone)
