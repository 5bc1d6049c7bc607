"""Application settings and configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="NETWORTH_",
    )

    app_name: str = "Networth Portfolio Valuation"
    app_version: str = "0.1.0"

    # Read-only transaction store
    database_url: str = "sqlite:///./networth.db"

    log_level: str = "INFO"

    # Dashboard computation
    dashboard_cache_ttl_minutes: float = 5
    aggregation_workers: int = 8

    # Calendar used for "today" and month bucketing
    timezone: str = "Asia/Kolkata"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
