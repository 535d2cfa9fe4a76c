from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings, read from ``HR_LEAVE_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="HR_LEAVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "HR Leave Service"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    database_url: str = "postgresql+asyncpg://hr_leave:hr_leave@db:5432/hr_leave"
    database_echo: bool = False
    database_pool_size: int = 5
    database_max_overflow: int = 10

    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:8000"]


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
