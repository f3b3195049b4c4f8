from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Leave Request Service"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production", "test"] = "development"
    log_level: str = "INFO"
    database_url: str = "sqlite+aiosqlite:///./leave_requests.db"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:8000"]

    jwt_secret: str = Field(default="dev-only-secret-change-me-in-production", min_length=32)
    jwt_algorithm: str = "HS256"
    jwt_expiration_minutes: int = Field(default=24 * 60, ge=1)

    holidays_api_url: str = "https://date.nager.at/api/v3"
    holidays_timeout_seconds: float = 10.0


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
