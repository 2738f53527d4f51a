from datetime import timedelta

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = False

    # Application
    app_name: str = "Link Shortener"
    app_version: str = "1.0.0"

    # Short links
    base_url: str = "http://127.0.0.1:8000"
    short_code_length: int = Field(default=8, gt=0, le=64)
    max_generation_attempts: int = Field(default=100, gt=0)
    default_ttl_hours: float = Field(default=24, gt=0)
    default_click_limit: int = Field(default=10, gt=0)

    # Notifications
    notifications_enabled: bool = True
    notification_backend: str = "inbox"  # Options: "inbox", "log", "null"

    # Expired link sweeper
    sweeper_enabled: bool = True
    sweep_interval_seconds: float = Field(default=3600, gt=0)

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def default_ttl(self) -> timedelta:
        return timedelta(hours=self.default_ttl_hours)
