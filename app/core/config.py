"""
Configuration module for the Opus Automations site backend.
Manages environment variables and application settings.
"""
from pathlib import Path
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    app_name: str = "Opus Automations"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = Field(default="development", validation_alias="NODE_ENV")
    port: int = 8080
    site_type: str = "merged_single_page"
    contact_email: str = "tony@opusautomations.com"

    # Static assets (index.html and friends)
    static_dir: str = str(Path(__file__).resolve().parent.parent / "static")

    # n8n workflow webhook (contact + assessment relay)
    n8n_webhook_url: Optional[str] = None
    webhook_timeout: float = 15.0
    webhook_user_agent: str = "Opus-Automations-Merged-Server"

    # Security
    rate_limit_requests: int = 100  # per IP per window
    rate_limit_window_seconds: int = 15 * 60
    contact_rate_limit_requests: int = 5  # form submissions per IP per window
    contact_rate_limit_window_seconds: int = 60 * 60

    class Config:
        env_file = ".env"
        case_sensitive = False
        populate_by_name = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
