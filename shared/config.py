"""
Centralized configuration for the Club Events backend.

All settings are loaded from environment variables with sensible defaults.
Backend settings are namespaced (SUPABASE_*, STORAGE_*).
"""

from functools import lru_cache
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from typing import Annotated


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Club Events API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    # Direct Postgres URL, only needed by run_migrations.py
    supabase_db_url: str = ""

    # Storage
    storage_bucket: str = "event-images"
    placeholder_image_url: str = "assets/images/placeholder.jpg"

    # Organizer access. Comma-separated in the environment:
    # ADMIN_EMAILS=admin@club.example,organizer@club.example
    admin_emails: Annotated[list[str], NoDecode] = []

    # Accounts
    min_password_length: int = 6

    # Frontend URLs (for redirects)
    frontend_url: str = "http://localhost:5173"

    @field_validator("admin_emails", mode="before")
    @classmethod
    def _split_admin_emails(cls, value):
        if isinstance(value, str):
            return [email.strip() for email in value.split(",") if email.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
