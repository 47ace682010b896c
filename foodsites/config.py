"""
Configuration and settings for the sites service.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")
    # Comma-separated, e.g. "https://a.example,https://b.example"
    cors_origins: str = Field(default="")

    # Supabase (PostgREST) holding partner registrations
    supabase_url: Optional[str] = Field(default=None)
    supabase_service_role_key: Optional[str] = Field(default=None)
    supabase_table: str = Field(default="partner_registrations")

    # Any SQLAlchemy URL, used when Supabase is not configured
    database_url: Optional[str] = Field(default=None)

    # Resend email API for the contact form
    resend_api_key: Optional[str] = Field(default=None)
    resend_api_url: str = Field(default="https://api.resend.com/emails")
    contact_to_email: Optional[str] = Field(default=None)
    contact_from_email: str = Field(default="onboarding@resend.dev")

    # Google Maps, handed to the front end with map payloads
    google_maps_api_key: Optional[str] = Field(default=None)
    google_maps_map_id: Optional[str] = Field(default=None)

    # Static site collection (markdown with YAML front matter)
    content_dir: str = Field(default="content/sites")

    partner_goal: int = Field(default=100, ge=1)

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
