"""Application configuration."""

import os
from uuid import UUID

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

SUPPORTED_LOCALES = ("en", "de")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    default_locale: str = "en"
    default_timezone: str = "UTC"
    consumption_policy: str = "refill"
    mock_user_id: UUID | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_locale(raw: str | None, default: str = "en") -> str:
    """Pick a supported locale from an Accept-Language style header."""
    if raw is None:
        return default
    for chunk in raw.split(","):
        tag = chunk.split(";")[0].strip().lower()
        if not tag:
            continue
        language = tag.split("-")[0]
        if language in SUPPORTED_LOCALES:
            return language
    return default
