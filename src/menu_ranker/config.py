"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    fatsecret_client_id: str
    fatsecret_client_secret: str
    fatsecret_token_url: str = "https://oauth.fatsecret.com/connect/token"
    fatsecret_base_url: str = "https://platform.fatsecret.com/rest"
    supabase_url: str
    supabase_service_key: str
    google_maps_key: str | None = None
    default_rank_limit: int = 50
    browse_limit: int = 50
    fetch_chunk_size: int = 5
    search_max_results: int = 50
    http_timeout_seconds: float = 15.0
    freshness_seconds: int = 3600
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
