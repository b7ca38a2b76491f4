"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="DELIVERY_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Delivery Fee API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level.")

    nominatim_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Base URL of the Nominatim geocoding service.",
    )
    nominatim_user_agent: str = Field(
        default="RestaurantApp/1.0",
        description="User-Agent sent to Nominatim (required by its usage policy).",
    )
    geocoder_timeout_seconds: float = Field(default=10.0, gt=0.0)
    viacep_base_url: str = Field(
        default="https://viacep.com.br",
        description="Base URL of the ViaCEP postal code service.",
    )

    default_max_delivery_radius_km: float = Field(
        default=50.0,
        gt=0.0,
        description="Delivery radius used when a restaurant has none configured.",
    )
    cache_ttl_seconds: float = Field(
        default=300.0,
        ge=0.0,
        description="How long restaurant settings and zones are cached between quotes.",
    )
    quote_session_capacity: int = Field(
        default=10_000,
        ge=1,
        description="Maximum number of quote sessions tracked for stale-result detection.",
    )

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("nominatim_base_url", "viacep_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


settings = Settings()
