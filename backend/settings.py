"""
Runtime configuration for the Summit API.

Values come from environment variables or a local ``.env`` file. Routers
and providers take ``Settings`` through ``Depends(get_settings)``; tests
build their own with ``Settings(_env_file=None)``.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENVIRONMENTS = ("development", "staging", "production", "test")


def _split_csv(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseSettings):
    """Summit API settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development", description="One of ENVIRONMENTS")

    # Supabase
    supabase_url: Optional[str] = Field(default=None, description="Project URL")
    supabase_service_role_key: Optional[str] = Field(default=None, description="Server-side key")
    supabase_anon_key: Optional[str] = Field(default=None, description="Public key, used when no service key is set")
    supabase_jwt_secret: Optional[str] = Field(
        default=None,
        description="HS256 secret that signs user access tokens",
    )

    # Auth and HTTP
    api_keys: str = Field(default="", description="Comma-separated keys, each optionally suffixed ':user_id' by callers")
    cors_allowed_origins: str = Field(default="http://localhost:3000,http://localhost:5173")

    # Elevation engine
    default_rider_weight_kg: float = Field(
        default=75.0,
        gt=0,
        description="Mass used for elevation when the profile has no weight",
    )

    # Sentry
    sentry_dsn: Optional[str] = None
    sentry_traces_sample_rate: float = Field(default=0.1, ge=0, le=1)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        normalized = v.lower()
        if normalized not in ENVIRONMENTS:
            raise ValueError(f"Unknown environment '{v}', expected one of {', '.join(ENVIRONMENTS)}")
        return normalized

    @property
    def supabase_key(self) -> Optional[str]:
        """Service role key when present, otherwise the anon key."""
        return self.supabase_service_role_key or self.supabase_anon_key

    @property
    def api_keys_list(self) -> List[str]:
        return _split_csv(self.api_keys)

    @property
    def cors_origins_list(self) -> List[str]:
        return _split_csv(self.cors_allowed_origins)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings; call ``get_settings.cache_clear()`` to reload."""
    return Settings()
