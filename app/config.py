# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# Environment-driven configuration (pydantic-settings), read once per process.
# Values come from the process environment first, then from a .env file.
#
# Usage:
#   from app.config import settings
#   if settings.STORAGE_BACKEND == "supabase": ...
#
# A supabase backend without credentials is rejected when the settings load.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    RitmoHub settings.

    Defaults run the API on the in-memory backend with no external services,
    which is what development and the test suite use.
    """

    # -------------------------------------------------------------------------
    # Storage Backend
    # -------------------------------------------------------------------------
    # "memory" keeps everything in process (development, tests, demos).
    # "supabase" persists to the Supabase tables.

    STORAGE_BACKEND: Literal["memory", "supabase"] = Field(
        default="memory",
        description="Where clients, packages and videos are persisted"
    )

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # Required only when STORAGE_BACKEND=supabase

    SUPABASE_URL: str = Field(
        default="",
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        default="",
        description="Supabase service_role key (bypasses RLS)"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Legacy HS256 secret used to verify Supabase access tokens"
    )

    # -------------------------------------------------------------------------
    # Workflow Notifications
    # -------------------------------------------------------------------------

    VIDEO_POSTED_RECIPIENT: str = Field(
        default="2",
        description="User ID notified when a video is posted and awaits the group send"
    )

    COMPLETION_RECIPIENT: str = Field(
        default="admin",
        description="Recipient (role or user ID) notified when a package completes"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # Comma-separated; only enforced in production
    CORS_ORIGINS: str = Field(
        default="http://localhost:5173",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Don't fail if .env doesn't exist
        env_ignore_empty=True,
        case_sensitive=True,
    )

    @model_validator(mode="after")
    def _require_supabase_credentials(self) -> "Settings":
        # Fail at startup rather than on the first query
        if self.STORAGE_BACKEND == "supabase" and not (
            self.SUPABASE_URL and self.SUPABASE_SERVICE_KEY
        ):
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY are required when STORAGE_BACKEND=supabase"
            )
        return self

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        CORS_ORIGINS split on commas.

        Example: "http://localhost:5173, https://app.example.com"
            -> ["http://localhost:5173", "https://app.example.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """Build the Settings once and reuse it."""
    return Settings()


# Module-level instance imported by the rest of the app
settings = get_settings()
