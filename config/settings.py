"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
Every external credential is optional: a missing Supabase or Anthropic
key degrades the advisor instead of failing startup.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # ===================
    # SUPABASE (row store)
    # ===================
    supabase_url: Optional[str] = Field(
        None,
        description="Supabase project URL"
    )
    supabase_key: Optional[str] = Field(
        None,
        description="Supabase anon/service key"
    )
    inventory_table: str = Field(
        default="inventory_items",
        min_length=1,
        description="Table holding one row per fridge item"
    )

    # ===================
    # GENERATIVE MODEL
    # ===================
    anthropic_api_key: Optional[str] = Field(
        None,
        description="Anthropic API key; advisor runs in preview mode without it"
    )
    ai_model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Model used for cooking and menu advice"
    )
    ai_max_tokens: int = Field(
        default=2048,
        ge=256,
        le=8192,
        description="Maximum tokens per generated answer"
    )
    ai_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Upper bound on a single model invocation"
    )
    advisor_language: str = Field(
        default="English",
        min_length=1,
        description="Language the model is asked to answer in"
    )

    # ===================
    # APP SETTINGS
    # ===================
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        description="Frontend origins allowed by CORS"
    )
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=3001,
        ge=1000,
        le=65535,
        description="API port"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def supabase_configured(self) -> bool:
        """Check if the row store credentials are present."""
        return bool(self.supabase_url and self.supabase_key)

    @property
    def ai_configured(self) -> bool:
        """Check if the generative model credential is present."""
        return bool(self.anthropic_api_key)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are present but invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
