"""Application configuration management using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Required settings will raise validation errors if not provided.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="couplesflix-api", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/staging/production)")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")
    max_request_body_size: int = Field(
        default=6 * 1024 * 1024,
        description="Maximum accepted request body in bytes (avatar uploads plus form overhead)",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173,http://localhost:8080",
        description="Comma-separated list of allowed CORS origins",
    )

    # Supabase
    supabase_url: str = Field(..., description="Supabase project URL")
    supabase_secret_key: str = Field(..., description="Supabase secret key for backend operations")
    supabase_signing_key_jwk: str = Field(..., description="Supabase signing key JWK (JSON string) for JWT token verification")

    # Avatar storage
    avatar_bucket: str = Field(default="avatars", description="Storage bucket holding profile pictures")
    avatar_max_size_bytes: int = Field(default=5 * 1024 * 1024, description="Largest accepted avatar upload")

    # TMDB
    tmdb_api_key: str = Field(..., description="TMDB v3 API key")
    tmdb_base_url: str = Field(default="https://api.themoviedb.org/3", description="TMDB REST API base URL")
    tmdb_image_base_url: str = Field(default="https://image.tmdb.org/t/p", description="TMDB image CDN base URL")
    tmdb_language: str = Field(default="pt-BR", description="Language requested from TMDB")
    tmdb_timeout_seconds: float = Field(default=15.0, description="Timeout for a single TMDB request")

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton.

    Returns:
        Settings: Application settings instance.

    Note:
        Settings are cached using lru_cache for performance.
        Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
