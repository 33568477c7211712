"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


DEFAULT_IMAGEN_MODEL = "imagen-4.0-generate-001"
IMAGEN_URL_TEMPLATE = (
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:predict"
)


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="kuchnie.ai", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Database settings - PostgreSQL (Supabase-hosted in production)
    postgres_db_url: str = Field(
        default="postgresql+psycopg2://postgres@localhost:5432/kuchnie",
        description="PostgreSQL connection URL",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=5, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Image generation (Gemini text/edit + Imagen predict)
    gemini_api_url: Optional[str] = Field(
        default=None, description="Gemini generateContent endpoint URL"
    )
    gemini_api_key: Optional[str] = Field(
        default=None, description="API key for Gemini and Imagen"
    )
    imagen_model: str = Field(
        default=DEFAULT_IMAGEN_MODEL, description="Imagen model name"
    )
    imagen_api_url: Optional[str] = Field(
        default=None, description="Explicit Imagen :predict URL (overrides model)"
    )
    generation_timeout_sec: float = Field(
        default=120.0, gt=0, description="Timeout for generation API calls"
    )

    # Supabase (auth + storage)
    supabase_url: Optional[str] = Field(default=None, description="Supabase project URL")
    supabase_anon_key: Optional[str] = Field(
        default=None, description="Supabase anon (public) key"
    )
    supabase_service_key: Optional[str] = Field(
        default=None, description="Supabase service-role key used for storage writes"
    )
    storage_bucket: str = Field(
        default="projects", description="Storage bucket for generated images"
    )
    signed_url_ttl_sec: int = Field(
        default=3600, ge=1, description="Lifetime of signed image URLs"
    )
    supabase_timeout_sec: float = Field(
        default=30.0, gt=0, description="Timeout for Supabase calls"
    )

    # Image proxy
    fetch_image_timeout_sec: float = Field(
        default=30.0, gt=0, description="Timeout for the same-origin image proxy"
    )

    # Planner and sketch sessions (in-process)
    session_max_count: int = Field(
        default=500, ge=1, description="Sessions kept per store before the oldest is dropped"
    )
    session_idle_ttl_sec: float = Field(
        default=3600.0, gt=0, description="Idle time after which a session expires"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="", description="API route prefix")
    api_title: str = Field(
        default="kuchnie.ai API", description="API documentation title"
    )
    api_description: str = Field(
        default="AI kitchen visualisations, planners and partner directory",
        description="API documentation description",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING

    def imagen_endpoint(self) -> str:
        """Imagen :predict URL, explicit override first"""
        if self.imagen_api_url:
            return self.imagen_api_url
        return IMAGEN_URL_TEMPLATE.format(model=self.imagen_model or DEFAULT_IMAGEN_MODEL)


# Global settings instance
settings = Settings()
