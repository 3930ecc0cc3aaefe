"""Application configuration using Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # System Configuration
    api_prefix: str = "/api"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: str = "*"

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 5001
    port_max_attempts: int = 10
    shutdown_timeout_seconds: int = 10

    # Rate Limiting
    rate_limit_enabled: bool = True
    rate_limit_default: str = "1000 per 15 minutes"

    # Supabase Configuration
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""

    # MongoDB Configuration
    mongodb_uri: str = "mongodb://localhost:27017/test"
    mongodb_database: str = "test"  # Used when the URI does not name a database

    # PostHog Configuration
    posthog_api_key: str | None = None
    posthog_host: str = "https://app.posthog.com"

    @property
    def cors_origin_list(self) -> list[str]:
        """Comma separated CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
