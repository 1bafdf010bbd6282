"""
Configuration Management
Loads and validates environment variables using Pydantic Settings
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Uses .env file in development, environment variables in production.
    """

    # Application
    app_name: str = Field(default="Station Locator API", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=True, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    # CORS
    cors_origins: str = Field(
        default="http://localhost:5173",
        alias="CORS_ORIGINS"
    )

    @validator("cors_origins")
    def parse_cors_origins(cls, v: str) -> List[str]:
        """Parse comma-separated CORS origins into list"""
        return [origin.strip() for origin in v.split(",")]

    # Upstream services
    kiosk_api_url: str = Field(
        default="http://localhost:1880/api/public/locations",
        alias="KIOSK_API_URL"
    )
    geocode_api_url: str = Field(
        default="http://localhost:1880/api/geocode",
        alias="GEOCODE_API_URL"
    )
    upstream_timeout_seconds: float = Field(
        default=10.0,
        alias="UPSTREAM_TIMEOUT_SECONDS"
    )

    # Search
    search_radius_miles: float = Field(default=25.0, alias="SEARCH_RADIUS_MILES")
    freshness_window_days: int = Field(default=10, alias="FRESHNESS_WINDOW_DAYS")
    connectivity_stale_minutes: int = Field(
        default=10,
        alias="CONNECTIVITY_STALE_MINUTES"
    )
    device_location_timeout_seconds: float = Field(
        default=10.0,
        alias="DEVICE_LOCATION_TIMEOUT_SECONDS"
    )

    # Localization
    default_locale: str = Field(default="en", alias="DEFAULT_LOCALE")

    # Rate Limiting
    rate_limit_search_per_minute: int = Field(
        default=60,
        alias="RATE_LIMIT_SEARCH_PER_MINUTE"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """
    Dependency function to get settings instance.
    Useful for dependency injection in FastAPI.
    """
    return settings
