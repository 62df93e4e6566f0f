"""
Configuration module for the Clinic Console.
Loads settings from environment variables (and an optional .env file).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Clinic backend
    api_base_url: str = Field(
        default="https://crmeyecare.onrender.com",
        alias="CLINIC_API_BASE_URL",
        description="Base URL of the clinic REST backend"
    )

    # Credentials
    access_token: str = Field(
        default="",
        alias="CLINIC_ACCESS_TOKEN",
        description="Bearer token seeded into the credential store at startup"
    )
    credential_key: str = Field(
        default="accessToken",
        alias="CREDENTIAL_KEY",
        description="Key under which the bearer token is kept in the credential store"
    )

    # Dashboard presentation
    recent_appointments_limit: int = Field(
        default=5,
        alias="RECENT_APPOINTMENTS_LIMIT",
        description="Number of appointments shown in the recent list"
    )
    display_timezone: str = Field(
        default="UTC",
        alias="DISPLAY_TIMEZONE",
        description="IANA time zone used when formatting appointment times"
    )

    # Application Configuration
    app_host: str = Field(
        default="0.0.0.0",
        alias="APP_HOST",
        description="Host to bind the application"
    )
    app_port: int = Field(
        default=8000,
        alias="APP_PORT",
        description="Port to bind the application"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level"
    )


# Global settings instance
settings = Settings()
