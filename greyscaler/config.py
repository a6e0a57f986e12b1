"""Configuration management using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the greyscale CLI and HTTP service."""

    model_config = SettingsConfigDict(
        env_prefix="GREYSCALER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "WARNING"

    # Transform: number of row bands converted in parallel
    workers: int = Field(default=1, ge=1)

    # HTTP service
    service_host: str = "0.0.0.0"
    service_port: int = 8020
    service_log_level: str = "info"


# Global settings instance
settings = Settings()
