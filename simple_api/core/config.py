"""
Configuration management for the Simple User API.

This module centralizes environment-driven configuration using Pydantic's
`BaseSettings`. The HTTP server, the seed CLI and the tests all consume the
shared `settings` instance so that connection details stay consistent.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field, PositiveInt, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration sourced from environment variables."""

    # General application settings
    API_TITLE: str = "Simple User API"
    API_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = Field("INFO", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    # HTTP server
    HOST: str = "0.0.0.0"
    PORT: int = Field(3030, ge=1, le=65535)
    ALLOWED_ORIGINS: str = "*"

    # Document store
    MONGODB_URI: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "simple_api_db"
    USERS_COLLECTION: str = "users"
    MONGODB_TIMEOUT_MS: PositiveInt = 5000

    # Startup behaviour
    SEED_ON_STARTUP: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @field_validator("LOG_LEVEL", mode="before")
    def _upper_level(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Return a cached `Settings` instance."""

    return Settings()


# Singleton-style settings instance for modules that prefer direct access.
settings = get_settings()
