"""Application configuration using Pydantic Settings."""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = "sqlite:///./content.db"
    DATABASE_ECHO: bool = False
    AUTO_MIGRATE: bool = True

    # Worker
    WORKER_ENABLED: bool = False
    WORKER_POLL_INTERVAL: int = 5

    # Logging
    LOG_LEVEL: str = "INFO"

    # HTTP
    CORS_ALLOW_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


# Global settings instance
settings = Settings()
