"""
Configuration management using Pydantic Settings.
Centralized config: database, JWT, storage backend, image limits, logging.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment. Validates at startup."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Pet Finder API"
    environment: Literal["development", "testing", "production"] = "development"
    debug: bool = False
    secret_key: str = "pet-finder-secret-key"

    # "sql" for PostgreSQL, "memory" for the demo backend (data lost on restart)
    storage_backend: Literal["sql", "memory"] = "sql"

    # Database (PostgreSQL). database_url wins over the individual parts.
    database_url: str | None = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "petfinder"
    create_tables_on_startup: bool = False

    # JWT
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24

    # Uploaded images are stored inline, keep them bounded
    max_image_bytes: int = 10 * 1024 * 1024

    # Geocoding table override (JSON file with the same layout as the bundled one)
    neighborhoods_file: str | None = None

    # HTTP
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"
    log_format: Literal["standard", "json"] = "standard"

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance. Avoids re-reading env on every request."""
    return Settings()
