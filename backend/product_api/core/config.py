"""Centralized application settings using pydantic settings."""

from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
# Look for .env in the backend directory or project root
env_path = Path(__file__).parent.parent.parent / ".env"
if not env_path.exists():
    env_path = Path(__file__).parent.parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path, override=False)

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
]


class Settings(BaseSettings):
    """Environment-aware configuration (server, database, CORS)."""

    # Application settings
    app_name: str = "Product Catalog API"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = Field(
        default=4000,
        validation_alias=AliasChoices("port", "PORT"),
        description="Port the HTTP server listens on",
    )

    # Database settings
    database_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("database_url", "DATABASE_URL", "DB"),
        description="Database connection URL",
    )
    database_required: bool = Field(
        default=False,
        validation_alias=AliasChoices("database_required", "DATABASE_REQUIRED"),
        description="Abort startup when the database cannot be reached",
    )

    # CORS settings - stored as string, converted to list via property
    cors_origins_raw: str | None = Field(
        default=None,
        validation_alias=AliasChoices("cors_origins_raw", "CORS_ORIGINS"),
        description="Comma-separated list of allowed CORS origins",
        exclude=True,
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS_ORIGINS from comma-separated string to list."""
        if self.cors_origins_raw is None or not self.cors_origins_raw.strip():
            return list(DEFAULT_CORS_ORIGINS)
        origins = [
            origin.strip().rstrip("/")
            for origin in self.cors_origins_raw.split(",")
            if origin.strip()
        ]
        return origins if origins else list(DEFAULT_CORS_ORIGINS)

    @field_validator("database_url", mode="before")
    @classmethod
    def fix_database_url(cls, v: str | None) -> str | None:
        """Fix Heroku DATABASE_URL format (postgres:// -> postgresql+psycopg://)."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql+psycopg://", 1)
        return v


@lru_cache
def get_settings() -> Settings:
    """Provide singleton-like access for dependency injection."""
    return Settings()
