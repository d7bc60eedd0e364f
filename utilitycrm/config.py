"""
Application configuration using Pydantic Settings.
All environment variables are loaded from .env file.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./utilitycrm.db",
        description="SQLAlchemy connection string (async driver)"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_database_url(cls, v: str) -> str:
        """Convert standard postgres URL to asyncpg format."""
        if v.startswith("postgres://"):
            v = v.replace("postgres://", "postgresql+asyncpg://", 1)
        elif v.startswith("postgresql://") and "+asyncpg" not in v:
            v = v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    # Catalog
    seed_catalog: bool = Field(
        default=True,
        description="Insert the default providers and offers on startup"
    )

    # Ledger
    amount_decimal_places: int = Field(
        default=2,
        ge=0,
        le=6,
        description="Rounding applied to commission amounts when stored"
    )

    # Application
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    is_production: bool = Field(
        default=False,
        description="Production mode flag"
    )

    @property
    def is_postgres(self) -> bool:
        """True when the configured database is PostgreSQL."""
        return self.database_url.startswith("postgresql")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
