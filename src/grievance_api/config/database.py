"""Database configuration for the Grievance API."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    # Database connection
    database_url: str = Field(
        default="",
        description="PostgreSQL database URL",
    )
    username: str = Field(default="postgres", description="Database username")
    password: str = Field(default="password", description="Database password")
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="grievances", description="Database name")
    ssl_mode: str = Field(default="prefer", description="SSL mode")

    # Connection pool settings
    min_pool_size: int = Field(default=2, description="Minimum connection pool size")
    max_pool_size: int = Field(default=10, description="Maximum connection pool size")
    pool_timeout: float = Field(
        default=30.0, description="Connection pool timeout in seconds"
    )

    # Query settings
    command_timeout: float = Field(
        default=60.0, description="Command timeout in seconds"
    )

    # Migration settings
    migration_table: str = Field(
        default="_yoyo_migration", description="Migration tracking table name"
    )

    model_config = SettingsConfigDict(env_prefix="DATABASE_", case_sensitive=False)


def get_database_settings() -> DatabaseSettings:
    """Get database settings from environment variables."""
    return DatabaseSettings()


def get_database_url() -> str:
    """Get the database URL, with environment variable override."""
    settings = get_database_settings()

    return (
        settings.database_url
        or os.getenv("DATABASE_URL")
        or os.getenv("POSTGRES_URL")
        or f"postgresql://{settings.username}:{settings.password}@{settings.host}:{settings.port}/{settings.database}?sslmode={settings.ssl_mode}"
    )


def get_migration_database_url() -> str:
    """Get database URL for migrations."""
    url = get_database_url()

    # yoyo only understands the postgresql:// scheme
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)

    return url
