"""Redis configuration for the escalation worker queue."""

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class RedisSettings(BaseSettings):
    """Redis configuration settings."""

    host: str = Field(default="localhost", description="Redis host")
    port: int = Field(default=6379, description="Redis port")
    database: int = Field(default=0, description="Redis database number")
    password: str | None = Field(default=None, description="Redis password")
    max_connections: int = Field(default=10, description="Maximum Redis connections")

    model_config = SettingsConfigDict(env_prefix="REDIS_", case_sensitive=False)


def get_redis_settings() -> RedisSettings:
    """Get Redis settings from environment variables."""
    return RedisSettings()
