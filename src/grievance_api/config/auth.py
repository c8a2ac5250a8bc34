"""Authentication configuration for the Grievance API."""

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class AuthSettings(BaseSettings):
    """Bearer token validation settings.

    Tokens are issued by the login service; this API only verifies them.
    """

    jwt_secret_key: str = Field(default="", description="JWT signing secret key")
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_issuer: str = Field(default="grievance-auth", description="JWT issuer")
    jwt_audience: str = Field(default="grievance-api", description="JWT audience")
    access_token_lifetime: int = Field(
        default=3600, description="Access token lifetime in seconds"
    )

    model_config = SettingsConfigDict(env_prefix="AUTH_", case_sensitive=False)


def get_auth_settings() -> AuthSettings:
    """Get authentication settings instance."""
    from grievance_api.config.settings import get_settings

    return get_settings().auth
