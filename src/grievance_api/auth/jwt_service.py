"""JWT token service for the Grievance API."""

from datetime import UTC
from datetime import datetime
from datetime import timedelta

import jwt

from jwt import InvalidTokenError
from pydantic import ValidationError

from grievance_api.auth.models import TokenClaims
from grievance_api.config.auth import AuthSettings
from grievance_api.config.auth import get_auth_settings
from grievance_api.database.models.base import UserRole


class JWTService:
    """Issues and verifies bearer access tokens."""

    def __init__(self, settings: AuthSettings | None = None):
        self._settings = settings or get_auth_settings()

    def create_access_token(self, user_id: int, role: UserRole) -> str:
        """Create an access token, used by the login flow and tooling."""
        now = datetime.now(UTC)
        claims = {
            "sub": str(user_id),
            "role": UserRole(role).value,
            "iss": self._settings.jwt_issuer,
            "aud": self._settings.jwt_audience,
            "iat": int(now.timestamp()),
            "exp": int(
                (now + timedelta(seconds=self._settings.access_token_lifetime)).timestamp()
            ),
        }
        return jwt.encode(
            claims, self._settings.jwt_secret_key, algorithm=self._settings.jwt_algorithm
        )

    def decode_token(self, token: str) -> TokenClaims | None:
        """Decode and validate a JWT token. Returns None if invalid or expired."""
        try:
            claims = jwt.decode(
                token,
                self._settings.jwt_secret_key,
                algorithms=[self._settings.jwt_algorithm],
                audience=self._settings.jwt_audience,
                issuer=self._settings.jwt_issuer,
            )
            return TokenClaims(**claims)
        except (InvalidTokenError, ValidationError):
            return None
