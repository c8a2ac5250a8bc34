"""Authentication models for the Grievance API."""

from pydantic import BaseModel

from grievance_api.database.models.base import UserRole


class TokenClaims(BaseModel):
    """Claims carried by an access token."""

    sub: int  # user id
    role: UserRole
    iss: str
    aud: str
    iat: int
    exp: int
