"""Authorization gate dependencies for FastAPI endpoints."""

import logging

from collections.abc import Callable

from fastapi import Depends
from fastapi import HTTPException
from fastapi import Request
from fastapi import status

from grievance_api.auth.jwt_service import JWTService
from grievance_api.database.models.base import Capability
from grievance_api.database.models.base import UserRole
from grievance_api.database.models.user import User
from grievance_api.database.repositories.user import UserRepository

logger = logging.getLogger(__name__)


async def get_current_user(request: Request) -> User:
    """Resolve the user behind the request's bearer token."""
    authorization = request.headers.get("Authorization", "")
    scheme, _, token = authorization.partition(" ")

    if scheme.lower() != "bearer" or not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, no token",
        )

    claims = JWTService().decode_token(token)
    if claims is None:
        logger.warning("Rejected request with invalid or expired token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, token failed",
        )

    user = await UserRepository().get_by_id(claims.sub)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found"
        )

    return user


# Create dependency instance to avoid function calls in defaults
get_current_user_dependency = Depends(get_current_user)


def require_role(*allowed_roles: UserRole) -> Callable:
    """Dependency factory allowing only the listed roles."""

    async def role_dependency(current_user: User = get_current_user_dependency) -> User:
        if current_user.user_role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions for this action",
            )
        return current_user

    return role_dependency


def require_capability(capability: Capability) -> Callable:
    """Dependency factory requiring a capability such as committee membership."""

    async def capability_dependency(
        current_user: User = get_current_user_dependency,
    ) -> User:
        if not current_user.has_capability(capability):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires capability: {capability.value}",
            )
        return current_user

    return capability_dependency


require_admin = require_role(UserRole.ADMIN)
