from __future__ import annotations

import logging

from fastapi import Depends, Header, HTTPException, status

from enterprise_directory.core.config import settings
from enterprise_directory.core.security import decode_access_token
from enterprise_directory.models.auth import AuthContext
from enterprise_directory.services.identity_store import identity_store

logger = logging.getLogger(__name__)


async def get_auth_context(authorization: str | None = Header(None)) -> AuthContext:
    """Resolve the caller, re-reading role membership on every request."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization.split(" ", 1)[1]
    payload = decode_access_token(token, settings)

    user = await identity_store.find_by_id(payload["sub"])
    if user is None:
        logger.warning("Token subject %s no longer exists", payload["sub"])
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    roles = await identity_store.get_roles(user.id)
    return AuthContext(id=user.id, email=user.email, roles=roles)


def require_role(*roles: str):
    async def _check_role(auth: AuthContext = Depends(get_auth_context)) -> AuthContext:  # noqa: B008
        if not any(auth.has_role(r) for r in roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {', '.join(roles)}",
            )
        return auth

    return _check_role
