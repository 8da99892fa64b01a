from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from enterprise_directory.core.config import settings
from enterprise_directory.core.security import create_access_token
from enterprise_directory.models.auth import TokenRequest, TokenResponse
from enterprise_directory.services.identity_store import identity_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/token", response_model=TokenResponse)
async def issue_token(credentials: TokenRequest):
    user = await identity_store.check_password(credentials.email, credentials.password)
    if user is None:
        logger.info("Rejected sign-in for %s", credentials.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return TokenResponse(access_token=create_access_token(user.id, settings, email=user.email))
