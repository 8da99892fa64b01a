from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from enterprise_directory.core.dependencies import require_role
from enterprise_directory.core.exceptions import UnauthorizedError
from enterprise_directory.models.auth import AuthContext, Roles
from enterprise_directory.models.user import UserModel
from enterprise_directory.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserModel])
async def list_users(
    auth: AuthContext = Depends(require_role(Roles.ADMIN)),  # noqa: B008
):
    return await user_service.get_all_users()


@router.post("/{user_id}/admin/{is_admin}", status_code=status.HTTP_204_NO_CONTENT)
async def set_user_is_admin(
    user_id: str,
    is_admin: bool,
    auth: AuthContext = Depends(require_role(Roles.ADMIN)),  # noqa: B008
):
    try:
        await user_service.set_is_admin(user_id, is_admin, auth)
    except UnauthorizedError as err:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(err)) from err
    return Response(status_code=status.HTTP_204_NO_CONTENT)
