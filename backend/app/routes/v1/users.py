# backend/app/routes/v1/users.py
"""
User account routes - API v1

Endpoints:
    PATCH /{user_id}                     → Update own name and email
    PATCH /{user_id}/password            → Change own password
"""

import logging
from typing import NoReturn

from fastapi import APIRouter, Body, Depends, HTTPException, status

from ...api.dependencies.auth import AuthContext, verify_auth
from ...api.dependencies.services import get_user_service
from ...core.exceptions import DomainException
from ...schemas.base_responses import ApiResponse, MessageResponse
from ...schemas.user import PasswordUpdateRequest, UserPublic, UserUpdateRequest
from ...services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users-v1"])


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.patch("/{user_id}", response_model=ApiResponse[UserPublic])
def update_user(
    user_id: str,
    payload: UserUpdateRequest = Body(...),
    auth: AuthContext = Depends(verify_auth),
    user_service: UserService = Depends(get_user_service),
) -> ApiResponse[UserPublic]:
    try:
        user = user_service.update_profile(auth.user_id, user_id, payload)
        return ApiResponse(data=UserPublic.model_validate(user), message="Profile updated successfully")
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/{user_id}/password", response_model=MessageResponse)
def update_password(
    user_id: str,
    payload: PasswordUpdateRequest = Body(...),
    auth: AuthContext = Depends(verify_auth),
    user_service: UserService = Depends(get_user_service),
) -> MessageResponse:
    try:
        user_service.change_password(auth.user_id, user_id, payload)
        return MessageResponse(message="Password updated successfully")
    except DomainException as e:
        handle_domain_exception(e)
