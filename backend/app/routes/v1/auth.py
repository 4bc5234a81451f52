# backend/app/routes/v1/auth.py
"""
Authentication routes - API v1

Versioned authentication endpoints under /api/v1/auth.

Endpoints:
    POST /register                       → Create a tutor or learner account
    POST /login                          → Email/password login, returns a JWT
"""

import logging
from typing import NoReturn

from fastapi import APIRouter, Body, Depends, HTTPException, status

from ...api.dependencies.services import get_auth_service
from ...core.exceptions import DomainException
from ...schemas.base_responses import ApiResponse
from ...schemas.user import AuthUser, LoginData, LoginRequest, RegisterRequest
from ...services.auth_service import AuthService

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["auth-v1"])


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.post("/register", response_model=ApiResponse[AuthUser], status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest = Body(...),
    auth_service: AuthService = Depends(get_auth_service),
) -> ApiResponse[AuthUser]:
    """
    Register a new user.

    Tutors registering with a bio get their tutor profile immediately.
    """
    try:
        user = auth_service.register_user(payload)
        return ApiResponse(data=AuthUser.model_validate(user), message="User registered successfully")
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/login", response_model=ApiResponse[LoginData])
def login(
    payload: LoginRequest = Body(...),
    auth_service: AuthService = Depends(get_auth_service),
) -> ApiResponse[LoginData]:
    """Exchange email and password for a 7-day access token."""
    try:
        user, token = auth_service.authenticate(payload.email, payload.password)
        return ApiResponse(
            data=LoginData(user=AuthUser.model_validate(user), token=token),
            message="Login successful",
        )
    except DomainException as e:
        handle_domain_exception(e)
