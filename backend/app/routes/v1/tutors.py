# backend/app/routes/v1/tutors.py
"""
Tutor routes - API v1

Endpoints:
    GET /                                → Public tutor directory
    GET /profile                         → Signed-in tutor's own profile
    PATCH /profile                       → Update (or create) own profile
    GET /{tutor_id}                      → Tutor page with skills
"""

import logging
from typing import List, NoReturn

from fastapi import APIRouter, Body, Depends, HTTPException, status

from ...api.dependencies.auth import get_current_user
from ...api.dependencies.services import get_tutor_service
from ...core.exceptions import DomainException
from ...models.user import User
from ...schemas.base_responses import ApiResponse
from ...schemas.tutor import TutorCard, TutorDetailData, TutorProfile, TutorProfileUpdate
from ...services.tutor_service import TutorService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tutors-v1"])


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


# Static routes first (before dynamic routes with path parameters)


@router.get("", response_model=ApiResponse[List[TutorCard]])
def list_tutors(tutor_service: TutorService = Depends(get_tutor_service)) -> ApiResponse[List[TutorCard]]:
    cards = tutor_service.list_tutors()
    return ApiResponse(data=[TutorCard.model_validate(card) for card in cards])


@router.get("/profile", response_model=ApiResponse[TutorProfile])
def get_own_profile(
    current_user: User = Depends(get_current_user),
    tutor_service: TutorService = Depends(get_tutor_service),
) -> ApiResponse[TutorProfile]:
    """Return the caller's tutor profile, creating an empty one on first visit."""
    try:
        user, tutor = tutor_service.get_profile(current_user)
        return ApiResponse(data=TutorProfile.model_validate(tutor_service.merge_profile(user, tutor)))
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/profile", response_model=ApiResponse[TutorProfile])
def update_own_profile(
    payload: TutorProfileUpdate = Body(...),
    current_user: User = Depends(get_current_user),
    tutor_service: TutorService = Depends(get_tutor_service),
) -> ApiResponse[TutorProfile]:
    try:
        user, tutor, created = tutor_service.update_profile(current_user, payload)
        message = "Profile created successfully" if created else "Profile updated successfully"
        return ApiResponse(
            data=TutorProfile.model_validate(tutor_service.merge_profile(user, tutor)),
            message=message,
        )
    except DomainException as e:
        handle_domain_exception(e)


# Dynamic routes


@router.get("/{tutor_id}", response_model=ApiResponse[TutorDetailData])
def get_tutor(
    tutor_id: str,
    tutor_service: TutorService = Depends(get_tutor_service),
) -> ApiResponse[TutorDetailData]:
    try:
        detail = tutor_service.get_tutor_detail(tutor_id)
        return ApiResponse(data=TutorDetailData.model_validate(detail))
    except DomainException as e:
        handle_domain_exception(e)
