# backend/app/routes/v1/enrollments.py
"""
Enrollment routes - API v1

Endpoints:
    GET /check                           → Enrollment overview for a course
    POST /                               → Enroll a learner after payment
    GET /                                → List enrollments by learner/course
"""

import logging
from typing import List, NoReturn, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from ...api.dependencies.services import get_enrollment_service
from ...core.exceptions import DomainException
from ...schemas.base_responses import ApiResponse
from ...schemas.enrollment import EnrollmentCheckData, EnrollmentCreateRequest, EnrollmentOut
from ...services.enrollment_service import EnrollmentService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["enrollments-v1"])


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get("/check", response_model=ApiResponse[EnrollmentCheckData])
def check_enrollment(
    course_id: Optional[str] = Query(None, alias="courseId"),
    user_id: Optional[str] = Query(None, alias="userId"),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
) -> ApiResponse[EnrollmentCheckData]:
    try:
        overview = enrollment_service.check_enrollment(course_id, user_id)
        return ApiResponse(data=EnrollmentCheckData.model_validate(overview))
    except DomainException as e:
        handle_domain_exception(e)


@router.post("", response_model=ApiResponse[EnrollmentOut])
def create_enrollment(
    payload: EnrollmentCreateRequest = Body(...),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
) -> ApiResponse[EnrollmentOut]:
    """Enroll a learner; repeating the call returns the existing enrollment."""
    try:
        enrollment, created = enrollment_service.create_enrollment(payload)
        message = "Enrollment created successfully" if created else "Already enrolled"
        return ApiResponse(data=EnrollmentOut.model_validate(enrollment), message=message)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("", response_model=ApiResponse[List[EnrollmentOut]])
def list_enrollments(
    user_id: Optional[str] = Query(None, alias="userId"),
    course_id: Optional[str] = Query(None, alias="courseId"),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
) -> ApiResponse[List[EnrollmentOut]]:
    enrollments = enrollment_service.list_enrollments(user_id=user_id, course_id=course_id)
    return ApiResponse(data=[EnrollmentOut.model_validate(e) for e in enrollments])
