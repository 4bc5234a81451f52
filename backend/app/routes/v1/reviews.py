# backend/app/routes/v1/reviews.py
"""
Review routes - API v1

Endpoints:
    GET /                                → Reviews by tutor, course or learner
    POST /                               → Submit a review for a booking
    PATCH /                              → Tutor accepts or rejects a review
    DELETE /                             → Tutor deletes a review about them
"""

import logging
from typing import List, NoReturn, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from ...api.dependencies.services import get_review_service
from ...core.exceptions import DomainException
from ...schemas.base_responses import ApiResponse, MessageResponse
from ...schemas.review import (
    ReviewCreateRequest,
    ReviewOut,
    ReviewStatusUpdateRequest,
    ReviewWithRelations,
)
from ...services.review_service import ReviewService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reviews-v1"])


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get("", response_model=ApiResponse[List[ReviewWithRelations]])
def list_reviews(
    tutor_id: Optional[str] = Query(None, alias="tutorId"),
    course_id: Optional[str] = Query(None, alias="courseId"),
    student_id: Optional[str] = Query(None, alias="studentId"),
    review_service: ReviewService = Depends(get_review_service),
) -> ApiResponse[List[ReviewWithRelations]]:
    """
    List reviews, newest first.

    ``tutorId`` is the tutor's user id. Without ``tutorId`` or ``studentId``
    only accepted reviews are returned.
    """
    reviews = review_service.list_reviews(tutor_user_id=tutor_id, course_id=course_id, student_id=student_id)
    return ApiResponse(data=[ReviewWithRelations.model_validate(r) for r in reviews])


@router.post("", response_model=ApiResponse[ReviewOut])
def create_review(
    payload: ReviewCreateRequest = Body(...),
    review_service: ReviewService = Depends(get_review_service),
) -> ApiResponse[ReviewOut]:
    try:
        review = review_service.create_review(payload)
        return ApiResponse(data=ReviewOut.model_validate(review), message="Review submitted successfully!")
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("", response_model=ApiResponse[ReviewWithRelations])
def update_review_status(
    payload: ReviewStatusUpdateRequest = Body(...),
    review_service: ReviewService = Depends(get_review_service),
) -> ApiResponse[ReviewWithRelations]:
    try:
        review = review_service.update_status(payload)
        return ApiResponse(
            data=ReviewWithRelations.model_validate(review),
            message=f"Review {payload.status} successfully",
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("", response_model=MessageResponse)
def delete_review(
    review_id: Optional[str] = Query(None, alias="reviewId"),
    tutor_id: Optional[str] = Query(None, alias="tutorId"),
    review_service: ReviewService = Depends(get_review_service),
) -> MessageResponse:
    try:
        review_service.delete_review(review_id, tutor_id)
        return MessageResponse(message="Review deleted successfully")
    except DomainException as e:
        handle_domain_exception(e)
