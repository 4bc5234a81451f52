# backend/app/routes/v1/review_requests.py
"""
Review request routes - API v1

Tutors invite students to review a course; students answer with a review
that then waits for the tutor's moderation.

Endpoints:
    GET /pending                         → Reviews awaiting the tutor's decision
    GET /student                         → Open requests for a student
    POST /submit                         → Student answers a request
    GET /                                → Requests sent by a tutor
    POST /                               → Send requests to selected students
    DELETE /                             → Student dismisses a pending request
    PATCH /{review_id}                   → Accept or reject a pending review
    DELETE /{request_id}                 → Delete a request outright
"""

import logging
from typing import List, NoReturn, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, status

from ...api.dependencies.services import get_review_request_service
from ...core.exceptions import DomainException
from ...schemas.base_responses import ApiResponse, MessageResponse
from ...schemas.review import (
    ReviewActionRequest,
    ReviewOut,
    ReviewRequestCreate,
    ReviewRequestOut,
    ReviewRequestSendResponse,
    ReviewRequestStats,
    ReviewSubmitRequest,
    ReviewWithRelations,
    StudentReviewRequest,
)
from ...services.review_request_service import ReviewRequestService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["review-requests-v1"])


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


# Static routes first so they are not captured by the id routes


@router.get("/pending", response_model=ApiResponse[List[ReviewWithRelations]])
def list_pending_reviews(
    tutor_id: Optional[str] = Query(None, alias="tutorId"),
    service: ReviewRequestService = Depends(get_review_request_service),
) -> ApiResponse[List[ReviewWithRelations]]:
    try:
        reviews, message = service.pending_reviews_for_tutor(tutor_id)
        return ApiResponse(data=[ReviewWithRelations.model_validate(r) for r in reviews], message=message)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/student", response_model=ApiResponse[List[StudentReviewRequest]])
def list_student_requests(
    student_id: Optional[str] = Query(None, alias="studentId"),
    service: ReviewRequestService = Depends(get_review_request_service),
) -> ApiResponse[List[StudentReviewRequest]]:
    """Pending and not-yet-reviewed requests, each with course and tutor details."""
    try:
        requests = service.list_for_student(student_id)
        return ApiResponse(data=[StudentReviewRequest.model_validate(r) for r in requests])
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/submit", response_model=ApiResponse[ReviewOut])
def submit_review(
    payload: ReviewSubmitRequest = Body(...),
    service: ReviewRequestService = Depends(get_review_request_service),
) -> ApiResponse[ReviewOut]:
    try:
        review = service.submit_review(payload)
        return ApiResponse(data=ReviewOut.model_validate(review), message="Review submitted successfully!")
    except DomainException as e:
        handle_domain_exception(e)


@router.get("", response_model=ApiResponse[List[ReviewRequestOut]])
def list_review_requests(
    tutor_id: Optional[str] = Query(None, alias="tutorId"),
    service: ReviewRequestService = Depends(get_review_request_service),
) -> ApiResponse[List[ReviewRequestOut]]:
    try:
        requests = service.list_for_tutor(tutor_id)
        return ApiResponse(data=[ReviewRequestOut.model_validate(r) for r in requests])
    except DomainException as e:
        handle_domain_exception(e)


@router.post("", response_model=ReviewRequestSendResponse)
def send_review_requests(
    payload: ReviewRequestCreate = Body(...),
    service: ReviewRequestService = Depends(get_review_request_service),
) -> ReviewRequestSendResponse:
    """
    Send review requests to a batch of students.

    The ``stats`` block reports how many were sent, skipped as duplicates
    or failed.
    """
    try:
        outcome = service.send_requests(payload)
        return ReviewRequestSendResponse(
            data=[ReviewRequestOut.model_validate(r) for r in outcome.sent],
            message=outcome.message,
            stats=ReviewRequestStats(**outcome.stats),
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("", response_model=MessageResponse)
def delete_student_request(
    request_id: Optional[str] = Query(None, alias="requestId"),
    student_id: Optional[str] = Query(None, alias="studentId"),
    service: ReviewRequestService = Depends(get_review_request_service),
) -> MessageResponse:
    try:
        service.delete_for_student(request_id, student_id)
        return MessageResponse(message="Review request deleted successfully")
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/{review_id}", response_model=ApiResponse[ReviewWithRelations])
def moderate_review(
    review_id: str = Path(...),
    payload: ReviewActionRequest = Body(...),
    service: ReviewRequestService = Depends(get_review_request_service),
) -> ApiResponse[ReviewWithRelations]:
    try:
        review, message = service.moderate_review(review_id, payload)
        return ApiResponse(data=ReviewWithRelations.model_validate(review), message=message)
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{request_id}", response_model=MessageResponse)
def delete_review_request(
    request_id: str = Path(...),
    service: ReviewRequestService = Depends(get_review_request_service),
) -> MessageResponse:
    try:
        service.delete_request(request_id)
        return MessageResponse(message="Review request deleted successfully")
    except DomainException as e:
        handle_domain_exception(e)
