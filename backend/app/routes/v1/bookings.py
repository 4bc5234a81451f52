# backend/app/routes/v1/bookings.py
"""
Booking routes - API v1

Endpoints:
    POST /                               → Record a paid session with its payment
    GET /                                → List bookings by learner/tutor/course
"""

import logging
from typing import List, NoReturn, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from ...api.dependencies.services import get_booking_service
from ...core.exceptions import DomainException
from ...schemas.base_responses import ApiResponse
from ...schemas.booking import BookingCreateRequest, BookingOut
from ...services.booking_service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookings-v1"])


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.post("", response_model=ApiResponse[BookingOut])
def create_booking(
    payload: BookingCreateRequest = Body(...),
    booking_service: BookingService = Depends(get_booking_service),
) -> ApiResponse[BookingOut]:
    try:
        booking = booking_service.create_booking(payload)
        return ApiResponse(
            data=BookingOut.model_validate(booking),
            message="Booking and payment created successfully",
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.get("", response_model=ApiResponse[List[BookingOut]])
def list_bookings(
    learner_id: Optional[str] = Query(None, alias="learnerId"),
    tutor_id: Optional[str] = Query(None, alias="tutorId"),
    course_id: Optional[str] = Query(None, alias="courseId"),
    booking_service: BookingService = Depends(get_booking_service),
) -> ApiResponse[List[BookingOut]]:
    """
    Bookings newest session first, with learner, tutor, course and payment.

    Each booking also carries the course's next scheduled session and
    whether the booked session has already taken place.
    """
    bookings = booking_service.list_bookings(learner_id=learner_id, tutor_id=tutor_id, course_id=course_id)
    return ApiResponse(
        data=[BookingOut.model_validate(b).model_copy(update=booking_service.session_timing(b)) for b in bookings]
    )
