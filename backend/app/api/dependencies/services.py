# backend/app/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
bound to the request-scoped database session.
"""

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...services.auth_service import AuthService
from ...services.booking_service import BookingService
from ...services.checkout_service import CheckoutService
from ...services.course_service import CourseService
from ...services.enrollment_service import EnrollmentService
from ...services.review_request_service import ReviewRequestService
from ...services.review_service import ReviewService
from ...services.tutor_service import TutorService
from ...services.user_service import UserService
from ...services.zoom_service import ZoomService

logger = logging.getLogger(__name__)


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_tutor_service(db: Session = Depends(get_db)) -> TutorService:
    return TutorService(db)


def get_course_service(db: Session = Depends(get_db)) -> CourseService:
    return CourseService(db)


def get_enrollment_service(db: Session = Depends(get_db)) -> EnrollmentService:
    return EnrollmentService(db)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)


def get_checkout_service(db: Session = Depends(get_db)) -> CheckoutService:
    """Stripe-backed checkout; the API key is read from settings on creation."""
    return CheckoutService(db)


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


def get_review_request_service(db: Session = Depends(get_db)) -> ReviewRequestService:
    return ReviewRequestService(db)


def get_zoom_service(db: Session = Depends(get_db)) -> ZoomService:
    return ZoomService(db)
