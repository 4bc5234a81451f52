# backend/app/services/booking_service.py
"""
Booking Service for the SkillBridge platform.

A booking is recorded once a trial or individual session has been paid
for; the booking and its payment are written in one transaction.
"""

import logging
import time
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.constants import DEFAULT_SESSION_DURATION_MIN
from ..core.exceptions import ForbiddenException, NotFoundException, ValidationException
from ..core.timezone_utils import parse_iso_datetime
from ..models.booking import Booking, BookingStatus, SessionType
from ..models.payment import PaymentMethod, PaymentStatus
from ..repositories.factory import RepositoryFactory
from ..schemas.booking import BookingCreateRequest
from ..utils.session_calculator import calculate_next_session_date, has_session_occurred
from .base import BaseService

logger = logging.getLogger(__name__)


def generate_transaction_id() -> str:
    """Fallback transaction reference when no checkout session id is given."""
    return f"txn_{int(time.time() * 1000)}"


class BookingService(BaseService):
    """Service layer for session bookings and their payments."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.booking_repository = RepositoryFactory.create_booking_repository(db)
        self.payment_repository = RepositoryFactory.create_payment_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.tutor_repository = RepositoryFactory.create_tutor_repository(db)
        self.course_repository = RepositoryFactory.create_course_repository(db)

    @BaseService.measure_operation("create_booking")
    def create_booking(self, data: BookingCreateRequest) -> Booking:
        """
        Record a paid session.

        The payment amount falls back to the course trial rate when the
        request does not carry one.

        Raises:
            ValidationException: Missing fields or unparseable session date
            NotFoundException: Unknown learner, tutor or course
            ForbiddenException: The learner account is not a learner
        """
        if not data.learner_id or not data.tutor_id or not data.course_id or not data.session_date:
            raise ValidationException("Missing required fields: learnerId, tutorId, courseId, sessionDate")

        learner = self.user_repository.get_by_id(data.learner_id, load_relationships=False)
        if learner is None:
            raise NotFoundException("Learner not found")
        if not learner.is_learner:
            raise ForbiddenException("User must be a learner to book sessions")

        if self.tutor_repository.get_by_id(data.tutor_id, load_relationships=False) is None:
            raise NotFoundException("Tutor not found")

        course = self.course_repository.get_by_id(data.course_id, load_relationships=False)
        if course is None:
            raise NotFoundException("Course not found")

        try:
            session_date = parse_iso_datetime(data.session_date)
        except ValueError as exc:
            raise ValidationException("Invalid session date") from exc

        amount = data.amount or course.trial_rate

        with self.transaction():
            booking = self.booking_repository.create(
                learner_id=data.learner_id,
                tutor_id=data.tutor_id,
                course_id=data.course_id,
                session_date=session_date,
                duration_min=data.duration_min or DEFAULT_SESSION_DURATION_MIN,
                status=data.status or BookingStatus.CONFIRMED.value,
                session_type=data.session_type or SessionType.INDIVIDUAL.value,
            )
            self.payment_repository.create(
                booking_id=booking.id,
                amount=amount,
                payment_method=PaymentMethod.STRIPE.value,
                payment_status=PaymentStatus.COMPLETED.value,
                transaction_id=data.payment_session_id or generate_transaction_id(),
            )

        self.logger.info(f"Booking {booking.id} recorded for learner {data.learner_id} ({amount:.2f})")
        return self.booking_repository.get_by_id(booking.id)

    @BaseService.measure_operation("list_bookings")
    def list_bookings(
        self,
        learner_id: Optional[str] = None,
        tutor_id: Optional[str] = None,
        course_id: Optional[str] = None,
    ) -> List[Booking]:
        return self.booking_repository.list_filtered(learner_id=learner_id, tutor_id=tutor_id, course_id=course_id)

    def session_timing(self, booking: Booking, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Next scheduled session of the booked course and whether the booked one is behind us."""
        schedule = booking.course.schedule if booking.course else None
        return {
            "next_session_date": calculate_next_session_date(schedule, now),
            "session_occurred": has_session_occurred(schedule, booking.session_date, now),
        }
