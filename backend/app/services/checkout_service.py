# backend/app/services/checkout_service.py
"""
Checkout Service for the SkillBridge platform.

Creates Stripe Checkout sessions for full-course enrollments and single
session bookings, and reads them back after the redirect. Nothing is
written locally here; enrollments and bookings are recorded by their own
endpoints once the learner lands on the success page.
"""

import logging
from typing import Any, Dict, Tuple

from fastapi import status
import stripe
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import (
    ForbiddenException,
    NotFoundException,
    ServiceException,
    UpstreamServiceException,
    ValidationException,
)
from ..repositories.factory import RepositoryFactory
from ..schemas.checkout import CheckoutRequest
from .base import BaseService

logger = logging.getLogger(__name__)


def _format_amount(amount: float) -> str:
    return str(int(amount)) if float(amount).is_integer() else str(amount)


class CheckoutService(BaseService):
    """Service layer for Stripe Checkout."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.course_repository = RepositoryFactory.create_course_repository(db)
        self.enrollment_repository = RepositoryFactory.create_enrollment_repository(db)

        self.stripe_configured = False
        if settings.stripe_configured:
            stripe.api_key = settings.stripe_secret_key.get_secret_value()
            stripe.max_network_retries = 1
            self.stripe_configured = True
        else:
            self.logger.warning("Stripe secret key not configured - checkout is unavailable")

    @BaseService.measure_operation("create_checkout_session")
    def create_checkout_session(self, data: CheckoutRequest) -> str:
        """
        Start a hosted Stripe Checkout for a course or a single session.

        Returns:
            The hosted checkout URL to redirect the learner to
        """
        if not data.course_id or not data.course_name or not data.amount or not data.user_id or not data.user_email:
            raise ValidationException("Missing required fields: courseId, courseName, amount, userId, userEmail")

        if data.payment_type == "session" and not data.session_date:
            raise ValidationException("Session date is required for session bookings")

        user = self.user_repository.get_by_id(data.user_id, load_relationships=False)
        if user is None:
            raise NotFoundException("User not found. Please create an account first.")
        if not user.is_learner:
            raise ForbiddenException("Only learners can enroll in courses. Please sign up as a learner.")

        course = self.course_repository.get_by_id(data.course_id)
        if course is None:
            raise NotFoundException("Course not found")

        if data.payment_type == "enrollment":
            if self.enrollment_repository.get_for_student_course(data.user_id, data.course_id):
                raise ValidationException("You are already enrolled in this course")

        if data.amount <= 0:
            raise ValidationException("Amount must be greater than 0")

        tutor_name = course.tutor.user.name
        if data.payment_type == "session":
            description = f"Book a session for {data.course_name} with {tutor_name}"
        else:
            description = f"Enroll in {data.course_name} by {tutor_name}"

        params = self._session_params(data, course.tutor_id, description)
        session = self._call_stripe("create", lambda: stripe.checkout.Session.create(**params))
        self.logger.info(f"Created checkout session {session.id} for user {data.user_id} ({data.payment_type})")
        return session.url

    def _session_params(self, data: CheckoutRequest, tutor_id: str, description: str) -> Dict[str, Any]:
        return {
            "mode": "payment",
            "payment_method_types": ["card"],
            "customer_email": data.user_email,
            "client_reference_id": data.user_id,
            "line_items": [
                {
                    "price_data": {
                        "currency": settings.stripe_currency,
                        "unit_amount": int(round(data.amount * 100)),
                        "product_data": {"name": data.course_name, "description": description},
                    },
                    "quantity": 1,
                }
            ],
            "metadata": {
                "courseId": data.course_id,
                "userId": data.user_id,
                "tutorId": tutor_id,
                "amount": _format_amount(data.amount),
                "paymentType": data.payment_type,
                "sessionDate": data.session_date or "",
                "sessionType": data.session_type,
            },
            "success_url": f"{settings.site_url}/success?sessionId={{CHECKOUT_SESSION_ID}}&courseId={data.course_id}",
            "cancel_url": f"{settings.site_url}/course/{data.course_id}",
        }

    @BaseService.measure_operation("retrieve_checkout_session")
    def retrieve_session(self, session_id: str) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """Return the Stripe session as plain JSON data plus its metadata."""
        if not session_id:
            raise ValidationException("Session ID is required")

        session = self._call_stripe("retrieve", lambda: stripe.checkout.Session.retrieve(session_id))
        payload = session.to_dict()
        return payload, payload.get("metadata") or {}

    def _call_stripe(self, action: str, call: Any) -> Any:
        if not self.stripe_configured:
            raise ServiceException("Payment processing is not configured")
        try:
            return call()
        except stripe.StripeError as exc:
            self.logger.error(f"Stripe checkout {action} failed: {exc}")
            message = (
                "Failed to create checkout session" if action == "create" else "Failed to retrieve session details"
            )
            raise UpstreamServiceException(
                message,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                details=[{"stripe": str(exc.user_message or exc)}],
            ) from exc
