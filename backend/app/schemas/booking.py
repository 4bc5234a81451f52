"""
Booking and payment schemas.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from ..models.booking import BookingStatus, SessionType
from .base import RequestModel, StandardizedModel, UtcDatetime
from .tutor import TutorOut
from .user import UserSummary


class PaymentOut(StandardizedModel):
    id: str
    booking_id: str
    amount: float
    payment_method: str
    payment_status: str
    transaction_id: Optional[str] = None
    created_at: Optional[UtcDatetime] = None


class BookingCourse(StandardizedModel):
    id: str
    title: str
    image_url: Optional[str] = None
    start_date: Optional[UtcDatetime] = None
    end_date: Optional[UtcDatetime] = None
    schedule: List[Dict[str, Any]] = Field(default_factory=list)
    zoom_link: Optional[str] = None


class BookingOut(StandardizedModel):
    id: str
    learner_id: str
    tutor_id: str
    course_id: str
    session_date: UtcDatetime
    duration_min: int
    status: str
    session_type: str
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None
    learner: Optional[UserSummary] = None
    tutor: Optional[TutorOut] = None
    course: Optional[BookingCourse] = None
    payment: Optional[PaymentOut] = None
    next_session_date: Optional[UtcDatetime] = None
    session_occurred: bool = False


class BookingCreateRequest(RequestModel):
    """Booking created after a successful session payment."""

    learner_id: Optional[str] = None
    tutor_id: Optional[str] = None
    course_id: Optional[str] = None
    session_date: Optional[str] = None
    duration_min: Optional[int] = Field(default=None, gt=0)
    status: Optional[BookingStatus] = None
    payment_session_id: Optional[str] = None
    amount: Optional[float] = Field(default=None, ge=0)
    session_type: Optional[SessionType] = None
