# backend/app/models/review.py
"""
Review models for SkillBridge.

Design notes:
- ULID string IDs everywhere (26 chars)
- One review per booking via DB unique constraint
- Reviews start ``pending`` and become public once the tutor accepts them
- Review requests are tutor-initiated solicitations with a unique key on
  (tutor, course, student, status), so at most one pending request exists
  per combination
"""

from enum import Enum

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
import ulid

from ..core.timezone_utils import utc_now
from ..database import Base


class ReviewStatus(str, Enum):
    """Moderation state for a review."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class ReviewRequestStatus(str, Enum):
    PENDING = "pending"
    RESPONDED = "responded"


class Review(Base):
    """
    Per-booking review submitted by a learner.
    """

    __tablename__ = "reviews"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))

    booking_id = Column(String(26), ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False)
    reviewer_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    tutor_id = Column(String(26), ForeignKey("tutors.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(String(26), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)

    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=ReviewStatus.PENDING.value, index=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=True, default=utc_now, onupdate=utc_now)

    booking = relationship("Booking", back_populates="review")
    reviewer = relationship("User", back_populates="reviews_written", foreign_keys=[reviewer_id])
    tutor = relationship("Tutor", back_populates="reviews_received")
    course = relationship("Course", back_populates="reviews")

    __table_args__ = (
        UniqueConstraint("booking_id", name="uq_reviews_booking"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )

    def __repr__(self) -> str:
        return f"<Review {self.id} rating={self.rating} status={self.status}>"


class ReviewRequest(Base):
    """Tutor-initiated request for a learner to review a course."""

    __tablename__ = "review_requests"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    tutor_id = Column(String(26), ForeignKey("tutors.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(String(26), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    message = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=ReviewRequestStatus.PENDING.value)
    sent_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    responded_at = Column(DateTime(timezone=True), nullable=True)

    tutor = relationship("Tutor", back_populates="review_requests")
    course = relationship("Course", back_populates="review_requests")
    student = relationship("User")

    __table_args__ = (
        UniqueConstraint(
            "tutor_id", "course_id", "student_id", "status", name="uq_review_requests_tutor_course_student_status"
        ),
    )
