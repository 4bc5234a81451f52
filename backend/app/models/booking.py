# backend/app/models/booking.py
"""
Booking model for the SkillBridge platform.

A booking is a scheduled, paid session between a learner and a tutor for a
specific course. Every booking created through the API carries exactly one
``Payment`` row.
"""

from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
import ulid

from ..core.timezone_utils import utc_now
from ..database import Base


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SessionType(str, Enum):
    INDIVIDUAL = "individual"
    GROUP = "group"


class Booking(Base):
    """A single session booked by a learner."""

    __tablename__ = "bookings"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    learner_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    tutor_id = Column(String(26), ForeignKey("tutors.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(String(26), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)

    session_date = Column(DateTime(timezone=True), nullable=False, index=True)
    duration_min = Column(Integer, nullable=False, default=60)
    status = Column(String(20), nullable=False, default=BookingStatus.CONFIRMED.value, index=True)
    session_type = Column(String(20), nullable=False, default=SessionType.INDIVIDUAL.value)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=True, default=utc_now, onupdate=utc_now)

    learner = relationship("User", back_populates="bookings", foreign_keys=[learner_id])
    tutor = relationship("Tutor", back_populates="bookings")
    course = relationship("Course", back_populates="bookings")
    payment = relationship("Payment", back_populates="booking", uselist=False, cascade="all, delete-orphan")
    review = relationship("Review", back_populates="booking", uselist=False, cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Booking {self.id} {self.status} {self.session_date}>"
