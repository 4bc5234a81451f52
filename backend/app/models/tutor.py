# backend/app/models/tutor.py
"""
Tutor profile model.

A tutor profile hangs off a ``User`` with role ``tutor``. Courses, bookings,
reviews and review requests reference the profile id, not the user id.
"""

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import relationship
import ulid

from ..core.timezone_utils import utc_now
from ..database import Base


class Tutor(Base):
    """Public teaching profile of a tutor."""

    __tablename__ = "tutors"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    bio = Column(Text, nullable=False, default="")
    hourly_rate = Column(Float, nullable=True)
    # JSON instead of ARRAY so the schema also runs on SQLite
    specialties = Column(JSON, nullable=False, default=list)
    availability = Column(String(255), nullable=True)
    session_duration = Column(String(100), nullable=True)
    language = Column(String(100), nullable=True)
    timezone = Column(String(100), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=True, default=utc_now, onupdate=utc_now)

    user = relationship("User", back_populates="tutor")
    courses = relationship("Course", back_populates="tutor", cascade="all, delete-orphan")
    bookings = relationship("Booking", back_populates="tutor", cascade="all, delete-orphan")
    reviews_received = relationship("Review", back_populates="tutor", cascade="all, delete-orphan")
    review_requests = relationship("ReviewRequest", back_populates="tutor", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Tutor {self.id} user={self.user_id}>"
