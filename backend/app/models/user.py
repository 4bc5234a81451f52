# backend/app/models/user.py
"""
User model for the SkillBridge platform.

Both tutors and learners are represented by ``User``; the ``role`` column
distinguishes them. Tutors additionally own a one-to-one ``Tutor`` profile.
"""

from enum import Enum

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship
import ulid

from ..core.timezone_utils import utc_now
from ..database import Base


class UserRole(str, Enum):
    """The two account variants."""

    TUTOR = "tutor"
    LEARNER = "learner"


class User(Base):
    """
    Account used for authentication.

    Attributes:
        id: ULID primary key
        name: Display name
        email: Unique login email
        hashed_password: Bcrypt hash of the password
        role: ``tutor`` or ``learner``
        profile_image_url: Optional avatar URL
    """

    __tablename__ = "users"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.LEARNER.value)
    profile_image_url = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=True, default=utc_now, onupdate=utc_now)

    tutor = relationship("Tutor", back_populates="user", uselist=False, cascade="all, delete-orphan")
    enrollments = relationship("Enrollment", back_populates="student", cascade="all, delete-orphan")
    bookings = relationship(
        "Booking", back_populates="learner", cascade="all, delete-orphan", foreign_keys="Booking.learner_id"
    )
    reviews_written = relationship(
        "Review", back_populates="reviewer", cascade="all, delete-orphan", foreign_keys="Review.reviewer_id"
    )

    @property
    def is_tutor(self) -> bool:
        return self.role == UserRole.TUTOR.value

    @property
    def is_learner(self) -> bool:
        return self.role == UserRole.LEARNER.value

    @property
    def tutor_id(self):
        return self.tutor.id if self.tutor else None

    @property
    def bio(self):
        return self.tutor.bio if self.tutor and self.tutor.bio else None

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role})>"
