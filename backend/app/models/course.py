# backend/app/models/course.py
"""
Course catalog models.

Design notes:
- Schedules, prerequisites and skills are stored as JSON lists
- Rates are non-negative, enforced both by schemas and check constraints
- Deleting a course with enrollments or bookings is refused by the service
"""

from enum import Enum

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
import ulid

from ..core.timezone_utils import utc_now
from ..database import Base


class CourseDifficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class CourseCategory(Base):
    """Top level grouping for courses (Programming, Music, ...)."""

    __tablename__ = "course_categories"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    courses = relationship("Course", back_populates="category")

    def __repr__(self) -> str:
        return f"<CourseCategory {self.name}>"


class Course(Base):
    """A course offered by a tutor."""

    __tablename__ = "courses"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    tutor_id = Column(String(26), ForeignKey("tutors.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(String(26), ForeignKey("course_categories.id", ondelete="SET NULL"), nullable=True)

    title = Column(String(200), nullable=False)
    short_description = Column(String(500), nullable=False)
    overview = Column(Text, nullable=False)
    difficulty = Column(String(20), nullable=False, default=CourseDifficulty.BEGINNER.value)
    prerequisites = Column(JSON, nullable=False, default=list)
    skills_learned = Column(JSON, nullable=False, default=list)
    total_hours = Column(Integer, nullable=False)
    # [{days: [...], startTime, endTime, timezone}]
    schedule = Column(JSON, nullable=False, default=list)
    zoom_link = Column(String(500), nullable=True)
    image_url = Column(String(500), nullable=True)
    trial_rate = Column(Float, nullable=False, default=0)
    full_course_rate = Column(Float, nullable=False, default=0)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True, default=utc_now, onupdate=utc_now)

    tutor = relationship("Tutor", back_populates="courses")
    category = relationship("CourseCategory", back_populates="courses")
    enrollments = relationship("Enrollment", back_populates="course", cascade="all, delete-orphan")
    bookings = relationship("Booking", back_populates="course", cascade="all, delete-orphan")
    reviews = relationship("Review", back_populates="course", cascade="all, delete-orphan")
    review_requests = relationship("ReviewRequest", back_populates="course", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("trial_rate >= 0", name="ck_courses_trial_rate_non_negative"),
        CheckConstraint("full_course_rate >= 0", name="ck_courses_full_rate_non_negative"),
        CheckConstraint("total_hours >= 1", name="ck_courses_total_hours_positive"),
    )

    def __repr__(self) -> str:
        return f"<Course {self.title!r} tutor={self.tutor_id}>"
