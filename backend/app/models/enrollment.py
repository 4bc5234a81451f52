# backend/app/models/enrollment.py
from sqlalchemy import Column, DateTime, Float, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship
import ulid

from ..core.timezone_utils import utc_now
from ..database import Base


class Enrollment(Base):
    """A learner's registration in a full course."""

    __tablename__ = "enrollments"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    student_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(String(26), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)

    enrolled_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    hours_completed = Column(Float, nullable=False, default=0)
    progress = Column(Float, nullable=False, default=0)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    student = relationship("User", back_populates="enrollments")
    course = relationship("Course", back_populates="enrollments")

    __table_args__ = (UniqueConstraint("student_id", "course_id", name="uq_enrollments_student_course"),)
