# backend/app/services/enrollment_service.py
"""
Enrollment Service for the SkillBridge platform.

Enrollments are created after a successful full-course payment and are
idempotent per learner and course.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.exceptions import DuplicateRecordException, ForbiddenException, NotFoundException, ValidationException
from ..models.enrollment import Enrollment
from ..repositories.factory import RepositoryFactory
from ..schemas.enrollment import EnrollmentCreateRequest
from .base import BaseService

logger = logging.getLogger(__name__)


class EnrollmentService(BaseService):
    """Service layer for course enrollments."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.enrollment_repository = RepositoryFactory.create_enrollment_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.course_repository = RepositoryFactory.create_course_repository(db)

    @BaseService.measure_operation("create_enrollment")
    def create_enrollment(self, data: EnrollmentCreateRequest) -> Tuple[Enrollment, bool]:
        """
        Enroll a learner in a course.

        Returns:
            ``(enrollment, created)``; ``created`` is False when the learner
            was already enrolled and the existing row is returned.
        """
        if not data.user_id or not data.course_id:
            raise ValidationException("Missing required fields: userId, courseId")

        user = self.user_repository.get_by_id(data.user_id, load_relationships=False)
        if user is None:
            raise NotFoundException("User not found")
        if not user.is_learner:
            raise ForbiddenException("Only learners can enroll in courses")

        if self.course_repository.get_by_id(data.course_id, load_relationships=False) is None:
            raise NotFoundException("Course not found")

        existing = self.enrollment_repository.get_for_student_course(data.user_id, data.course_id)
        if existing is not None:
            return existing, False

        try:
            with self.transaction():
                enrollment = self.enrollment_repository.create(
                    student_id=data.user_id,
                    course_id=data.course_id,
                    hours_completed=0,
                    progress=0,
                )
        except DuplicateRecordException:
            # Concurrent enrollment for the same pair won the race
            existing = self.enrollment_repository.get_for_student_course(data.user_id, data.course_id)
            if existing is None:
                raise
            return existing, False

        if data.session_id:
            self.logger.info(f"Enrollment {enrollment.id} created from checkout session {data.session_id}")
        return self.enrollment_repository.get_by_id(enrollment.id), True

    @BaseService.measure_operation("list_enrollments")
    def list_enrollments(self, user_id: Optional[str] = None, course_id: Optional[str] = None) -> List[Enrollment]:
        return self.enrollment_repository.list_filtered(student_id=user_id, course_id=course_id)

    @BaseService.measure_operation("check_enrollment")
    def check_enrollment(self, course_id: Optional[str], user_id: Optional[str] = None) -> Dict[str, Any]:
        """Enrollment overview for one course, optionally for one learner."""
        if not course_id:
            raise ValidationException("courseId is required")

        course = self.course_repository.get_with_enrollments(course_id)
        if course is None:
            raise NotFoundException("Course not found")

        user_enrollment = None
        if user_id:
            user_enrollment = self.enrollment_repository.get_for_student_course(user_id, course_id)

        return {
            "course": {
                "id": course.id,
                "title": course.title,
                "tutor_id": course.tutor_id,
                "tutor": course.tutor.user if course.tutor else None,
            },
            "enrollments_count": len(course.enrollments),
            "enrollments": course.enrollments,
            "user_enrollment": user_enrollment,
        }
