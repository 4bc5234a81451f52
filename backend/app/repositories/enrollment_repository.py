# backend/app/repositories/enrollment_repository.py
from typing import List, Optional

from sqlalchemy.orm import Query, Session, selectinload

from ..models.course import Course
from ..models.enrollment import Enrollment
from ..models.tutor import Tutor
from .base_repository import BaseRepository


class EnrollmentRepository(BaseRepository[Enrollment]):
    """Data access for ``Enrollment``."""

    def __init__(self, db: Session):
        super().__init__(db, Enrollment)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(
            selectinload(Enrollment.student),
            selectinload(Enrollment.course).selectinload(Course.tutor).selectinload(Tutor.user),
        )

    def get_for_student_course(self, student_id: str, course_id: str) -> Optional[Enrollment]:
        query = self._apply_eager_loading(self._build_query()).filter(
            Enrollment.student_id == student_id, Enrollment.course_id == course_id
        )
        return query.first()

    def list_filtered(self, student_id: Optional[str] = None, course_id: Optional[str] = None) -> List[Enrollment]:
        query = self._apply_eager_loading(self._build_query())
        if student_id:
            query = query.filter(Enrollment.student_id == student_id)
        if course_id:
            query = query.filter(Enrollment.course_id == course_id)
        return self._execute_query(query.order_by(Enrollment.enrolled_at.desc()))
