# backend/app/repositories/review_repository.py
"""
Repositories for reviews and review requests.

Follows repository pattern: no business logic, DB-only operations.
"""

from typing import List, Optional

from sqlalchemy.orm import Query, Session, selectinload

from ..models.review import Review, ReviewRequest, ReviewRequestStatus, ReviewStatus
from ..models.tutor import Tutor
from .base_repository import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    """Data access for ``Review``."""

    def __init__(self, db: Session):
        super().__init__(db, Review)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(
            selectinload(Review.reviewer),
            selectinload(Review.course),
            selectinload(Review.tutor).selectinload(Tutor.user),
        )

    def list_filtered(
        self,
        reviewer_id: Optional[str] = None,
        tutor_id: Optional[str] = None,
        course_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Review]:
        query = self._apply_eager_loading(self._build_query())
        if reviewer_id:
            query = query.filter(Review.reviewer_id == reviewer_id)
        if tutor_id:
            query = query.filter(Review.tutor_id == tutor_id)
        if course_id:
            query = query.filter(Review.course_id == course_id)
        if status:
            query = query.filter(Review.status == status)
        return self._execute_query(query.order_by(Review.created_at.desc()))

    def list_pending_for_tutor(self, tutor_id: str) -> List[Review]:
        return self.list_filtered(tutor_id=tutor_id, status=ReviewStatus.PENDING.value)

    def find_for(self, reviewer_id: str, course_id: str, tutor_id: str) -> Optional[Review]:
        return self.find_one_by(reviewer_id=reviewer_id, course_id=course_id, tutor_id=tutor_id)


class ReviewRequestRepository(BaseRepository[ReviewRequest]):
    """Data access for ``ReviewRequest``."""

    def __init__(self, db: Session):
        super().__init__(db, ReviewRequest)

    def list_for_tutor(self, tutor_id: str) -> List[ReviewRequest]:
        query = self._build_query().filter(ReviewRequest.tutor_id == tutor_id)
        return self._execute_query(query.order_by(ReviewRequest.sent_at.desc()))

    def list_pending_for_student(self, student_id: str) -> List[ReviewRequest]:
        query = (
            self._build_query()
            .options(
                selectinload(ReviewRequest.course),
                selectinload(ReviewRequest.tutor).selectinload(Tutor.user),
            )
            .filter(
                ReviewRequest.student_id == student_id,
                ReviewRequest.status == ReviewRequestStatus.PENDING.value,
            )
        )
        return self._execute_query(query.order_by(ReviewRequest.sent_at.desc()))

    def find_pending(self, tutor_id: str, course_id: str, student_id: str) -> Optional[ReviewRequest]:
        return self.find_one_by(
            tutor_id=tutor_id,
            course_id=course_id,
            student_id=student_id,
            status=ReviewRequestStatus.PENDING.value,
        )

    def delete_other_responded(self, request: ReviewRequest) -> int:
        """Remove older responded requests for the same tutor/course/student."""
        deleted = (
            self._build_query()
            .filter(
                ReviewRequest.id != request.id,
                ReviewRequest.tutor_id == request.tutor_id,
                ReviewRequest.course_id == request.course_id,
                ReviewRequest.student_id == request.student_id,
                ReviewRequest.status == ReviewRequestStatus.RESPONDED.value,
            )
            .delete(synchronize_session="fetch")
        )
        self.db.flush()
        return int(deleted)


__all__ = ["ReviewRepository", "ReviewRequestRepository"]
