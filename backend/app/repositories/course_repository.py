# backend/app/repositories/course_repository.py
"""
Course repository.

Owns the filtered, paginated course search and the relation counters
(enrollments, reviews, bookings) shown next to every course.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session, selectinload

from ..models.booking import Booking
from ..models.course import Course
from ..models.enrollment import Enrollment
from ..models.review import Review
from ..models.tutor import Tutor
from .base_repository import BaseRepository


@dataclass
class CourseFilters:
    search: Optional[str] = None
    difficulty: Optional[str] = None
    category_id: Optional[str] = None
    tutor_id: Optional[str] = None
    created_after: Optional[datetime] = None
    created_before: Optional[datetime] = None


class CourseRepository(BaseRepository[Course]):
    """Data access for ``Course``."""

    def __init__(self, db: Session):
        super().__init__(db, Course)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(
            selectinload(Course.tutor).selectinload(Tutor.user),
            selectinload(Course.category),
        )

    def get_with_reviews(self, course_id: str) -> Optional[Course]:
        query = self._apply_eager_loading(self._build_query()).options(
            selectinload(Course.reviews).selectinload(Review.reviewer)
        )
        return query.filter(Course.id == course_id).first()

    def get_with_enrollments(self, course_id: str) -> Optional[Course]:
        query = self._apply_eager_loading(self._build_query()).options(
            selectinload(Course.enrollments).selectinload(Enrollment.student)
        )
        return query.filter(Course.id == course_id).first()

    def search(self, filters: CourseFilters, skip: int, limit: int) -> Tuple[List[Course], int]:
        """Return one page of courses (newest first) and the total match count."""
        query = self._filtered_query(filters)
        total = query.count()
        page_query = (
            self._apply_eager_loading(query)
            .options(selectinload(Course.enrollments).selectinload(Enrollment.student))
            .order_by(Course.created_at.desc(), Course.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return self._execute_query(page_query), total

    def relation_counts(self, course_ids: Sequence[str]) -> Dict[str, Dict[str, int]]:
        """Count enrollments, reviews and bookings per course in three grouped queries."""
        counts: Dict[str, Dict[str, int]] = {
            course_id: {"enrollments": 0, "reviews": 0, "bookings": 0} for course_id in course_ids
        }
        if not course_ids:
            return counts
        for key, model in (("enrollments", Enrollment), ("reviews", Review), ("bookings", Booking)):
            rows = (
                self.db.query(model.course_id, func.count(model.id))
                .filter(model.course_id.in_(list(course_ids)))
                .group_by(model.course_id)
                .all()
            )
            for course_id, count in rows:
                counts[course_id][key] = int(count)
        return counts

    def _filtered_query(self, filters: CourseFilters) -> Query:
        query = self._build_query()
        if filters.search:
            # Literal, case-insensitive substring match on every backend
            query = query.filter(
                or_(
                    Course.title.icontains(filters.search, autoescape=True),
                    Course.short_description.icontains(filters.search, autoescape=True),
                    Course.overview.icontains(filters.search, autoescape=True),
                )
            )
        if filters.difficulty:
            query = query.filter(Course.difficulty == filters.difficulty)
        if filters.category_id:
            query = query.filter(Course.category_id == filters.category_id)
        if filters.tutor_id:
            query = query.filter(Course.tutor_id == filters.tutor_id)
        if filters.created_after:
            query = query.filter(Course.created_at >= filters.created_after)
        if filters.created_before:
            query = query.filter(Course.created_at <= filters.created_before)
        return query
