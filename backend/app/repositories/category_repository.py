# backend/app/repositories/category_repository.py
"""
Repository for course categories.
"""

from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models.course import Course, CourseCategory
from .base_repository import BaseRepository


class CategoryRepository(BaseRepository[CourseCategory]):
    """Data access for ``CourseCategory``."""

    def __init__(self, db: Session):
        super().__init__(db, CourseCategory)

    def list_with_course_counts(self) -> List[Tuple[CourseCategory, int]]:
        """All categories ordered by name, paired with their course count."""
        query = (
            self.db.query(CourseCategory, func.count(Course.id))
            .outerjoin(Course, Course.category_id == CourseCategory.id)
            .group_by(CourseCategory.id)
            .order_by(CourseCategory.name.asc())
        )
        return [(category, int(count)) for category, count in self._execute_query(query)]

    def get_by_name(self, name: str) -> Optional[CourseCategory]:
        return self.find_one_by(name=name)
