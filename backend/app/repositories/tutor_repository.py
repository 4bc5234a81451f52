# backend/app/repositories/tutor_repository.py
"""
Tutor profile repository.

Listing queries eager load everything the tutor card needs (user, courses
with categories, accepted reviews, completed bookings) so formatting does
not trigger per-row lazy loads.
"""

from typing import Any, List, Optional

from sqlalchemy.orm import Query, Session, selectinload

from ..models.course import Course
from ..models.tutor import Tutor
from ..models.user import User
from .base_repository import BaseRepository


class TutorRepository(BaseRepository[Tutor]):
    """Data access for ``Tutor`` profiles."""

    def __init__(self, db: Session):
        super().__init__(db, Tutor)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(
            selectinload(Tutor.user),
            selectinload(Tutor.courses).selectinload(Course.category),
            selectinload(Tutor.reviews_received),
            selectinload(Tutor.bookings),
        )

    def get_by_user_id(self, user_id: str) -> Optional[Tutor]:
        return self.find_one_by(user_id=user_id)

    def list_with_details(self) -> List[Tutor]:
        query = self._apply_eager_loading(self._build_query()).join(Tutor.user).order_by(User.name.asc())
        return self._execute_query(query)

    def create_for_user(self, user_id: str, **profile: Any) -> Tutor:
        return self.create(user_id=user_id, **profile)
