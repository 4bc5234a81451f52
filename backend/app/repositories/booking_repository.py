# backend/app/repositories/booking_repository.py
"""
Booking Repository for the SkillBridge platform.

Implements all data access operations for booking management.
"""

from typing import List, Optional

from sqlalchemy.orm import Query, Session, selectinload

from ..models.booking import Booking
from ..models.payment import Payment
from ..models.tutor import Tutor
from .base_repository import BaseRepository


class BookingRepository(BaseRepository[Booking]):
    """Data access for ``Booking``."""

    def __init__(self, db: Session):
        super().__init__(db, Booking)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(
            selectinload(Booking.learner),
            selectinload(Booking.tutor).selectinload(Tutor.user),
            selectinload(Booking.course),
            selectinload(Booking.payment),
        )

    def list_filtered(
        self,
        learner_id: Optional[str] = None,
        tutor_id: Optional[str] = None,
        course_id: Optional[str] = None,
    ) -> List[Booking]:
        query = self._apply_eager_loading(self._build_query())
        if learner_id:
            query = query.filter(Booking.learner_id == learner_id)
        if tutor_id:
            query = query.filter(Booking.tutor_id == tutor_id)
        if course_id:
            query = query.filter(Booking.course_id == course_id)
        return self._execute_query(query.order_by(Booking.session_date.desc()))

    def get_latest_for(self, learner_id: str, tutor_id: str, course_id: str) -> Optional[Booking]:
        """Most recent booking (by session date) for a learner/tutor/course triple."""
        query = (
            self._build_query()
            .filter(
                Booking.learner_id == learner_id,
                Booking.tutor_id == tutor_id,
                Booking.course_id == course_id,
            )
            .order_by(Booking.session_date.desc())
        )
        return query.first()

    def list_without_payment(self) -> List[Booking]:
        query = (
            self._build_query()
            .outerjoin(Payment, Payment.booking_id == Booking.id)
            .filter(Payment.id.is_(None))
            .options(selectinload(Booking.course))
        )
        return self._execute_query(query)
