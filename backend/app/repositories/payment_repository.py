# backend/app/repositories/payment_repository.py
from typing import Optional

from sqlalchemy.orm import Session

from ..models.payment import Payment
from .base_repository import BaseRepository


class PaymentRepository(BaseRepository[Payment]):
    """Data access for ``Payment``."""

    def __init__(self, db: Session):
        super().__init__(db, Payment)

    def get_by_booking(self, booking_id: str) -> Optional[Payment]:
        return self.find_one_by(booking_id=booking_id)
