# backend/app/models/payment.py
from enum import Enum

from sqlalchemy import Column, DateTime, Float, ForeignKey, String
from sqlalchemy.orm import relationship
import ulid

from ..core.timezone_utils import utc_now
from ..database import Base


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(str, Enum):
    STRIPE = "stripe"
    CREDIT_CARD = "credit_card"
    PAYPAL = "paypal"


class Payment(Base):
    """Payment recorded against a booking (one per booking)."""

    __tablename__ = "payments"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    booking_id = Column(String(26), ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, unique=True)

    amount = Column(Float, nullable=False)
    payment_method = Column(String(20), nullable=False, default=PaymentMethod.STRIPE.value)
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.PENDING.value)
    transaction_id = Column(String(255), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=True, default=utc_now, onupdate=utc_now)

    booking = relationship("Booking", back_populates="payment")
