# backend/scripts/fix_booking_payments.py
"""
Create payment records for bookings that were stored without one.

Each missing payment is recorded as a completed Stripe payment for the
course's trial rate, with transaction id ``legacy_<bookingId>``.

Usage:
    python scripts/fix_booking_payments.py
"""

from pathlib import Path
import sys
from typing import Tuple

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import SessionLocal
from app.models.booking import Booking
from app.models.payment import Payment, PaymentMethod, PaymentStatus
from app.repositories.booking_repository import BookingRepository


def fix_booking_payments(db: Session) -> Tuple[int, int, int]:
    """
    Backfill payments for bookings without one.

    Returns:
        (payments created, bookings with a payment, total bookings)
    """
    missing = BookingRepository(db).list_without_payment()
    print(f"Found {len(missing)} bookings without payment records")

    created = 0
    for booking in missing:
        try:
            with db.begin_nested():
                payment = Payment(
                    booking_id=booking.id,
                    amount=booking.course.trial_rate,
                    payment_method=PaymentMethod.STRIPE.value,
                    payment_status=PaymentStatus.COMPLETED.value,
                    transaction_id=f"legacy_{booking.id}",
                )
                db.add(payment)
            created += 1
            print(f"✓ Created payment for booking {booking.id}: ${payment.amount}")
        except SQLAlchemyError as e:
            print(f"✗ Failed to create payment for booking {booking.id}: {e}")
    db.commit()

    total = db.query(Booking).count()
    with_payment = db.query(Booking).join(Payment, Payment.booking_id == Booking.id).count()
    print(f"\nSummary: {with_payment}/{total} bookings now have payment records")
    return created, with_payment, total


if __name__ == "__main__":
    session = SessionLocal()
    try:
        fix_booking_payments(session)
    except SQLAlchemyError as e:
        session.rollback()
        print(f"❌ Error fixing booking payments: {e}")
        sys.exit(1)
    finally:
        session.close()
