"""Tests for the maintenance scripts."""

from app.models import Booking, Course, CourseCategory, Payment, Review, User
from scripts.fix_booking_payments import fix_booking_payments
from scripts.seed_data import CATEGORIES, LEARNERS, SEED_PASSWORD, clear_database, seed


class TestFixBookingPayments:
    def test_backfills_missing_payments(self, db, learner, course, booking_factory):
        paid = booking_factory(learner, course)
        unpaid = booking_factory(learner, course, with_payment=False)

        created, with_payment, total = fix_booking_payments(db)

        assert (created, with_payment, total) == (1, 2, 2)
        payment = db.query(Payment).filter(Payment.booking_id == unpaid.id).one()
        assert payment.transaction_id == f"legacy_{unpaid.id}"
        assert payment.amount == course.trial_rate
        assert payment.payment_method == "stripe"
        assert payment.payment_status == "completed"
        assert db.query(Payment).filter(Payment.booking_id == paid.id).count() == 1

    def test_nothing_to_fix(self, db, learner, course, booking_factory):
        booking_factory(learner, course)

        assert fix_booking_payments(db) == (0, 1, 1)


class TestSeedData:
    def test_seed_then_login(self, client, db):
        counts = seed(db)

        assert counts["categories"] == len(CATEGORIES) == 9
        assert db.query(CourseCategory).count() == 9
        assert db.query(Course).count() == counts["courses"]
        assert db.query(Booking).count() == db.query(Payment).count() == counts["bookings"]
        assert db.query(Review).count() == counts["reviews"]

        _, email, _ = LEARNERS[0]
        response = client.post("/api/v1/auth/login", json={"email": email, "password": SEED_PASSWORD})
        assert response.status_code == 200
        assert response.json()["data"]["user"]["role"] == "learner"

    def test_clear_database(self, db):
        seed(db)

        clear_database(db)

        assert db.query(User).count() == 0
        assert db.query(Course).count() == 0
        assert db.query(CourseCategory).count() == 0
