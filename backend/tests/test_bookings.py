"""Tests for bookings and their payments."""

from datetime import datetime, timedelta

from app.core.timezone_utils import utc_now
from app.models.payment import Payment

BOOKINGS_URL = "/api/v1/bookings"


def _payload(learner, course, **overrides):
    payload = {
        "learnerId": learner.id,
        "tutorId": course.tutor_id,
        "courseId": course.id,
        "sessionDate": "2030-03-04T18:00:00Z",
    }
    payload.update(overrides)
    return payload


class TestCreateBooking:
    def test_booking_creates_payment(self, client, db, learner, course):
        response = client.post(BOOKINGS_URL, json=_payload(learner, course, paymentSessionId="cs_test_123"))

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Booking and payment created successfully"
        data = body["data"]
        assert data["status"] == "confirmed"
        assert data["durationMin"] == 60
        assert data["sessionType"] == "individual"
        assert data["sessionDate"].startswith("2030-03-04T18:00:00")
        assert data["payment"]["amount"] == 20.0
        assert data["payment"]["paymentStatus"] == "completed"
        assert data["payment"]["paymentMethod"] == "stripe"
        assert data["payment"]["transactionId"] == "cs_test_123"
        assert db.query(Payment).count() == 1

    def test_explicit_amount_and_generated_transaction_id(self, client, learner, course):
        response = client.post(BOOKINGS_URL, json=_payload(learner, course, amount=42.5, durationMin=90))

        payment = response.json()["data"]["payment"]
        assert payment["amount"] == 42.5
        assert payment["transactionId"].startswith("txn_")
        assert response.json()["data"]["durationMin"] == 90

    def test_missing_fields(self, client, learner):
        response = client.post(BOOKINGS_URL, json={"learnerId": learner.id})

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields: learnerId, tutorId, courseId, sessionDate"

    def test_tutor_cannot_book(self, client, tutor, course):
        response = client.post(BOOKINGS_URL, json=_payload(tutor.user, course))

        assert response.status_code == 403
        assert response.json()["error"] == "User must be a learner to book sessions"

    def test_unknown_learner(self, client, course, learner):
        payload = _payload(learner, course, learnerId="01HZZZZZZZZZZZZZZZZZZZZZZZ")

        response = client.post(BOOKINGS_URL, json=payload)

        assert response.status_code == 404
        assert response.json()["error"] == "Learner not found"

    def test_unknown_tutor(self, client, learner, course):
        response = client.post(BOOKINGS_URL, json=_payload(learner, course, tutorId="01HZZZZZZZZZZZZZZZZZZZZZZZ"))

        assert response.status_code == 404
        assert response.json()["error"] == "Tutor not found"

    def test_unknown_course(self, client, learner, course):
        response = client.post(BOOKINGS_URL, json=_payload(learner, course, courseId="01HZZZZZZZZZZZZZZZZZZZZZZZ"))

        assert response.status_code == 404
        assert response.json()["error"] == "Course not found"

    def test_bad_session_date(self, client, learner, course):
        response = client.post(BOOKINGS_URL, json=_payload(learner, course, sessionDate="next tuesday"))

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid session date"


class TestListBookings:
    def test_filters(self, client, learner, course, user_factory, booking_factory):
        other = user_factory()
        mine = booking_factory(learner, course)
        booking_factory(other, course)

        by_learner = client.get(BOOKINGS_URL, params={"learnerId": learner.id}).json()["data"]
        assert [b["id"] for b in by_learner] == [mine.id]
        assert by_learner[0]["course"]["title"] == "Python for Beginners"
        assert by_learner[0]["payment"]["amount"] == 20.0

        by_tutor = client.get(BOOKINGS_URL, params={"tutorId": course.tutor_id}).json()["data"]
        assert len(by_tutor) == 2

        by_course = client.get(BOOKINGS_URL, params={"courseId": course.id}).json()["data"]
        assert len(by_course) == 2

    def test_session_timing_from_course_schedule(self, client, learner, course, course_factory, tutor, booking_factory):
        past = booking_factory(learner, course)
        upcoming = booking_factory(learner, course, session_date=utc_now() + timedelta(days=30))
        unscheduled = course_factory(tutor, title="Self-paced", schedule=[])
        later = booking_factory(learner, unscheduled, session_date=utc_now() + timedelta(days=1))

        data = {b["id"]: b for b in client.get(BOOKINGS_URL, params={"learnerId": learner.id}).json()["data"]}

        next_session = datetime.fromisoformat(data[past.id]["nextSessionDate"].replace("Z", "+00:00"))
        assert next_session.weekday() == 0
        assert (next_session.hour, next_session.minute) == (18, 0)
        assert data[past.id]["sessionOccurred"] is True
        assert data[upcoming.id]["sessionOccurred"] is False
        assert data[later.id]["nextSessionDate"] is None
        assert data[later.id]["sessionOccurred"] is False
