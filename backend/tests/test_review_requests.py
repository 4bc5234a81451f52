"""Tests for tutor review requests and the learner's answers to them."""

from datetime import timedelta

import pytest

from app.core.timezone_utils import utc_now
from app.models.booking import Booking, BookingStatus
from app.models.review import Review, ReviewRequest, ReviewRequestStatus, ReviewStatus

REQUESTS_URL = "/api/v1/review-requests"
UNKNOWN_ID = "01HZZZZZZZZZZZZZZZZZZZZZZZ"


@pytest.fixture
def request_factory(db, tutor, course):
    def _create(student, status=ReviewRequestStatus.PENDING.value, message="How was the course?"):
        request = ReviewRequest(
            tutor_id=tutor.id,
            course_id=course.id,
            student_id=student.id,
            message=message,
            status=status,
        )
        db.add(request)
        db.commit()
        return request

    return _create


@pytest.fixture
def review_request(request_factory, learner):
    return request_factory(learner)


def _add_review(db, booking, status=ReviewStatus.PENDING.value):
    review = Review(
        booking_id=booking.id,
        reviewer_id=booking.learner_id,
        tutor_id=booking.tutor_id,
        course_id=booking.course_id,
        rating=5,
        status=status,
    )
    db.add(review)
    db.commit()
    return review


def _send(client, tutor, course, students, **extra):
    payload = {"tutorId": tutor.user_id, "courseId": course.id, "studentIds": [s.id for s in students]}
    payload.update(extra)
    return client.post(REQUESTS_URL, json=payload)


class TestSendRequests:
    def test_sends_to_every_student(self, client, db, tutor, course, learner, user_factory):
        other = user_factory()

        response = _send(client, tutor, course, [learner, other])

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Review requests sent to 2 student(s)"
        assert body["stats"] == {"sent": 2, "pendingDuplicates": 0, "reviewedDuplicates": 0, "failed": 0}
        assert {r["studentId"] for r in body["data"]} == {learner.id, other.id}
        assert body["data"][0]["message"] == "Please share your feedback about the course!"
        assert db.query(ReviewRequest).count() == 2

    def test_skips_pending_duplicates(self, client, tutor, course, learner, user_factory, review_request):
        other = user_factory()

        body = _send(client, tutor, course, [learner, other]).json()

        assert body["message"] == "Sent 1 new review request(s). 1 already pending."
        assert body["stats"]["sent"] == 1
        assert body["stats"]["pendingDuplicates"] == 1

    def test_all_pending(self, client, tutor, course, learner, review_request):
        body = _send(client, tutor, course, [learner]).json()

        assert body["data"] == []
        assert body["message"] == "All selected students already have pending review requests"

    def test_all_reviewed(self, client, db, tutor, course, learner, booking_factory):
        _add_review(db, booking_factory(learner, course))

        response = _send(client, tutor, course, [learner])

        assert response.status_code == 200
        assert response.json()["message"] == "All selected students have already submitted reviews for this course"
        assert response.json()["stats"]["reviewedDuplicates"] == 1

    def test_force_resend_refreshes_pending(self, client, db, tutor, course, learner, review_request):
        body = _send(client, tutor, course, [learner], forceResend=True, message="Reminder").json()

        assert body["stats"]["sent"] == 1
        assert body["data"][0]["id"] == review_request.id
        db.refresh(review_request)
        assert review_request.message == "Reminder"
        assert db.query(ReviewRequest).count() == 1

    def test_unknown_student_counts_as_failed(self, client, tutor, course, learner):
        payload = {"tutorId": tutor.user_id, "courseId": course.id, "studentIds": [learner.id, UNKNOWN_ID]}

        body = client.post(REQUESTS_URL, json=payload).json()

        assert body["stats"]["sent"] == 1
        assert body["stats"]["failed"] == 1

    def test_nothing_sent(self, client, tutor, course):
        payload = {"tutorId": tutor.user_id, "courseId": course.id, "studentIds": [UNKNOWN_ID]}

        response = client.post(REQUESTS_URL, json=payload)

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to send review requests"

    def test_empty_selection(self, client, tutor, course):
        response = client.post(REQUESTS_URL, json={"tutorId": tutor.user_id, "courseId": course.id, "studentIds": []})

        assert response.status_code == 400
        assert response.json()["error"] == "Please select at least one student"

    def test_malformed_student_ids(self, client, tutor, course):
        response = client.post(
            REQUESTS_URL, json={"tutorId": tutor.user_id, "courseId": course.id, "studentIds": ["abc"]}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid student IDs: abc"

    def test_caller_without_tutor_profile(self, client, course, learner):
        response = client.post(REQUESTS_URL, json={"tutorId": learner.id, "courseId": course.id, "studentIds": [learner.id]})

        assert response.status_code == 404


class TestListRequests:
    def test_tutor_listing(self, client, tutor, review_request):
        response = client.get(REQUESTS_URL, params={"tutorId": tutor.id})

        assert response.status_code == 200
        assert [r["id"] for r in response.json()["data"]] == [review_request.id]

    def test_tutor_id_required(self, client):
        response = client.get(REQUESTS_URL)

        assert response.status_code == 400
        assert response.json()["error"] == "Tutor ID is required"

    def test_student_listing_includes_course_and_tutor(self, client, learner, course, review_request):
        response = client.get(f"{REQUESTS_URL}/student", params={"studentId": learner.id})

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["course"]["title"] == course.title
        assert data[0]["tutor"]["name"] == "Sarah Tutor"
        assert data[0]["hasExistingReview"] is False

    def test_student_listing_hides_reviewed_courses(self, client, db, learner, course, review_request, booking_factory):
        _add_review(db, booking_factory(learner, course))

        response = client.get(f"{REQUESTS_URL}/student", params={"studentId": learner.id})

        assert response.json()["data"] == []


class TestPendingReviews:
    def test_lists_pending_reviews(self, client, db, tutor, learner, course, booking_factory, user_factory):
        pending = _add_review(db, booking_factory(learner, course))
        _add_review(db, booking_factory(user_factory(), course), status=ReviewStatus.ACCEPTED.value)

        response = client.get(f"{REQUESTS_URL}/pending", params={"tutorId": tutor.user_id})

        assert response.status_code == 200
        body = response.json()
        assert [r["id"] for r in body["data"]] == [pending.id]
        assert "message" not in body

    def test_no_tutor_profile(self, client, learner):
        response = client.get(f"{REQUESTS_URL}/pending", params={"tutorId": learner.id})

        assert response.status_code == 200
        assert response.json()["data"] == []
        assert response.json()["message"] == "No tutor profile found. Please create a tutor profile first."


class TestModerateReview:
    def test_accept_then_process_again(self, client, db, learner, course, booking_factory):
        review = _add_review(db, booking_factory(learner, course))

        response = client.patch(f"{REQUESTS_URL}/{review.id}", json={"action": "accept"})

        assert response.status_code == 200
        assert response.json()["message"] == "Review accepted successfully"
        assert response.json()["data"]["status"] == "accepted"

        again = client.patch(f"{REQUESTS_URL}/{review.id}", json={"action": "reject"})
        assert again.status_code == 400
        assert again.json()["error"] == "Review has already been processed"

    def test_invalid_action(self, client, db, learner, course, booking_factory):
        review = _add_review(db, booking_factory(learner, course))

        response = client.patch(f"{REQUESTS_URL}/{review.id}", json={"action": "approve"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid action. Must be 'accept' or 'reject'"

    def test_unknown_review(self, client):
        response = client.patch(f"{REQUESTS_URL}/{UNKNOWN_ID}", json={"action": "accept"})

        assert response.status_code == 404


class TestSubmitReview:
    def test_enrolled_learner_without_booking(self, client, db, learner, tutor, course, enrollment, review_request):
        response = client.post(
            f"{REQUESTS_URL}/submit",
            json={"reviewRequestId": review_request.id, "rating": 5, "comment": "Loved it"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Review submitted successfully!"
        assert body["data"]["status"] == "pending"
        assert body["data"]["tutorId"] == tutor.id

        booking = db.query(Booking).one()
        assert booking.status == BookingStatus.COMPLETED.value
        assert body["data"]["bookingId"] == booking.id

        db.refresh(review_request)
        assert review_request.status == ReviewRequestStatus.RESPONDED.value
        assert review_request.responded_at is not None

    def test_learner_with_booking(self, client, db, learner, course, review_request, booking_factory):
        booking = booking_factory(learner, course)

        response = client.post(f"{REQUESTS_URL}/submit", json={"reviewRequestId": review_request.id, "rating": 4})

        assert response.status_code == 200
        assert response.json()["data"]["bookingId"] == booking.id
        assert db.query(Booking).count() == 1

    def test_course_not_started(self, client, db, learner, course, review_request, booking_factory):
        start = utc_now() + timedelta(days=10)
        course.start_date = start
        db.commit()
        booking_factory(learner, course)

        response = client.post(f"{REQUESTS_URL}/submit", json={"reviewRequestId": review_request.id, "rating": 4})

        assert response.status_code == 403
        assert response.json()["error"] == (
            "You cannot submit a review before the course starts. "
            f"The course begins on {start.month}/{start.day}/{start.year}."
        )

    def test_requires_enrollment_or_booking(self, client, db, review_request):
        response = client.post(f"{REQUESTS_URL}/submit", json={"reviewRequestId": review_request.id, "rating": 4})

        assert response.status_code == 403
        assert response.json()["error"] == (
            "You must be enrolled in this course or have booked a session to leave a review."
        )
        assert db.query(Review).count() == 0

    def test_already_answered(self, client, db, learner, course, booking_factory, request_factory):
        request = request_factory(learner, status=ReviewRequestStatus.RESPONDED.value)
        _add_review(db, booking_factory(learner, course))

        response = client.post(f"{REQUESTS_URL}/submit", json={"reviewRequestId": request.id, "rating": 4})

        assert response.status_code == 400
        assert response.json()["error"] == "This review request has already been responded to"

    def test_resubmit_after_tutor_deleted_review(
        self, client, db, learner, tutor, course, review_request, booking_factory
    ):
        booking_factory(learner, course)
        submit = {"reviewRequestId": review_request.id, "rating": 4}

        first = client.post(f"{REQUESTS_URL}/submit", json=submit)
        assert first.status_code == 200

        deleted = client.delete(
            "/api/v1/reviews", params={"reviewId": first.json()["data"]["id"], "tutorId": tutor.user_id}
        )
        assert deleted.status_code == 200

        again = client.post(f"{REQUESTS_URL}/submit", json={**submit, "rating": 5})

        assert again.status_code == 200
        assert again.json()["data"]["rating"] == 5
        db.expire_all()
        assert db.query(Review).count() == 1
        request = db.get(ReviewRequest, review_request.id)
        assert request.status == ReviewRequestStatus.RESPONDED.value
        assert request.responded_at is not None

    def test_booking_already_reviewed_closes_request(
        self, client, db, learner, course, booking_factory, request_factory, caplog
    ):
        _add_review(db, booking_factory(learner, course))
        older = request_factory(learner, status=ReviewRequestStatus.RESPONDED.value)
        older_id = older.id
        pending = request_factory(learner)

        caplog.set_level("INFO")
        response = client.post(f"{REQUESTS_URL}/submit", json={"reviewRequestId": pending.id, "rating": 4})

        assert response.status_code == 400
        assert response.json()["error"] == (
            "You have already submitted a review for this course. Thank you for your feedback!"
        )
        db.expire_all()
        assert db.query(ReviewRequest).filter_by(id=older_id).count() == 0
        assert db.get(ReviewRequest, pending.id).status == ReviewRequestStatus.RESPONDED.value
        assert db.query(Review).count() == 1
        assert not [r for r in caplog.records if r.levelname == "ERROR"]

    def test_rating_required(self, client, review_request):
        response = client.post(f"{REQUESTS_URL}/submit", json={"reviewRequestId": review_request.id})

        assert response.status_code == 400
        assert response.json()["error"] == "Rating is required"

    def test_rating_out_of_range(self, client, review_request):
        response = client.post(f"{REQUESTS_URL}/submit", json={"reviewRequestId": review_request.id, "rating": 7})

        assert response.status_code == 400
        assert response.json()["error"] == "Rating must be between 1 and 5"

    def test_unknown_request(self, client):
        response = client.post(f"{REQUESTS_URL}/submit", json={"reviewRequestId": UNKNOWN_ID, "rating": 4})

        assert response.status_code == 404
        assert response.json()["error"] == "Review request not found"


class TestDeleteRequests:
    def test_student_dismisses_own_request(self, client, db, learner, review_request):
        response = client.delete(REQUESTS_URL, params={"requestId": review_request.id, "studentId": learner.id})

        assert response.status_code == 200
        assert response.json()["message"] == "Review request deleted successfully"
        assert db.query(ReviewRequest).count() == 0

    def test_other_student_forbidden(self, client, user_factory, review_request):
        other = user_factory()

        response = client.delete(REQUESTS_URL, params={"requestId": review_request.id, "studentId": other.id})

        assert response.status_code == 403
        assert response.json()["error"] == "You can only delete your own review requests"

    def test_responded_request_is_kept(self, client, learner, request_factory):
        request = request_factory(learner, status=ReviewRequestStatus.RESPONDED.value)

        response = client.delete(REQUESTS_URL, params={"requestId": request.id, "studentId": learner.id})

        assert response.status_code == 400
        assert response.json()["error"] == "Cannot delete a review request that has already been responded to"

    def test_missing_params(self, client):
        response = client.delete(REQUESTS_URL)

        assert response.status_code == 400
        assert response.json()["error"] == "Request ID and Student ID are required"

    def test_delete_by_id(self, client, db, review_request):
        response = client.delete(f"{REQUESTS_URL}/{review_request.id}")

        assert response.status_code == 200
        assert db.query(ReviewRequest).count() == 0

    def test_delete_unknown_id(self, client):
        response = client.delete(f"{REQUESTS_URL}/{UNKNOWN_ID}")

        assert response.status_code == 404
