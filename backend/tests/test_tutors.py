"""Tests for the tutor directory and the tutor's own profile."""

from app.models.review import Review, ReviewStatus
from app.services.tutor_service import round_rating
from tests.helpers.auth import auth_headers_for


def _review(db, booking, rating, status=ReviewStatus.ACCEPTED.value):
    review = Review(
        booking_id=booking.id,
        reviewer_id=booking.learner_id,
        tutor_id=booking.tutor_id,
        course_id=booking.course_id,
        rating=rating,
        status=status,
    )
    db.add(review)
    db.commit()
    return review


class TestRoundRating:
    def test_rounds_half_up(self):
        assert round_rating(4.25) == 4.3
        assert round_rating(4.24) == 4.2
        assert round_rating(0) == 0.0


class TestTutorDirectory:
    def test_list_includes_stats(self, client, db, tutor, course, learner, user_factory, booking_factory):
        other_learner = user_factory()
        first = booking_factory(learner, course)
        second = booking_factory(other_learner, course)
        _review(db, first, 5)
        _review(db, second, 4)
        # Pending reviews do not count toward the rating
        third = booking_factory(learner, course)
        _review(db, third, 1, status=ReviewStatus.PENDING.value)

        response = client.get("/api/v1/tutors")

        assert response.status_code == 200
        cards = response.json()["data"]
        assert len(cards) == 1
        card = cards[0]
        assert card["id"] == tutor.id
        assert card["name"] == "Sarah Tutor"
        assert card["rating"] == 4.5
        assert card["totalReviews"] == 2
        assert card["studentsCount"] == 2
        assert card["avatar"] == "/placeholder.svg"
        assert card["specialties"] == ["React", "Python"]

    def test_specialties_capped_at_five(self, client, tutor_factory):
        tutor_factory(specialties=["a", "b", "c", "d", "e", "f", "g"])

        card = client.get("/api/v1/tutors").json()["data"][0]

        assert card["specialties"] == ["a", "b", "c", "d", "e"]

    def test_empty_specialties_fall_back_to_course_categories(self, client, tutor_factory, course_factory, category):
        bare = tutor_factory(specialties=[])
        course_factory(bare, category_id=category.id)
        course_factory(bare, title="Untitled Topic")

        card = client.get("/api/v1/tutors").json()["data"][0]

        assert card["specialties"] == ["Programming", "Untitled Topic"]

    def test_no_reviews_means_zero_rating(self, client, tutor):
        card = client.get("/api/v1/tutors").json()["data"][0]

        assert card["rating"] == 0
        assert card["totalReviews"] == 0
        assert card["studentsCount"] == 0


class TestTutorDetail:
    def test_detail_has_skills(self, client, tutor, course):
        response = client.get(f"/api/v1/tutors/{tutor.id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["tutor"]["responseTime"] == "Within 24 hours"
        assert len(data["skills"]) == 1
        skill = data["skills"][0]
        assert skill["id"] == course.id
        assert skill["category"] == "Programming"
        assert skill["level"] == "beginner"
        assert skill["price"] == 200.0
        assert skill["image"] == "/placeholder.svg"

    def test_unknown_tutor(self, client):
        response = client.get("/api/v1/tutors/01HZZZZZZZZZZZZZZZZZZZZZZZ")

        assert response.status_code == 404
        assert response.json()["error"] == "Tutor not found"


class TestOwnProfile:
    def test_get_profile_requires_auth(self, client):
        response = client.get("/api/v1/tutors/profile")

        assert response.status_code == 401

    def test_learner_is_rejected(self, client, learner_headers):
        response = client.get("/api/v1/tutors/profile", headers=learner_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "User is not a tutor"

    def test_profile_is_created_on_first_visit(self, client, db, user_factory):
        tutor_user = user_factory(role="tutor")

        response = client.get("/api/v1/tutors/profile", headers=auth_headers_for(tutor_user))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["userId"] == tutor_user.id
        assert data["hourlyRate"] == 0
        assert data["bio"] == ""
        db.refresh(tutor_user)
        assert tutor_user.tutor is not None

    def test_update_profile(self, client, tutor, tutor_headers):
        response = client.patch(
            "/api/v1/tutors/profile",
            json={"bio": "New bio", "hourlyRate": 55, "specialties": ["Go"], "language": "", "name": "Sarah T."},
            headers=tutor_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Profile updated successfully"
        assert body["data"]["bio"] == "New bio"
        assert body["data"]["hourlyRate"] == 55
        assert body["data"]["specialties"] == ["Go"]
        # Blank values leave the stored value alone
        assert body["data"]["language"] == "English"
        assert body["data"]["name"] == "Sarah T."

    def test_update_creates_missing_profile(self, client, user_factory):
        tutor_user = user_factory(role="tutor")

        response = client.patch(
            "/api/v1/tutors/profile",
            json={"bio": "Fresh start", "hourlyRate": 30},
            headers=auth_headers_for(tutor_user),
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Profile created successfully"
        assert response.json()["data"]["bio"] == "Fresh start"

    def test_negative_rate_is_rejected(self, client, tutor, tutor_headers):
        response = client.patch("/api/v1/tutors/profile", json={"hourlyRate": -5}, headers=tutor_headers)

        assert response.status_code == 400
