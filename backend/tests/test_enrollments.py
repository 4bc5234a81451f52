"""Tests for enrollments."""

from app.models.enrollment import Enrollment

ENROLLMENTS_URL = "/api/v1/enrollments"


class TestCreateEnrollment:
    def test_learner_enrolls(self, client, db, learner, course):
        response = client.post(ENROLLMENTS_URL, json={"userId": learner.id, "courseId": course.id, "sessionId": "cs_1"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Enrollment created successfully"
        assert body["data"]["studentId"] == learner.id
        assert body["data"]["progress"] == 0
        assert body["data"]["course"]["tutor"]["user"]["name"] == "Sarah Tutor"
        assert db.query(Enrollment).count() == 1

    def test_enrolling_twice_returns_existing(self, client, db, learner, course, enrollment):
        response = client.post(ENROLLMENTS_URL, json={"userId": learner.id, "courseId": course.id})

        assert response.status_code == 200
        assert response.json()["message"] == "Already enrolled"
        assert response.json()["data"]["id"] == enrollment.id
        assert db.query(Enrollment).count() == 1

    def test_missing_fields(self, client):
        response = client.post(ENROLLMENTS_URL, json={"userId": "abc"})

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields: userId, courseId"

    def test_unknown_user(self, client, course):
        response = client.post(ENROLLMENTS_URL, json={"userId": "01HZZZZZZZZZZZZZZZZZZZZZZZ", "courseId": course.id})

        assert response.status_code == 404
        assert response.json()["error"] == "User not found"

    def test_tutor_cannot_enroll(self, client, tutor, course):
        response = client.post(ENROLLMENTS_URL, json={"userId": tutor.user_id, "courseId": course.id})

        assert response.status_code == 403
        assert response.json()["error"] == "Only learners can enroll in courses"

    def test_unknown_course(self, client, learner):
        response = client.post(ENROLLMENTS_URL, json={"userId": learner.id, "courseId": "01HZZZZZZZZZZZZZZZZZZZZZZZ"})

        assert response.status_code == 404
        assert response.json()["error"] == "Course not found"


class TestListEnrollments:
    def test_filter_by_user_and_course(self, client, learner, course, enrollment, user_factory, course_factory, tutor):
        other = user_factory()
        client.post(ENROLLMENTS_URL, json={"userId": other.id, "courseId": course.id})
        second_course = course_factory(tutor, title="Second")
        client.post(ENROLLMENTS_URL, json={"userId": learner.id, "courseId": second_course.id})

        mine = client.get(ENROLLMENTS_URL, params={"userId": learner.id}).json()["data"]
        assert {e["courseId"] for e in mine} == {course.id, second_course.id}

        for_course = client.get(ENROLLMENTS_URL, params={"courseId": course.id}).json()["data"]
        assert {e["studentId"] for e in for_course} == {learner.id, other.id}

        everything = client.get(ENROLLMENTS_URL).json()["data"]
        assert len(everything) == 3


class TestCheckEnrollment:
    def test_overview_for_user(self, client, learner, course, enrollment):
        response = client.get(f"{ENROLLMENTS_URL}/check", params={"courseId": course.id, "userId": learner.id})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["course"]["id"] == course.id
        assert data["course"]["tutor"]["name"] == "Sarah Tutor"
        assert data["enrollmentsCount"] == 1
        assert data["enrollments"][0]["student"]["role"] == "learner"
        assert data["userEnrollment"]["id"] == enrollment.id

    def test_user_not_enrolled(self, client, course, user_factory):
        stranger = user_factory()

        data = client.get(f"{ENROLLMENTS_URL}/check", params={"courseId": course.id, "userId": stranger.id}).json()[
            "data"
        ]

        assert data["enrollmentsCount"] == 0
        assert data["userEnrollment"] is None

    def test_course_id_required(self, client):
        response = client.get(f"{ENROLLMENTS_URL}/check")

        assert response.status_code == 400
        assert response.json()["error"] == "courseId is required"

    def test_unknown_course(self, client):
        response = client.get(f"{ENROLLMENTS_URL}/check", params={"courseId": "01HZZZZZZZZZZZZZZZZZZZZZZZ"})

        assert response.status_code == 404
