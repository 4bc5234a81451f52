"""Tests for profile and password updates."""

import pytest

from app.auth import verify_password
from tests.helpers.auth import auth_headers_for


class TestUpdateProfile:
    def test_update_own_profile(self, client, learner, learner_headers):
        response = client.patch(
            f"/api/v1/users/{learner.id}",
            json={"name": "Alex Updated", "email": "Alex.New@Example.com"},
            headers=learner_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Profile updated successfully"
        assert body["data"]["name"] == "Alex Updated"
        assert body["data"]["email"] == "alex.new@example.com"

    def test_requires_token(self, client, learner):
        response = client.patch(f"/api/v1/users/{learner.id}", json={"name": "X", "email": "x@example.com"})

        assert response.status_code == 401
        assert response.json()["error"] == "Authorization token required"

    def test_rejects_garbage_token(self, client, learner):
        response = client.patch(
            f"/api/v1/users/{learner.id}",
            json={"name": "X", "email": "x@example.com"},
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid or expired token"

    def test_cannot_update_someone_else(self, client, learner, user_factory):
        other = user_factory()

        response = client.patch(
            f"/api/v1/users/{learner.id}",
            json={"name": "Hijack", "email": "hijack@example.com"},
            headers=auth_headers_for(other),
        )

        assert response.status_code == 403
        assert response.json()["error"] == "You can only update your own profile"

    def test_name_is_required(self, client, learner, learner_headers):
        response = client.patch(
            f"/api/v1/users/{learner.id}", json={"name": "  ", "email": "a@example.com"}, headers=learner_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Name is required"

    @pytest.mark.parametrize("email", ["nope", "", "alex..smith@example.com", "alex@example"])
    def test_email_must_be_valid(self, client, learner, learner_headers, email):
        response = client.patch(
            f"/api/v1/users/{learner.id}", json={"name": "Alex", "email": email}, headers=learner_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Valid email is required"

    def test_email_taken_by_another_user(self, client, learner, learner_headers, user_factory):
        user_factory(email="taken@example.com")

        response = client.patch(
            f"/api/v1/users/{learner.id}",
            json={"name": "Alex", "email": "taken@example.com"},
            headers=learner_headers,
        )

        assert response.status_code == 409
        assert response.json()["error"] == "Email is already taken"

    def test_keeping_own_email_is_allowed(self, client, learner, learner_headers):
        response = client.patch(
            f"/api/v1/users/{learner.id}",
            json={"name": "Alex Again", "email": "alex@example.com"},
            headers=learner_headers,
        )

        assert response.status_code == 200


class TestChangePassword:
    def test_change_password(self, client, db, learner, learner_headers):
        response = client.patch(
            f"/api/v1/users/{learner.id}/password",
            json={"currentPassword": "password123", "newPassword": "newsecret"},
            headers=learner_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Password updated successfully"}
        db.refresh(learner)
        assert verify_password("newsecret", learner.hashed_password)

    def test_wrong_current_password(self, client, learner, learner_headers):
        response = client.patch(
            f"/api/v1/users/{learner.id}/password",
            json={"currentPassword": "wrong-one", "newPassword": "newsecret"},
            headers=learner_headers,
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Current password is incorrect"

    def test_new_password_too_short(self, client, learner, learner_headers):
        response = client.patch(
            f"/api/v1/users/{learner.id}/password",
            json={"currentPassword": "password123", "newPassword": "abc"},
            headers=learner_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "New password must be at least 6 characters long"

    def test_missing_fields(self, client, learner, learner_headers):
        response = client.patch(f"/api/v1/users/{learner.id}/password", json={}, headers=learner_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Current password and new password are required"

    def test_other_users_password(self, client, learner, user_factory):
        other = user_factory()

        response = client.patch(
            f"/api/v1/users/{learner.id}/password",
            json={"currentPassword": "password123", "newPassword": "newsecret"},
            headers=auth_headers_for(other),
        )

        assert response.status_code == 403
        assert response.json()["error"] == "You can only update your own password"
