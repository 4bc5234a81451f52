"""Tests for Zoom meeting creation against a mocked Zoom API."""

import json

import httpx
import pytest

from app.api.dependencies.services import get_zoom_service
from app.core.config import settings
from app.main import app
from app.services.zoom_service import ZoomService

ZOOM_URL = "/api/v1/zoom"

MEETING = {
    "id": 85746065432,
    "topic": "Python for Beginners",
    "join_url": "https://zoom.us/j/85746065432",
    "start_url": "https://zoom.us/s/85746065432",
}


@pytest.fixture
def zoom_api(client, db):
    """Route the Zoom service through a mock transport; returns the captured requests."""
    calls = {"requests": [], "token_status": 200, "meeting_status": 201}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["requests"].append(request)
        if request.url.path == "/oauth/token":
            if calls["token_status"] >= 400:
                return httpx.Response(calls["token_status"], text="invalid_client")
            return httpx.Response(200, json={"access_token": "zoom-token", "expires_in": 3599})
        if calls["meeting_status"] >= 400:
            return httpx.Response(calls["meeting_status"], json={"code": 300, "message": "Invalid start time"})
        return httpx.Response(calls["meeting_status"], json=MEETING)

    transport = httpx.MockTransport(handler)
    app.dependency_overrides[get_zoom_service] = lambda: ZoomService(db, transport=transport)
    return calls


def _meeting_body(calls):
    request = calls["requests"][-1]
    assert request.url.path == "/v2/users/me/meetings"
    assert request.headers["Authorization"] == "Bearer zoom-token"
    return json.loads(request.content)


class TestCreateMeeting:
    def test_scheduled_meeting(self, client, zoom_api):
        response = client.post(
            ZOOM_URL, json={"topic": "Python for Beginners", "startTime": "2025-11-02T21:00:00Z", "duration": 60}
        )

        assert response.status_code == 200
        assert response.json()["data"] == {
            "id": MEETING["id"],
            "topic": "Python for Beginners",
            "joinUrl": MEETING["join_url"],
            "startUrl": MEETING["start_url"],
        }

        token_request = zoom_api["requests"][0]
        assert token_request.url.params["grant_type"] == "account_credentials"
        assert token_request.url.params["account_id"] == settings.zoom_account_id

        body = _meeting_body(zoom_api)
        assert body["type"] == 2
        assert body["start_time"] == "2025-11-02T21:00:00Z"
        assert body["duration"] == 60

    def test_instant_meeting_with_defaults(self, client, zoom_api):
        response = client.post(ZOOM_URL)

        assert response.status_code == 200
        body = _meeting_body(zoom_api)
        assert body["type"] == 1
        assert body["topic"] == "My API Meeting"
        assert body["duration"] == 30
        assert "start_time" not in body

    def test_upstream_rejection_keeps_status(self, client, zoom_api):
        zoom_api["meeting_status"] = 400

        response = client.post(ZOOM_URL, json={"startTime": "not-a-date"})

        assert response.status_code == 400
        assert response.json()["error"] == "Zoom create failed"

    def test_token_failure(self, client, zoom_api):
        zoom_api["token_status"] = 401

        response = client.post(ZOOM_URL, json={})

        assert response.status_code == 500
        assert response.json()["error"].startswith("Zoom token error: 401")
        assert len(zoom_api["requests"]) == 1

    def test_not_configured(self, client, zoom_api, monkeypatch):
        monkeypatch.setattr(settings, "zoom_account_id", "")

        response = client.post(ZOOM_URL, json={})

        assert response.status_code == 500
        assert response.json()["error"] == "Zoom is not configured"
        assert zoom_api["requests"] == []
