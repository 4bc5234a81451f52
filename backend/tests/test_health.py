"""Tests for the health endpoint and the error envelope."""


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"status": "healthy", "environment": "test"}}


def test_health_at_root(client):
    assert client.get("/health").json()["data"]["status"] == "healthy"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/v1/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not Found"}
