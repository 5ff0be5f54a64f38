"""
Tests for the health check, the 404 directory and the error envelope
"""

from unittest.mock import patch

from sqlalchemy.exc import OperationalError


def test_health_reports_store_and_uptime(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"]["status"] == "healthy"
    assert body["uptime"] >= 0
    assert body["environment"] == "test"
    assert "pool" in body["databaseStats"]


def test_health_is_503_when_store_unreachable(client, store):
    with patch.object(store, "ping", side_effect=OperationalError("SELECT 1", {}, Exception("connection refused"))):
        response = client.get("/health")
    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"
    assert response.json()["database"]["status"] == "unhealthy"


def test_unknown_route_lists_endpoints(client):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] == 0
    assert body["error"] == "NOT_FOUND"
    assert body["path"] == "/api/does-not-exist"
    assert body["method"] == "GET"
    assert body["availableEndpoints"]["health"]["check"] == "GET /health"


def test_store_errors_raised_in_handlers_use_envelope(client, user_account):
    with patch(
        "app.services.user_details_service.get_user_info",
        side_effect=OperationalError("SELECT", {}, Exception("connection refused")),
    ):
        response = client.post(
            "/api/users/get-user-info", json={}, headers={"Authorization": f"Bearer {user_account['token']}"}
        )
    assert response.status_code == 503
    body = response.json()
    assert body["success"] == 0
    assert body["error"] == "DB_CONNECTION_ERROR"
    assert "timestamp" in body


def test_malformed_json_is_validation_error(client):
    response = client.post(
        "/api/login", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"
