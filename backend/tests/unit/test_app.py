"""
Name: Application Wiring Tests

Responsibilities:
  - /healthz shape and X-Request-Id header
  - Demo accounts available after startup
  - Unhandled errors surface as the generic 500 envelope
  - End-to-end: login → AI call with the fake completion service
"""

import pytest
from fastapi.testclient import TestClient

from eduai.container import get_ai_bridge
from eduai.main import create_app


pytestmark = pytest.mark.unit


def test_healthz_returns_request_id():
    with TestClient(create_app()) as client:
        response = client.get("/healthz")

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["request_id"] == response.headers["X-Request-Id"]


def test_unknown_route_uses_envelope():
    with TestClient(create_app()) as client:
        response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not Found"}


def test_demo_login_and_fake_completion_roundtrip():
    with TestClient(create_app()) as client:
        login = client.post(
            "/api/auth/login",
            json={"email": "professor@eduai.com", "password": "prof123"},
        )
        assert login.status_code == 200
        assert login.json()["user"]["role"] == "professor"

        response = client.post(
            "/api/ai/analyze-code",
            json={"code": "print('hi')", "language": "python"},
            headers={"Authorization": f"Bearer {login.json()['token']}"},
        )

    assert response.status_code == 200
    assert response.json()["data"]["fake"] is True


def test_unhandled_error_is_generic_500():
    app = create_app()

    def _broken_bridge():
        raise RuntimeError("secret internals")

    app.dependency_overrides[get_ai_bridge] = _broken_bridge

    with TestClient(app, raise_server_exceptions=False) as client:
        token = client.post(
            "/api/auth/login",
            json={"email": "student@eduai.com", "password": "student123"},
        ).json()["token"]
        response = client.post(
            "/api/ai/analyze-code",
            json={"code": "x", "language": "python"},
            headers={"Authorization": f"Bearer {token}"},
        )

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}
    assert "secret internals" not in response.text
