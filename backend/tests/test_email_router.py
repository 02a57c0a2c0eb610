"""
API Tests for the email service endpoints

- POST /send-reset-email
- GET /health

The application runs in-process with a mocked email client.

Run with: pytest tests/test_email_router.py -v
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient
from resend.exceptions import ResendError

from config import Settings
from email_integration.email_client import SendResult
from server import create_app

VALID = {
    "to": "anna@example.com",
    "resetLink": "https://shop.example.com/reset?token=abc",
    "login": "anna@example.com",
}

MISSING = {"error": "Missing required fields: to, resetLink, login"}


@pytest.fixture
def settings():
    return Settings(
        RESEND_API_KEY="re_test_key",
        FROM_EMAIL="noreply@shop.test",
        ENVIRONMENT="development",
    )


@pytest.fixture
def email_client():
    client = MagicMock()
    client.from_address = "noreply@shop.test"
    client.send_email = AsyncMock(return_value=SendResult(id="abc123"))
    return client


@pytest.fixture
def api(settings, email_client):
    app = create_app(settings=settings, email_client=email_client)
    with TestClient(app) as client:
        yield client


class TestSendResetEmail:
    """POST /send-reset-email"""

    def test_success(self, api):
        response = api.post("/send-reset-email", json=VALID)

        assert response.status_code == 200
        assert response.json() == {"success": True, "messageId": "abc123"}

    def test_provider_error(self, api, email_client):
        email_client.send_email.return_value = SendResult(error={"message": "invalid domain"})

        response = api.post("/send-reset-email", json=VALID)

        assert response.status_code == 400
        assert response.json() == {"error": {"message": "invalid domain"}}

    def test_client_exception(self, api, email_client):
        email_client.send_email.side_effect = TimeoutError("network timeout")

        response = api.post("/send-reset-email", json=VALID)

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "message": "network timeout"}

    @pytest.mark.parametrize("field", ["to", "resetLink", "login"])
    def test_missing_field(self, api, email_client, field):
        payload = {k: v for k, v in VALID.items() if k != field}

        response = api.post("/send-reset-email", json=payload)

        assert response.status_code == 400
        assert response.json() == MISSING
        email_client.send_email.assert_not_awaited()

    @pytest.mark.parametrize("field", ["to", "resetLink", "login"])
    @pytest.mark.parametrize("value", [False, 0, [], None, ""])
    def test_falsy_value_is_missing(self, api, email_client, field, value):
        """Any falsy JSON value counts as a missing field."""
        payload = dict(VALID, **{field: value})

        response = api.post("/send-reset-email", json=payload)

        assert response.status_code == 400
        assert response.json() == MISSING
        email_client.send_email.assert_not_awaited()

    @pytest.mark.parametrize("body", [[], [VALID], "text", 42])
    def test_non_object_body(self, api, email_client, body):
        response = api.post("/send-reset-email", json=body)

        assert response.status_code == 400
        assert response.json() == MISSING
        email_client.send_email.assert_not_awaited()

    def test_unexpected_provider_failure(self, api, email_client):
        email_client.send_email.side_effect = ResendError(
            code=500,
            error_type="InternalServerError",
            message="Failed to parse Resend API response. Please try again.",
            suggested_action="",
        )

        response = api.post("/send-reset-email", json=VALID)

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"

    def test_empty_object(self, api, email_client):
        response = api.post("/send-reset-email", json={})

        assert response.status_code == 400
        assert response.json() == MISSING
        email_client.send_email.assert_not_awaited()

    def test_no_body(self, api, email_client):
        response = api.post("/send-reset-email")

        assert response.status_code == 400
        assert response.json() == MISSING
        email_client.send_email.assert_not_awaited()

    def test_extra_fields_ignored(self, api):
        response = api.post("/send-reset-email", json=dict(VALID, locale="ru"))

        assert response.status_code == 200

    def test_request_id_echoed(self, api):
        response = api.post("/send-reset-email", json=VALID, headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"
        assert "X-Process-Time" in response.headers

    def test_uses_shared_client(self, api, email_client):
        api.post("/send-reset-email", json=VALID)
        api.post("/send-reset-email", json=VALID)

        assert email_client.send_email.await_count == 2


class TestHealth:
    """GET /health"""

    def test_health(self, api):
        response = api.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "email-service"}

    def test_health_after_failures(self, api, email_client):
        """Health is independent of earlier requests."""
        email_client.send_email.side_effect = TimeoutError("network timeout")
        api.post("/send-reset-email", json=VALID)
        api.post("/send-reset-email", json={})

        response = api.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "email-service"}


class TestStartup:
    """Application lifespan"""

    def test_builds_client_from_settings(self, settings):
        app = create_app(settings=settings)

        with TestClient(app):
            client = app.state.email_client
            assert client.api_key == "re_test_key"
            assert client.from_address == "noreply@shop.test"

    def test_production_refuses_missing_provider_config(self):
        settings = Settings(RESEND_API_KEY="", FROM_EMAIL="", ENVIRONMENT="production")
        app = create_app(settings=settings, email_client=MagicMock())

        with pytest.raises(RuntimeError):
            with TestClient(app):
                pass

    def test_development_starts_without_provider_config(self):
        settings = Settings(RESEND_API_KEY="", FROM_EMAIL="", ENVIRONMENT="development")
        app = create_app(settings=settings, email_client=MagicMock())

        with TestClient(app) as client:
            assert client.get("/health").status_code == 200
