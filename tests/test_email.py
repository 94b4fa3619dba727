"""Unit tests for the SendGrid email helpers and their test mode."""

from __future__ import annotations

import json
import types

import pytest

from app.infrastructure import email as email_module
from app.infrastructure.email import NotificationEmailPayload


class DummySettings:
    email_test_mode = False
    sendgrid_api_key = "SG.fake"
    sendgrid_sender = "sender@example.com"


class UnconfiguredSettings(DummySettings):
    sendgrid_api_key = None
    sendgrid_sender = None


class TestModeSettings(DummySettings):
    email_test_mode = True


class RecordingClient:
    """Stand-in for ``SendGridAPIClient`` that records sent messages."""

    sent: list = []
    status_code = 202

    def __init__(self, api_key: str):
        self.api_key = api_key

    def send(self, message):
        RecordingClient.sent.append(message)
        return types.SimpleNamespace(status_code=self.status_code, body=None)


@pytest.fixture(autouse=True)
def recording_client(monkeypatch: pytest.MonkeyPatch):
    RecordingClient.sent = []
    monkeypatch.setattr(email_module, "SendGridAPIClient", RecordingClient)
    return RecordingClient


def _payload() -> NotificationEmailPayload:
    return NotificationEmailPayload(
        subject="Upcoming event: Budget Talk",
        title="Upcoming event: Budget Talk",
        message="Reminder: 'Budget Talk' takes place tomorrow.",
    )


def test_send_email_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """When SendGrid settings are missing the helper should exit early."""

    monkeypatch.setattr(email_module, "get_settings", lambda: UnconfiguredSettings())

    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is False
    assert RecordingClient.sent == []


def test_send_email_success(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())

    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is True
    assert len(RecordingClient.sent) == 1


def test_notification_email_in_test_mode_captures_content(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(email_module, "get_settings", lambda: TestModeSettings())

    result = email_module.send_notification_email("user@example.com", _payload())

    assert result.delivered is False
    assert "Budget Talk" in result.test_captured_value
    assert result.test_captured_value.startswith("Upcoming event: Budget Talk")
    assert RecordingClient.sent == []


def test_notification_email_delivered(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())

    result = email_module.send_notification_email("user@example.com", _payload())

    assert result.delivered is True
    assert result.test_captured_value is None
    assert len(RecordingClient.sent) == 1


def test_notification_email_falls_back_when_unconfigured(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(email_module, "get_settings", lambda: UnconfiguredSettings())

    result = email_module.send_notification_email("user@example.com", _payload())

    assert result.delivered is False
    assert result.reason == "Email not configured"
    assert "Budget Talk" in result.test_captured_value


def test_delivery_failure_is_captured_and_logged(monkeypatch: pytest.MonkeyPatch, caplog):
    """Errors raised by SendGrid become a captured result instead of an exception."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {
                "errors": [
                    {
                        "message": "The provided authorization grant is invalid.",
                        "help": "https://sendgrid.com/docs/for-developers/sending-email/authentication/",
                    }
                ]
            }
        ).encode()

    class FailingClient(RecordingClient):
        def send(self, message):
            raise FakeForbiddenError()

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", FailingClient)

    with caplog.at_level("ERROR"):
        result = email_module.send_tac_email("user@example.com", "123456")

    assert result.delivered is False
    assert result.test_captured_value == "123456"
    assert "status 403" in result.reason
    assert "status 403" in caplog.text
    assert "authorization grant is invalid" in caplog.text


def test_unsuccessful_status_code_is_not_delivered(monkeypatch: pytest.MonkeyPatch) -> None:
    class RejectingClient(RecordingClient):
        status_code = 500

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RejectingClient)

    result = email_module.send_password_reset_email("user@example.com", "654321")

    assert result.delivered is False
    assert result.test_captured_value == "654321"
    assert "status 500" in result.reason


def test_welcome_email_in_test_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(email_module, "get_settings", lambda: TestModeSettings())

    result = email_module.send_welcome_email("new@example.com", "Aina")

    assert result.delivered is False
    assert "Welcome, Aina!" in result.test_captured_value
    assert RecordingClient.sent == []
