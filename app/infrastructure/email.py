"""Transactional email delivery via SendGrid with a test mode fallback.

Every public helper returns an :class:`EmailDeliveryResult`. When ``EMAIL_TEST_MODE``
is enabled, SendGrid is not configured, or the request fails, the rendered content
(or the code it carries) is handed back as ``test_captured_value`` instead of
raising, so callers always get a usable result.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import get_settings

logger = logging.getLogger(__name__)

_BRAND = "GPS UTM"


@dataclass(frozen=True)
class EmailDeliveryResult:
    """Outcome of a single delivery attempt."""

    delivered: bool
    test_captured_value: str | None = None
    reason: str | None = None


@dataclass(frozen=True)
class NotificationEmailPayload:
    """Content of a notification email."""

    subject: str
    message: str
    title: str | None = None


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        messages: list[str] = []
        for item in parsed.get("errors") or []:
            if not isinstance(item, dict) or not item.get("message"):
                continue
            help_link = item.get("help")
            messages.append(
                f"{item['message']} (help: {help_link})" if help_link else str(item["message"])
            )
        if messages:
            return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_sendgrid_failure(source: Any) -> str:
    """Log and describe a SendGrid exception or unsuccessful response."""

    status_code = getattr(source, "status_code", None)
    details = _extract_sendgrid_error_details(getattr(source, "body", None))

    if status_code and details:
        description = f"status {status_code}: {details}"
    elif status_code:
        description = f"status {status_code}"
    elif details:
        description = details
    else:
        description = str(source) or source.__class__.__name__

    logger.error("SendGrid API request failed with %s", description)
    return description


def _deliver(subject: str, html_content: str, recipient: str) -> tuple[bool, str | None]:
    """Send one message and return ``(delivered, failure_reason)``."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return False, "Email not configured"

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:
        return False, f"Email failed: {_describe_sendgrid_failure(exc)}"

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        return False, f"Email failed: {_describe_sendgrid_failure(response)}"

    return True, None


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email using the configured SendGrid credentials."""

    delivered, _reason = _deliver(subject, html_content, recipient)
    return delivered


def _dispatch(
    *, subject: str, html_content: str, recipient: str, captured_value: str, label: str
) -> EmailDeliveryResult:
    if get_settings().email_test_mode:
        logger.info("[TEST MODE] %s for %s not sent", label, recipient)
        return EmailDeliveryResult(delivered=False, test_captured_value=captured_value)

    delivered, reason = _deliver(subject, html_content, recipient)
    if delivered:
        logger.info("%s sent to %s", label, recipient)
        return EmailDeliveryResult(delivered=True)

    logger.warning("%s for %s was not delivered: %s", label, recipient, reason)
    return EmailDeliveryResult(
        delivered=False, test_captured_value=captured_value, reason=reason
    )


def _wrap_html(heading: str, body: str) -> str:
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        f"<h2>{escape(_BRAND)}</h2>"
        f"<h3>{escape(heading)}</h3>"
        f"{body}"
        "<hr>"
        f'<p style="color: #999; font-size: 12px;">{escape(_BRAND)}</p>'
        "</div>"
    )


def render_notification_email(payload: NotificationEmailPayload) -> str:
    """Return the plain text content of a notification email."""

    if payload.title:
        return f"{payload.title}\n\n{payload.message}"
    return payload.message


def send_notification_email(
    recipient: str, payload: NotificationEmailPayload
) -> EmailDeliveryResult:
    """Email a notification; never raises on delivery problems."""

    content = render_notification_email(payload)
    html_content = _wrap_html(
        payload.title or payload.subject,
        f"<p>{escape(payload.message)}</p>",
    )
    return _dispatch(
        subject=payload.subject,
        html_content=html_content,
        recipient=recipient,
        captured_value=content,
        label="Notification email",
    )


def send_tac_email(email: str, tac_code: str) -> EmailDeliveryResult:
    """Send the time-based authentication code used as a second login factor."""

    html_content = _wrap_html(
        "Two-Factor Authentication",
        "<p>Your TAC (Time-based Authentication Code) is:</p>"
        f"<h1 style=\"letter-spacing: 10px;\">{escape(tac_code)}</h1>"
        "<p>This code expires in 15 minutes.</p>"
        "<p>If you didn't request this code, please ignore this email.</p>",
    )
    return _dispatch(
        subject=f"{_BRAND} - Your Authentication Code",
        html_content=html_content,
        recipient=email,
        captured_value=tac_code,
        label="TAC email",
    )


def send_password_reset_email(email: str, reset_code: str) -> EmailDeliveryResult:
    """Send the code a user needs to reset a forgotten password."""

    html_content = _wrap_html(
        "Password Reset Request",
        "<p>Your password reset code is:</p>"
        f"<h1 style=\"letter-spacing: 10px;\">{escape(reset_code)}</h1>"
        "<p>This code expires in 15 minutes.</p>"
        "<p>If you did not request this, you can safely ignore this email.</p>",
    )
    return _dispatch(
        subject=f"{_BRAND} - Password Reset Code",
        html_content=html_content,
        recipient=email,
        captured_value=reset_code,
        label="Password reset email",
    )


def send_welcome_email(email: str, name: str) -> EmailDeliveryResult:
    """Welcome a newly registered user whose account awaits approval."""

    text = (
        f"Welcome, {name}! Your account has been created and is pending approval. "
        "You will receive another email once an administrator approves it."
    )
    return _dispatch(
        subject=f"Welcome to {_BRAND}!",
        html_content=_wrap_html(f"Welcome, {name}!", f"<p>{escape(text)}</p>"),
        recipient=email,
        captured_value=text,
        label="Welcome email",
    )


__all__ = [
    "EmailDeliveryResult",
    "NotificationEmailPayload",
    "render_notification_email",
    "send_email",
    "send_notification_email",
    "send_password_reset_email",
    "send_tac_email",
    "send_welcome_email",
]
