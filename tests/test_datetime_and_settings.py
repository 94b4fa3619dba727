from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from app.config import Settings
from app.utils.datetime import _resolve_timezone, upcoming_date_window


def test_upcoming_window_uses_app_timezone_day():
    # 20:00 UTC on the 20th is already the 21st in Kuala Lumpur (UTC+8).
    now = datetime(2026, 10, 20, 20, 0, tzinfo=timezone.utc)

    assert upcoming_date_window(3, now=now) == (date(2026, 10, 21), date(2026, 10, 24))


def test_upcoming_window_rejects_negative_days():
    with pytest.raises(ValueError):
        upcoming_date_window(-1)


@pytest.mark.parametrize(
    ("name", "expected_offset_hours"),
    [("UTC+8", 8), ("GMT-05:00", -5), ("Not/AZone", 8)],
)
def test_resolve_timezone_offsets(name, expected_offset_hours):
    tz = _resolve_timezone(name)
    offset = datetime(2026, 1, 1, tzinfo=tz).utcoffset()

    assert offset.total_seconds() == expected_offset_hours * 3600


def test_sendgrid_settings_must_be_paired():
    with pytest.raises(ValidationError):
        Settings(database_url="sqlite://", secret_key="x", sendgrid_api_key="SG.key")


def test_notification_defaults():
    settings = Settings(database_url="sqlite://", secret_key="x")

    assert settings.notification_lookahead_days == 3
    assert settings.notification_recipient_roles == ["member"]
    assert settings.is_production() is False
