"""Shared fixtures backed by a throwaway SQLite database."""

from __future__ import annotations

import os
import sys
import tempfile
from datetime import date, datetime, time
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "gps_notifications_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["APP_TIMEZONE"] = "Asia/Kuala_Lumpur"
os.environ["EMAIL_TEST_MODE"] = "false"
os.environ["ENVIRONMENT"] = "development"
for _name in ("SENDGRID_API_KEY", "SENDGRID_SENDER", "INIT_SECRET", "DEFAULT_ADMIN_PASSWORD"):
    os.environ.pop(_name, None)

from app.config import get_settings  # noqa: E402
from app.utils.datetime import get_app_timezone  # noqa: E402

get_settings.cache_clear()
get_app_timezone.cache_clear()

from app.infrastructure import database  # noqa: E402
from app.domain.entities import Event  # noqa: E402
from app.infrastructure.models import NotificationModel, UserModel  # noqa: E402
from app.infrastructure.repositories import EventRepository  # noqa: E402
from app.infrastructure.security import get_password_hash  # noqa: E402

DEFAULT_PASSWORD = "StrongPass123!"
_PASSWORD_HASH = get_password_hash(DEFAULT_PASSWORD)

# Wednesday 2026-10-21, 09:00 in Kuala Lumpur.
NOW = datetime(2026, 10, 21, 9, 0, tzinfo=get_app_timezone())
TODAY = NOW.date()


@pytest.fixture(autouse=True)
def reset_database():
    """Give every test an empty schema."""

    get_settings.cache_clear()
    engine = database.init_engine(get_settings())
    database.Base.metadata.drop_all(bind=engine)
    database.initialize_database(engine)
    yield
    engine = database.init_engine(get_settings())
    database.Base.metadata.drop_all(bind=engine)
    database.dispose_engine()


@pytest.fixture()
def session():
    with database.SessionLocal() as db:
        yield db


@pytest.fixture()
def make_user(session):
    counter = {"value": 0}

    def _make_user(*, role: str = "member", status: str = "approved", email: str | None = None,
                   name: str = "Test User") -> int:
        counter["value"] += 1
        model = UserModel(
            name=name,
            email=email or f"user{counter['value']}@example.com",
            password=_PASSWORD_HASH,
            role=role,
            status=status,
        )
        session.add(model)
        session.commit()
        session.refresh(model)
        return model.id

    return _make_user


@pytest.fixture()
def make_event(session):
    def _make_event(*, name: str = "Consumer Rights Workshop", event_date: date | None = None,
                    status: str = "ongoing", event_time: time | None = time(14, 30),
                    location: str | None = "Dewan Sultan Iskandar") -> int:
        event = EventRepository(session).create(
            Event(
                id=None,
                name=name,
                event_date=event_date or TODAY,
                event_time=event_time,
                location=location,
                status=status,
            )
        )
        return event.id

    return _make_event


@pytest.fixture()
def make_notification(session):
    def _make_notification(user_id: int, *, title: str = "Hello", related_id: int | None = None,
                           type: str = "event", is_read: bool = False,
                           created_at: datetime | None = None) -> int:
        model = NotificationModel(
            user_id=user_id,
            type=type,
            title=title,
            message=f"{title} message",
            related_id=related_id,
            is_read=is_read,
            created_at=created_at or datetime(2026, 10, 1, 8, 0),
        )
        session.add(model)
        session.commit()
        session.refresh(model)
        return model.id

    return _make_notification
