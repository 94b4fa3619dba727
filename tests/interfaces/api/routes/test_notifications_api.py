"""Integration tests for the notification endpoints."""

from __future__ import annotations

from datetime import timedelta

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from app.infrastructure.models import NotificationModel
from app.infrastructure.security import create_access_token
from app.utils import now_in_app_timezone
from main import create_app

from conftest import DEFAULT_PASSWORD


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


def _auth(user_id: int, role: str = "member") -> dict[str, str]:
    token = create_access_token({"sub": str(user_id), "role": role})
    return {"Authorization": f"Bearer {token}"}


def test_login_issues_token_for_approved_users(client: TestClient, make_user) -> None:
    make_user(email="member@example.com")
    make_user(email="pending@example.com", status="pending")

    response = client.post(
        "/auth/token",
        data={"username": "member@example.com", "password": DEFAULT_PASSWORD},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["token_type"] == "bearer"
    assert payload["role"] == "member"

    me = client.get(
        "/notifications/unread-count",
        headers={"Authorization": f"Bearer {payload['access_token']}"},
    )
    assert me.status_code == 200

    wrong = client.post(
        "/auth/token",
        data={"username": "member@example.com", "password": "nope"},
    )
    assert wrong.status_code == 401

    pending = client.post(
        "/auth/token",
        data={"username": "pending@example.com", "password": DEFAULT_PASSWORD},
    )
    assert pending.status_code == 403


def test_requests_without_token_are_rejected(client: TestClient) -> None:
    assert client.get("/notifications/").status_code == 401
    assert client.get("/notifications/unread-count").status_code == 401
    assert client.put("/notifications/read-all").status_code == 401
    assert client.put("/notifications/1/read").status_code == 401
    bad = client.get("/notifications/", headers={"Authorization": "Bearer garbage"})
    assert bad.status_code == 401


def test_read_flow(client: TestClient, make_user, make_notification) -> None:
    owner = make_user()
    first = make_notification(owner, title="First")
    make_notification(owner, title="Second", type="system")
    headers = _auth(owner)

    listing = client.get("/notifications/", headers=headers)
    assert listing.status_code == 200
    assert {item["title"] for item in listing.json()} == {"First", "Second"}

    assert client.get("/notifications/unread-count", headers=headers).json() == {"count": 2}

    marked = client.put(f"/notifications/{first}/read", headers=headers)
    assert marked.status_code == 200
    assert marked.json()["is_read"] is True
    assert client.get("/notifications/unread-count", headers=headers).json() == {"count": 1}

    read_all = client.put("/notifications/read-all", headers=headers)
    assert read_all.json() == {"updated": 1}
    assert client.get("/notifications/unread-count", headers=headers).json() == {"count": 0}
    assert all(item["is_read"] for item in client.get("/notifications/", headers=headers).json())
    assert client.put("/notifications/read-all", headers=headers).json() == {"updated": 0}


def test_cross_user_mark_read_returns_not_found(
    client: TestClient, session, make_user, make_notification
) -> None:
    owner = make_user()
    intruder = make_user()
    notification_id = make_notification(owner)

    response = client.put(f"/notifications/{notification_id}/read", headers=_auth(intruder))

    assert response.status_code == 404
    assert response.json()["detail"] == "Notification not found"
    session.expire_all()
    assert session.get(NotificationModel, notification_id).is_read is False


def test_notify_upcoming_requires_admin(
    client: TestClient, session, make_user, make_event
) -> None:
    member = make_user()
    make_event(event_date=now_in_app_timezone().date() + timedelta(days=1))

    response = client.post("/notifications/notify-upcoming", headers=_auth(member))

    assert response.status_code == 403
    assert session.query(NotificationModel).count() == 0


def test_notify_upcoming_as_admin_is_idempotent(
    client: TestClient, session, make_user, make_event
) -> None:
    admin = make_user(role="admin")
    member = make_user()
    event_id = make_event(event_date=now_in_app_timezone().date() + timedelta(days=2))
    make_event(name="Closed", event_date=now_in_app_timezone().date(), status="finished")

    first = client.post("/notifications/notify-upcoming", headers=_auth(admin, "admin"))
    assert first.status_code == 200
    body = first.json()
    assert body["message"] == "Members notified about upcoming events"
    assert body["created"] == 1
    assert body["failed"] == 0

    second = client.post("/notifications/notify-upcoming", headers=_auth(admin, "admin"))
    assert second.json()["created"] == 0
    assert second.json()["skipped"] == 1

    listing = client.get("/notifications/", headers=_auth(member)).json()
    assert len(listing) == 1
    assert listing[0]["related_id"] == event_id
    assert listing[0]["type"] == "event"
    assert listing[0]["is_read"] is False
