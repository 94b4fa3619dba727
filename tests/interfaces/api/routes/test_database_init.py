"""Tests for the capability-gated database initialisation endpoint."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.infrastructure.models import UserModel
from main import create_app


def _client_with(**overrides) -> TestClient:
    app = create_app()
    settings = Settings(**{"database_url": get_settings().database_url, "secret_key": "x", **overrides})
    app.dependency_overrides[get_settings] = lambda: settings
    return TestClient(app)


def test_development_mode_allows_init_and_seeds_admin(session) -> None:
    with _client_with(
        environment="development",
        default_admin_email="root@example.com",
        default_admin_password="AdminPass123!",
    ) as client:
        response = client.post("/init")
        again = client.post("/init")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert "Default admin created (root@example.com)" in body["results"]
    assert "Admin account already exists" in again.json()["results"]

    admin = session.query(UserModel).filter_by(email="root@example.com").one()
    assert admin.role == "admin"
    assert admin.status == "approved"


def test_production_requires_matching_secret(session) -> None:
    with _client_with(environment="production", init_secret="s3cret") as client:
        missing = client.post("/init")
        wrong = client.post("/init", params={"secret": "guess"})
        via_query = client.post("/init", params={"secret": "s3cret"})
        via_body = client.post("/init", json={"secret": "s3cret"})

    assert missing.status_code == 403
    assert wrong.status_code == 403
    assert via_query.status_code == 200
    assert via_body.status_code == 200
    assert "DEFAULT_ADMIN_PASSWORD is not set; default admin not created" in via_query.json()["results"]
    assert session.query(UserModel).count() == 0


def test_production_without_configured_secret_is_locked(session) -> None:
    with _client_with(environment="production") as client:
        response = client.post("/init", params={"secret": ""})

    assert response.status_code == 403
