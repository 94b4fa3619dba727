"""Capability checks guarding privileged entry points."""

from __future__ import annotations

from app.config import Settings
from app.domain.entities import User
from app.domain.exceptions import Unauthorized
from app.infrastructure.security import secrets_match


def ensure_admin(user: User) -> User:
    """Reject callers that are not approved administrators."""

    if not (user.is_admin() and user.is_approved()):
        raise Unauthorized("Administrator privileges are required")
    return user


def ensure_init_capability(settings: Settings, provided_secret: str | None) -> None:
    """Allow database initialisation outside production or with ``INIT_SECRET``."""

    if not settings.is_production():
        return
    if not secrets_match(provided_secret, settings.init_secret):
        raise Unauthorized(
            "Unauthorized. Provide ?secret=YOUR_INIT_SECRET or set INIT_SECRET env var."
        )


__all__ = ["ensure_admin", "ensure_init_capability"]
