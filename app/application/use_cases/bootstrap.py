"""Use case that prepares a fresh database."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.config import Settings
from app.domain.entities import USER_ROLE_ADMIN, USER_STATUS_APPROVED
from app.infrastructure.database import initialize_database
from app.infrastructure.repositories import UserRepository

from .users import create_user

logger = logging.getLogger(__name__)


def bootstrap_database(session: Session, settings: Settings) -> list[str]:
    """Create missing tables and seed the default administrator.

    Returns a human readable line per step. Running it again is harmless.
    """

    results: list[str] = []

    initialize_database(session.get_bind())
    results.append("Tables users, events and notifications created or exist")

    if UserRepository(session).get_by_email(settings.default_admin_email):
        results.append("Admin account already exists")
    elif not settings.default_admin_password:
        results.append("DEFAULT_ADMIN_PASSWORD is not set; default admin not created")
    else:
        create_user(
            session,
            name=settings.default_admin_name,
            email=settings.default_admin_email,
            password=settings.default_admin_password,
            role=USER_ROLE_ADMIN,
            status=USER_STATUS_APPROVED,
        )
        results.append(f"Default admin created ({settings.default_admin_email})")

    logger.info("Database bootstrap finished: %s", "; ".join(results))
    return results


__all__ = ["bootstrap_database"]
