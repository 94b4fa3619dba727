"""Read and mark-read operations over a single user's notifications."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.domain.exceptions import NotFound, StoreUnavailable
from app.infrastructure.repositories import NotificationRepository


@contextmanager
def _store_errors(session: Session) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        raise StoreUnavailable("The notification store is unavailable") from exc


def list_notifications(
    session: Session, user_id: int, *, limit: int | None = None
) -> Sequence[Notification]:
    """Return the user's notifications, most recent first."""

    with _store_errors(session):
        return NotificationRepository(session).list_for_user(user_id, limit=limit)


def count_unread(session: Session, user_id: int) -> int:
    with _store_errors(session):
        return NotificationRepository(session).count_unread(user_id)


def mark_as_read(session: Session, user_id: int, notification_id: int) -> Notification:
    """Mark one of the user's notifications as read.

    Ownership is checked before the update. A notification that belongs to someone
    else is reported exactly like a missing one.
    """

    repository = NotificationRepository(session)
    with _store_errors(session):
        notification = repository.get_for_user(notification_id, user_id=user_id)
        if notification is None:
            raise NotFound("Notification not found")
        if not notification.is_read:
            repository.mark_as_read(notification_id, user_id=user_id)
            notification.is_read = True
    return notification


def mark_all_as_read(session: Session, user_id: int) -> int:
    """Mark every unread notification of the user as read in one transaction."""

    with _store_errors(session):
        return NotificationRepository(session).mark_all_as_read(user_id)


__all__ = [
    "count_unread",
    "list_notifications",
    "mark_all_as_read",
    "mark_as_read",
]
