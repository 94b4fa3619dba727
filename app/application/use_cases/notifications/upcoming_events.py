"""Create reminder notifications for events happening soon.

The batch runs in two phases. The read phase loads the upcoming events, the
eligible recipients and the reminders that already exist; any store error there
aborts the run with :class:`StoreUnavailable` before anything is written. The
write phase inserts one notification per missing (user, event) pair, committing
each row on its own. A row rejected by the ``(user_id, related_id, type)`` unique
constraint, where the reminder is then found in the store, means a concurrent run
got there first and is counted as skipped. Any other insert error, including
other integrity violations, is logged and collected while the batch moves on.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import NOTIFICATION_TYPE_EVENT, Event, Notification, User
from app.domain.exceptions import StoreUnavailable
from app.infrastructure.email import NotificationEmailPayload, send_notification_email
from app.infrastructure.repositories import (
    EventRepository,
    NotificationRepository,
    UserRepository,
)
from app.utils import now_in_app_timezone, upcoming_date_window

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FailedNotification:
    """A (user, event) pair whose reminder could not be stored."""

    user_id: int
    event_id: int
    reason: str


@dataclass
class NotificationBatchResult:
    """Summary of a reminder batch."""

    events_considered: int = 0
    recipients_considered: int = 0
    created: int = 0
    skipped: int = 0
    emails_delivered: int = 0
    failures: list[FailedNotification] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def partial(self) -> bool:
        """``True`` when some reminders could not be stored."""

        return bool(self.failures)


def build_event_reminder(event: Event, user: User) -> Notification:
    """Return the reminder notification ``user`` receives about ``event``."""

    when = event.event_date.strftime("%A, %d %B %Y") if event.event_date else "soon"
    if event.event_time is not None:
        when = f"{when} at {event.event_time.strftime('%H:%M')}"
    where = f" at {event.location}" if event.location else ""

    return Notification(
        id=None,
        user_id=user.id,
        type=NOTIFICATION_TYPE_EVENT,
        title=f"Upcoming event: {event.name}",
        message=(
            f"Reminder: '{event.name}' takes place on {when}{where}. "
            "Don't miss it!"
        ),
        related_id=event.id,
        is_read=False,
        created_at=now_in_app_timezone(),
    )


def _load_batch_inputs(
    session: Session,
    *,
    now: datetime | None,
    lookahead_days: int,
    recipient_roles: Sequence[str],
) -> tuple[Sequence[Event], Sequence[User], set[tuple[int, int]]]:
    start, end = upcoming_date_window(lookahead_days, now=now)
    try:
        events = EventRepository(session).list_upcoming(start, end)
        recipients = UserRepository(session).list_approved_by_roles(recipient_roles)
        notified = NotificationRepository(session).list_notified_pairs(
            (event.id for event in events), notification_type=NOTIFICATION_TYPE_EVENT
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Could not read upcoming events or recipients: %s", exc)
        raise StoreUnavailable("The notification store is unavailable") from exc

    logger.info(
        "Found %d upcoming event(s) between %s and %s for %d recipient(s)",
        len(events),
        start.isoformat(),
        end.isoformat(),
        len(recipients),
    )
    return events, recipients, notified


def _created_concurrently(repository: NotificationRepository, user: User, event: Event) -> bool:
    """Tell a lost insert race apart from any other integrity violation."""

    try:
        return repository.exists_for(
            user.id, event.id, notification_type=NOTIFICATION_TYPE_EVENT
        )
    except SQLAlchemyError:
        repository.session.rollback()
        logger.exception("Could not check reminder for user %s and event %s", user.id, event.id)
        return False


def _email_reminder(user: User, notification: Notification) -> bool:
    result = send_notification_email(
        user.email,
        NotificationEmailPayload(
            subject=notification.title,
            title=notification.title,
            message=notification.message or "",
        ),
    )
    return result.delivered


def notify_upcoming_events(
    session: Session,
    *,
    now: datetime | None = None,
    lookahead_days: int | None = None,
    recipient_roles: Sequence[str] | None = None,
    send_email: bool | None = None,
) -> NotificationBatchResult:
    """Notify every eligible user once about each upcoming event."""

    settings = get_settings()
    if lookahead_days is None:
        lookahead_days = settings.notification_lookahead_days
    if recipient_roles is None:
        recipient_roles = settings.notification_recipient_roles
    if send_email is None:
        send_email = settings.notification_email_enabled

    events, recipients, notified = _load_batch_inputs(
        session,
        now=now,
        lookahead_days=lookahead_days,
        recipient_roles=recipient_roles,
    )
    result = NotificationBatchResult(
        events_considered=len(events), recipients_considered=len(recipients)
    )
    repository = NotificationRepository(session)

    for event in events:
        for user in recipients:
            if (user.id, event.id) in notified:
                result.skipped += 1
                logger.debug("User %s already reminded about event %s", user.id, event.id)
                continue

            try:
                saved = repository.create(build_event_reminder(event, user))
            except IntegrityError as exc:
                session.rollback()
                if _created_concurrently(repository, user, event):
                    result.skipped += 1
                    notified.add((user.id, event.id))
                    logger.debug(
                        "Reminder for user %s and event %s was created concurrently",
                        user.id,
                        event.id,
                    )
                    continue
                logger.error(
                    "Reminder for user %s and event %s violated a constraint: %s",
                    user.id,
                    event.id,
                    exc,
                )
                result.failures.append(
                    FailedNotification(user_id=user.id, event_id=event.id, reason=str(exc))
                )
                continue
            except SQLAlchemyError as exc:
                session.rollback()
                logger.exception(
                    "Failed to store reminder for user %s and event %s", user.id, event.id
                )
                result.failures.append(
                    FailedNotification(user_id=user.id, event_id=event.id, reason=str(exc))
                )
                continue

            notified.add((user.id, event.id))
            result.created += 1
            if send_email and _email_reminder(user, saved):
                result.emails_delivered += 1

    logger.info(
        "Upcoming event reminders: %d created, %d skipped, %d failed",
        result.created,
        result.skipped,
        result.failed,
    )
    return result


__all__ = [
    "FailedNotification",
    "NotificationBatchResult",
    "build_event_reminder",
    "notify_upcoming_events",
]
