"""Endpoints for reading notifications and triggering event reminders."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationBatchResult,
    count_unread,
    list_notifications,
    mark_all_as_read,
    mark_as_read,
    notify_upcoming_events,
)
from app.domain.entities import Notification, User
from app.domain.exceptions import NotFound, StoreUnavailable
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_user, require_admin
from app.interfaces.api.schemas import (
    FailedNotificationRead,
    MarkAllReadResponse,
    NotificationRead,
    NotifyUpcomingResponse,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _store_unavailable(exc: StoreUnavailable) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(exc),
    )


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        user_id=notification.user_id,
        type=notification.type,
        title=notification.title,
        message=notification.message,
        related_id=notification.related_id,
        is_read=notification.is_read,
        created_at=notification.created_at,
    )


def _batch_to_schema(result: NotificationBatchResult) -> NotifyUpcomingResponse:
    return NotifyUpcomingResponse(
        message="Members notified about upcoming events",
        events_considered=result.events_considered,
        recipients_considered=result.recipients_considered,
        created=result.created,
        skipped=result.skipped,
        failed=result.failed,
        emails_delivered=result.emails_delivered,
        failures=[
            FailedNotificationRead(
                user_id=failure.user_id,
                event_id=failure.event_id,
                reason=failure.reason,
            )
            for failure in result.failures
        ],
    )


@router.get("/", response_model=list[NotificationRead])
def get_notifications(
    limit: int | None = Query(default=None, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[NotificationRead]:
    """Return the authenticated user's notifications, most recent first."""

    try:
        notifications = list_notifications(db, current_user.id, limit=limit)
    except StoreUnavailable as exc:
        raise _store_unavailable(exc) from exc
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/unread-count", response_model=UnreadCountRead)
def get_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UnreadCountRead:
    try:
        return UnreadCountRead(count=count_unread(db, current_user.id))
    except StoreUnavailable as exc:
        raise _store_unavailable(exc) from exc


@router.put("/read-all", response_model=MarkAllReadResponse)
def read_all_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MarkAllReadResponse:
    """Mark every unread notification of the authenticated user as read."""

    try:
        updated = mark_all_as_read(db, current_user.id)
    except StoreUnavailable as exc:
        raise _store_unavailable(exc) from exc
    return MarkAllReadResponse(updated=updated)


@router.put("/{notification_id}/read", response_model=NotificationRead)
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationRead:
    """Mark a single notification owned by the authenticated user as read."""

    try:
        notification = mark_as_read(db, current_user.id, notification_id)
    except NotFound as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found",
        ) from exc
    except StoreUnavailable as exc:
        raise _store_unavailable(exc) from exc
    return _notification_to_schema(notification)


@router.post("/notify-upcoming", response_model=NotifyUpcomingResponse)
def trigger_upcoming_event_reminders(
    db: Session = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> NotifyUpcomingResponse:
    """Create reminders for upcoming events (administrators only)."""

    try:
        result = notify_upcoming_events(db)
    except StoreUnavailable as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to notify members",
        ) from exc
    return _batch_to_schema(result)
