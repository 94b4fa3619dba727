"""Public helpers for producing and reading notifications."""

from .inbox import count_unread, list_notifications, mark_all_as_read, mark_as_read
from .upcoming_events import (
    FailedNotification,
    NotificationBatchResult,
    build_event_reminder,
    notify_upcoming_events,
)

__all__ = [
    "FailedNotification",
    "NotificationBatchResult",
    "build_event_reminder",
    "notify_upcoming_events",
    "count_unread",
    "list_notifications",
    "mark_all_as_read",
    "mark_as_read",
]
