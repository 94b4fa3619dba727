"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

NOTIFICATION_TYPE_EVENT = "event"


@dataclass
class Notification:
    """Information message owned by exactly one user.

    ``related_id`` points at the entity that triggered the notification (an event
    id for reminders). ``is_read`` only ever moves from ``False`` to ``True``.
    """

    id: int | None
    user_id: int
    type: str
    title: str
    message: str | None
    related_id: int | None = None
    is_read: bool = False
    created_at: datetime | None = None


__all__ = ["Notification", "NOTIFICATION_TYPE_EVENT"]
