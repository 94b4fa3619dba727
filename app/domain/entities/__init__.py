"""Domain entities exposed by the application."""

from .event import EVENT_STATUS_FINISHED, EVENT_STATUS_ONGOING, EVENT_STATUSES, Event
from .notification import NOTIFICATION_TYPE_EVENT, Notification
from .user import (
    USER_ROLE_ADMIN,
    USER_ROLE_MEMBER,
    USER_ROLE_STUDENT,
    USER_ROLES,
    USER_STATUS_APPROVED,
    USER_STATUS_PENDING,
    USER_STATUSES,
    User,
)

__all__ = [
    "Event",
    "EVENT_STATUS_ONGOING",
    "EVENT_STATUS_FINISHED",
    "EVENT_STATUSES",
    "Notification",
    "NOTIFICATION_TYPE_EVENT",
    "User",
    "USER_ROLE_STUDENT",
    "USER_ROLE_MEMBER",
    "USER_ROLE_ADMIN",
    "USER_ROLES",
    "USER_STATUS_PENDING",
    "USER_STATUS_APPROVED",
    "USER_STATUSES",
]
