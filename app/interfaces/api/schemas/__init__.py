from .auth import InitRequest, InitResponse, Token
from .notification import (
    FailedNotificationRead,
    MarkAllReadResponse,
    NotificationRead,
    NotifyUpcomingResponse,
    UnreadCountRead,
)

__all__ = [
    "FailedNotificationRead",
    "InitRequest",
    "InitResponse",
    "MarkAllReadResponse",
    "NotificationRead",
    "NotifyUpcomingResponse",
    "Token",
    "UnreadCountRead",
]
