"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    user_id: int
    type: str
    title: str
    message: str | None = None
    related_id: int | None = None
    is_read: bool
    created_at: datetime


class UnreadCountRead(BaseModel):
    count: int = Field(..., ge=0)


class MarkAllReadResponse(BaseModel):
    """Number of notifications that switched to read."""

    updated: int = Field(..., ge=0)


class FailedNotificationRead(BaseModel):
    user_id: int
    event_id: int
    reason: str


class NotifyUpcomingResponse(BaseModel):
    """Summary returned after running the upcoming event reminders."""

    message: str
    events_considered: int
    recipients_considered: int
    created: int
    skipped: int
    failed: int
    emails_delivered: int
    failures: list[FailedNotificationRead] = Field(default_factory=list)


__all__ = [
    "FailedNotificationRead",
    "MarkAllReadResponse",
    "NotificationRead",
    "NotifyUpcomingResponse",
    "UnreadCountRead",
]
