"""Domain entity representing an organised event."""

from dataclasses import dataclass
from datetime import date, datetime, time

EVENT_STATUS_ONGOING = "ongoing"
EVENT_STATUS_FINISHED = "finished"
EVENT_STATUSES = (EVENT_STATUS_ONGOING, EVENT_STATUS_FINISHED)


@dataclass
class Event:
    """Scheduled activity members can be reminded about."""

    id: int | None
    name: str
    event_date: date | None
    event_time: time | None = None
    location: str | None = None
    description: str | None = None
    status: str = EVENT_STATUS_ONGOING
    created_by: str | None = None
    created_at: datetime | None = None


__all__ = ["Event", "EVENT_STATUS_ONGOING", "EVENT_STATUS_FINISHED", "EVENT_STATUSES"]
