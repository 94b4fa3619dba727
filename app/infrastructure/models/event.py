"""SQLAlchemy model for the events table."""

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Integer, String, Text, Time, func

from app.domain.entities import EVENT_STATUS_ONGOING, EVENT_STATUSES
from app.infrastructure.database import Base

_STATUS_VALUES = ", ".join(f"'{status}'" for status in EVENT_STATUSES)


class EventModel(Base):
    """Database representation of an organised event."""

    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint(f"status IN ({_STATUS_VALUES})", name="ck_events_status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    event_name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    event_date = Column(Date, nullable=True, index=True)
    event_time = Column(Time, nullable=True)
    location = Column(String(150), nullable=True)
    status = Column(
        String(20),
        nullable=False,
        default=EVENT_STATUS_ONGOING,
        server_default=EVENT_STATUS_ONGOING,
    )
    created_by = Column(String(100), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["EventModel"]
