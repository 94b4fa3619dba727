"""Persistence helpers for event entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sqlalchemy.orm import Session

from app.domain.entities import EVENT_STATUS_ONGOING, Event
from app.infrastructure.models import EventModel


class EventRepository:
    """Persistence access to :class:`Event` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, event: Event) -> Event:
        model = EventModel(
            event_name=event.name,
            description=event.description,
            event_date=event.event_date,
            event_time=event.event_time,
            location=event.location,
            status=event.status,
            created_by=event.created_by,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_upcoming(self, start: date, end: date) -> Sequence[Event]:
        """Return ongoing events dated between ``start`` and ``end`` inclusive."""

        query = (
            self.session.query(EventModel)
            .filter(EventModel.status == EVENT_STATUS_ONGOING)
            .filter(EventModel.event_date.isnot(None))
            .filter(EventModel.event_date >= start)
            .filter(EventModel.event_date <= end)
            .order_by(
                EventModel.event_date.asc(),
                EventModel.event_time.asc(),
                EventModel.id.asc(),
            )
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: EventModel) -> Event:
        return Event(
            id=model.id,
            name=model.event_name,
            description=model.description,
            event_date=model.event_date,
            event_time=model.event_time,
            location=model.location,
            status=model.status,
            created_by=model.created_by,
            created_at=model.created_at,
        )


__all__ = ["EventRepository"]
