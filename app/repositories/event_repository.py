"""
Event Repository - Data access layer for events
"""
from typing import Optional, List, Sequence
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from app.models.event import Event


class EventRepository(BaseRepository[Event]):
    def __init__(self):
        super().__init__(Event)

    def get_by_id(self, db: Session, event_id: str) -> Optional[Event]:
        """Get event by ID using ORM"""
        return db.query(Event).filter(Event.ev_id == event_id).first()

    def _visible_query(self, db: Session, states: Sequence[str], search: str = ""):
        query = db.query(Event).filter(Event.ev_state.in_(list(states)))
        if search:
            query = query.filter(Event.ev_title.ilike(f"%{search}%"))
        return query

    def get_events_by_state(
        self,
        db: Session,
        states: Sequence[str],
        search: str = "",
        skip: int = 0,
        limit: int = 100
    ) -> List[Event]:
        """Get events in the given states, soonest first"""
        return (
            self._visible_query(db, states, search)
            .order_by(Event.ev_start_at.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def count_events_by_state(self, db: Session, states: Sequence[str], search: str = "") -> int:
        return self._visible_query(db, states, search).count()

    def get_by_organizer(self, db: Session, organizer_id: Optional[str] = None) -> List[Event]:
        """Get organizer's events (all events when organizer_id is None)"""
        query = db.query(Event)
        if organizer_id:
            query = query.filter(Event.ev_organizer_id == organizer_id)
        return query.order_by(Event.ev_start_at.desc()).all()

    def count_by_organizer(self, db: Session, organizer_id: str, states: Optional[Sequence[str]] = None) -> int:
        query = db.query(Event).filter(Event.ev_organizer_id == organizer_id)
        if states:
            query = query.filter(Event.ev_state.in_(list(states)))
        return query.count()

    def delete_event(self, db: Session, event: Event) -> None:
        """Delete event together with its child rows"""
        db.delete(event)
        db.commit()
