"""
Event Service - Event catalogue and organizer event management
"""
from typing import List, Optional, Dict, Any, Tuple
from datetime import datetime, timezone
from sqlalchemy.orm import Session

from app.models.enums import PUBLIC_EVENT_STATES, UserRole, enum_values
from app.repositories.event_repository import EventRepository
from app.services.access import is_admin, ensure_can_manage_event
from app.schemas.event import Event, EventCreate, EventUpdate
from atams.exceptions import NotFoundException, BadRequestException, ForbiddenException
from atams.logging import get_logger

logger = get_logger(__name__)


def _as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; treat them as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class EventService:
    def __init__(self) -> None:
        self.event_repo = EventRepository()

    def list_public(
        self,
        db: Session,
        search: str = "",
        skip: int = 0,
        limit: int = 100
    ) -> Tuple[List[Event], int]:
        """Published, live and completed events with total count"""
        states = [s.value for s in PUBLIC_EVENT_STATES]
        events = self.event_repo.get_events_by_state(db, states, search, skip, limit)
        total = self.event_repo.count_events_by_state(db, states, search)
        return [Event.model_validate(e) for e in events], total

    def list_mine(self, db: Session, actor: Dict[str, Any]) -> List[Event]:
        """Organizer's own events (admin sees every event)"""
        organizer_id = None if is_admin(actor) else actor["user_id"]
        events = self.event_repo.get_by_organizer(db, organizer_id)
        return [Event.model_validate(e) for e in events]

    def get(self, db: Session, event_id: str) -> Event:
        event = self.event_repo.get_by_id(db, event_id)
        if not event:
            raise NotFoundException("Event not found")
        return Event.model_validate(event)

    def create(self, db: Session, payload: EventCreate, actor: Dict[str, Any]) -> Event:
        """
        Create an event owned by the actor

        Raises:
            ForbiddenException: If actor is a student
        """
        if actor.get("role") not in (UserRole.ORGANIZER.value, UserRole.ADMIN.value):
            raise ForbiddenException("Only organizers can create events")

        event_data = enum_values(payload.model_dump())
        event_data["ev_organizer_id"] = actor["user_id"]
        event = self.event_repo.create(db, event_data)

        logger.info(
            "Event created",
            extra={'extra_data': {'event_id': event.ev_id, 'organizer_id': actor["user_id"]}}
        )
        return Event.model_validate(event)

    def update(self, db: Session, event_id: str, payload: EventUpdate, actor: Dict[str, Any]) -> Event:
        """Partial update; the schedule is re-validated on the merged values"""
        event = self.event_repo.get_by_id(db, event_id)
        if not event:
            raise NotFoundException("Event not found")
        ensure_can_manage_event(event, actor, "Not authorized to update this event")

        update_data = enum_values(payload.model_dump(exclude_unset=True))

        start_at: Optional[datetime] = update_data.get("ev_start_at") or event.ev_start_at
        end_at: Optional[datetime] = update_data.get("ev_end_at") or event.ev_end_at
        if _as_utc(end_at) <= _as_utc(start_at):
            raise BadRequestException("ev_end_at must be after ev_start_at")

        event = self.event_repo.update(db, event, update_data)
        return Event.model_validate(event)

    def delete(self, db: Session, event_id: str, actor: Dict[str, Any]) -> None:
        """Delete event with its registrations, attendance, certificates, feedback and announcements"""
        event = self.event_repo.get_by_id(db, event_id)
        if not event:
            raise NotFoundException("Event not found")
        ensure_can_manage_event(event, actor, "Not authorized to delete this event")

        self.event_repo.delete_event(db, event)
        logger.info(
            "Event deleted",
            extra={'extra_data': {'event_id': event_id, 'deleted_by': actor.get("user_id")}}
        )
