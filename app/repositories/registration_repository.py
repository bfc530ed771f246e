"""
Registration Repository - Data access layer for event registrations
"""
from typing import Optional, List
from sqlalchemy.orm import Session, joinedload

from atams.db import BaseRepository
from app.models.event import Event
from app.models.registration import Registration


class RegistrationRepository(BaseRepository[Registration]):
    def __init__(self):
        super().__init__(Registration)

    def get_by_id(self, db: Session, registration_id: str) -> Optional[Registration]:
        return db.query(Registration).filter(Registration.rg_id == registration_id).first()

    def get_by_event_and_user(self, db: Session, event_id: str, user_id: str) -> Optional[Registration]:
        """Get registration for (event, user) using ORM"""
        return db.query(Registration).filter(
            Registration.rg_event_id == event_id,
            Registration.rg_user_id == user_id
        ).first()

    def get_user_registrations(self, db: Session, user_id: str) -> List[Registration]:
        return (
            db.query(Registration)
            .options(joinedload(Registration.event))
            .filter(Registration.rg_user_id == user_id)
            .order_by(Registration.rg_registered_at.desc())
            .all()
        )

    def get_event_registrations(self, db: Session, event_id: str, status: Optional[str] = None) -> List[Registration]:
        query = db.query(Registration).filter(Registration.rg_event_id == event_id)
        if status:
            query = query.filter(Registration.rg_status == status)
        return query.order_by(Registration.rg_registered_at.asc()).all()

    def count_active_for_event(self, db: Session, event_id: str) -> int:
        """Count non-cancelled registrations using native SQL"""
        query = """
            SELECT COUNT(*)
            FROM registrations
            WHERE rg_event_id = :event_id
            AND rg_status != 'CANCELLED'
        """
        return self.execute_raw_sql_scalar(db, query, {"event_id": event_id})

    def count_for_event(self, db: Session, event_id: str) -> int:
        query = "SELECT COUNT(*) FROM registrations WHERE rg_event_id = :event_id"
        return self.execute_raw_sql_scalar(db, query, {"event_id": event_id})

    def count_for_organizer(self, db: Session, organizer_id: str) -> int:
        return (
            db.query(Registration)
            .join(Event, Event.ev_id == Registration.rg_event_id)
            .filter(Event.ev_organizer_id == organizer_id)
            .count()
        )
