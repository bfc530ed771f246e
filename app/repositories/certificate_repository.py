"""
Certificate Repository - Data access layer for issued certificates
"""
from typing import Optional, List, Dict, Any, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from atams.db import BaseRepository
from app.models.certificate import Certificate
from app.models.event import Event


class CertificateRepository(BaseRepository[Certificate]):
    def __init__(self):
        super().__init__(Certificate)

    def get_by_id(self, db: Session, certificate_id: str) -> Optional[Certificate]:
        return (
            db.query(Certificate)
            .options(joinedload(Certificate.event))
            .filter(Certificate.ce_id == certificate_id)
            .first()
        )

    def get_by_event_and_user(self, db: Session, event_id: str, user_id: str) -> Optional[Certificate]:
        """Get certificate for (event, user) using ORM"""
        return db.query(Certificate).filter(
            Certificate.ce_event_id == event_id,
            Certificate.ce_user_id == user_id
        ).first()

    def get_by_number(self, db: Session, certificate_number: str) -> Optional[Certificate]:
        return (
            db.query(Certificate)
            .options(joinedload(Certificate.event))
            .filter(Certificate.ce_certificate_number == certificate_number)
            .first()
        )

    def create_certificate(self, db: Session, data: Dict[str, Any]) -> Tuple[Optional[Certificate], bool]:
        """
        Insert a certificate, relying on the (event, user) unique constraint.

        Returns (certificate, True) when inserted, (existing, False) when a
        certificate for the same (event, user) already exists, and
        (None, False) when the insert failed on another constraint
        (certificate number collision).
        """
        try:
            db_cert = Certificate(**data)
            db.add(db_cert)
            db.commit()
            db.refresh(db_cert)
            return db_cert, True
        except IntegrityError:
            # Another request created it first, or the number collided
            db.rollback()
            existing = self.get_by_event_and_user(db, data["ce_event_id"], data["ce_user_id"])
            return existing, False

    def get_user_certificates(self, db: Session, user_id: str) -> List[Certificate]:
        return (
            db.query(Certificate)
            .options(joinedload(Certificate.event))
            .filter(Certificate.ce_user_id == user_id)
            .order_by(Certificate.ce_issued_at.desc())
            .all()
        )

    def get_event_certificates(self, db: Session, event_id: str) -> List[Certificate]:
        return (
            db.query(Certificate)
            .filter(Certificate.ce_event_id == event_id)
            .order_by(Certificate.ce_issued_at.asc())
            .all()
        )

    def count_for_event(self, db: Session, event_id: str) -> int:
        query = "SELECT COUNT(*) FROM certificates WHERE ce_event_id = :event_id"
        return self.execute_raw_sql_scalar(db, query, {"event_id": event_id})

    def count_for_organizer(self, db: Session, organizer_id: str) -> int:
        return (
            db.query(Certificate)
            .join(Event, Event.ev_id == Certificate.ce_event_id)
            .filter(Event.ev_organizer_id == organizer_id)
            .count()
        )
