"""
Analytics Service - Dashboard statistics
"""
from typing import Dict, Any
from sqlalchemy.orm import Session

from app.models.enums import ACTIVE_EVENT_STATES, UserRole
from app.repositories.attendance_repository import AttendanceRepository
from app.repositories.certificate_repository import CertificateRepository
from app.repositories.event_repository import EventRepository
from app.repositories.registration_repository import RegistrationRepository
from app.repositories.user_repository import UserRepository
from app.services.access import is_admin, ensure_can_manage_event
from app.schemas.analytics import OrganizerStats, EventStats, AttendanceBucket, AdminStats
from atams.exceptions import NotFoundException, ForbiddenException


class AnalyticsService:
    def __init__(self) -> None:
        self.user_repo = UserRepository()
        self.event_repo = EventRepository()
        self.registration_repo = RegistrationRepository()
        self.attendance_repo = AttendanceRepository()
        self.certificate_repo = CertificateRepository()

    def organizer_stats(self, db: Session, actor: Dict[str, Any]) -> OrganizerStats:
        if actor.get("role") != UserRole.ORGANIZER.value:
            raise ForbiddenException("Only organizers have organizer statistics")

        organizer_id = actor["user_id"]
        return OrganizerStats(
            total_events=self.event_repo.count_by_organizer(db, organizer_id),
            active_events=self.event_repo.count_by_organizer(
                db, organizer_id, [s.value for s in ACTIVE_EVENT_STATES]
            ),
            total_registrations=self.registration_repo.count_for_organizer(db, organizer_id),
            total_certificates=self.certificate_repo.count_for_organizer(db, organizer_id)
        )

    def event_stats(self, db: Session, event_id: str, actor: Dict[str, Any]) -> EventStats:
        """Registrations, attendance breakdown by status and certificates of one event"""
        event = self.event_repo.get_by_id(db, event_id)
        if not event:
            raise NotFoundException("Event not found")
        ensure_can_manage_event(event, actor, "Not authorized to view statistics for this event")

        breakdown = self.attendance_repo.count_by_status(db, event_id)
        return EventStats(
            event_id=event.ev_id,
            event_name=event.ev_title,
            total_registrations=self.registration_repo.count_for_event(db, event_id),
            total_certificates=self.certificate_repo.count_for_event(db, event_id),
            attendance_data=[
                AttendanceBucket(name=status, value=count)
                for status, count in sorted(breakdown.items())
            ]
        )

    def admin_stats(self, db: Session, actor: Dict[str, Any]) -> AdminStats:
        if not is_admin(actor):
            raise ForbiddenException("Admin access required")

        return AdminStats(
            total_users=self.user_repo.count(db),
            total_events=self.event_repo.count(db),
            total_registrations=self.registration_repo.count(db),
            total_certificates=self.certificate_repo.count(db)
        )
