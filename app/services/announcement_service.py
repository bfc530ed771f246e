"""
Announcement Service - Organizer announcements with optional email fan-out
"""
from typing import List, Dict, Any
from datetime import datetime, timezone
from fastapi import BackgroundTasks
from sqlalchemy.orm import Session

from app.models.enums import RegistrationStatus
from app.repositories.announcement_repository import AnnouncementRepository
from app.repositories.event_repository import EventRepository
from app.repositories.registration_repository import RegistrationRepository
from app.services.access import ensure_can_manage_event
from app.services.notification_service import EmailNotifier
from app.schemas.announcement import Announcement, AnnouncementCreate
from atams.exceptions import NotFoundException
from atams.logging import get_logger

logger = get_logger(__name__)


class AnnouncementService:
    def __init__(self) -> None:
        self.announcement_repo = AnnouncementRepository()
        self.event_repo = EventRepository()
        self.registration_repo = RegistrationRepository()

    def create(
        self,
        db: Session,
        payload: AnnouncementCreate,
        actor: Dict[str, Any],
        background_tasks: BackgroundTasks,
        notifier: EmailNotifier
    ) -> Announcement:
        """
        Post an announcement; with send_to_registered every APPROVED
        registrant gets an email after the response is sent
        """
        event = self.event_repo.get_by_id(db, payload.event_id)
        if not event:
            raise NotFoundException("Event not found")
        ensure_can_manage_event(event, actor, "Not authorized to post announcements for this event")

        recipients = []
        if payload.send_to_registered:
            approved = self.registration_repo.get_event_registrations(
                db, event.ev_id, status=RegistrationStatus.APPROVED.value
            )
            recipients = [r.user.u_email for r in approved if r.user]

        announcement = self.announcement_repo.create(db, {
            "an_event_id": event.ev_id,
            "an_title": payload.title,
            "an_message": payload.message,
            "an_priority": payload.priority.value,
            "an_send_to_registered": payload.send_to_registered,
            "an_email_sent": payload.send_to_registered,
            "an_created_by": actor["user_id"],
            "an_created_at": datetime.now(timezone.utc)
        })

        for email in recipients:
            background_tasks.add_task(
                notifier.notify_announcement,
                email,
                event.ev_title,
                payload.title,
                payload.message
            )

        if recipients:
            logger.info(
                "Announcement emails scheduled",
                extra={'extra_data': {'announcement_id': announcement.an_id, 'recipients': len(recipients)}}
            )
        return Announcement.model_validate(announcement)

    def list_for_event(self, db: Session, event_id: str) -> List[Announcement]:
        announcements = self.announcement_repo.get_event_announcements(db, event_id)
        return [Announcement.model_validate(a) for a in announcements]

    def delete(self, db: Session, announcement_id: str, actor: Dict[str, Any]) -> None:
        announcement = self.announcement_repo.get_by_id(db, announcement_id)
        if not announcement:
            raise NotFoundException("Announcement not found")

        ensure_can_manage_event(announcement.event, actor, "Not authorized to delete this announcement")
        self.announcement_repo.delete(db, announcement_id)
