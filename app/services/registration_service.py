"""
Registration Service - Event sign-up, cancellation and organizer review
"""
from typing import List, Dict, Any, Tuple
from datetime import datetime, timezone
from fastapi import BackgroundTasks
from sqlalchemy.orm import Session

from app.models.enums import RegistrationStatus
from app.repositories.event_repository import EventRepository
from app.repositories.registration_repository import RegistrationRepository
from app.repositories.user_repository import UserRepository
from app.services.access import ensure_can_manage_event
from app.services.notification_service import EmailNotifier
from app.schemas.registration import Registration, MyRegistration, EventRegistration
from atams.exceptions import NotFoundException, BadRequestException, ForbiddenException


class RegistrationService:
    def __init__(self) -> None:
        self.registration_repo = RegistrationRepository()
        self.event_repo = EventRepository()
        self.user_repo = UserRepository()

    def register(
        self,
        db: Session,
        event_id: str,
        user_id: str,
        background_tasks: BackgroundTasks,
        notifier: EmailNotifier
    ) -> Tuple[Registration, bool]:
        """
        Register user for an event

        Returns:
            (registration, created): created is False when a cancelled
            registration was reactivated

        Raises:
            NotFoundException: If event not found
            BadRequestException: If already registered or event is full
        """
        event = self.event_repo.get_by_id(db, event_id)
        if not event:
            raise NotFoundException("Event not found")

        existing = self.registration_repo.get_by_event_and_user(db, event_id, user_id)
        if existing:
            if existing.rg_status != RegistrationStatus.CANCELLED.value:
                raise BadRequestException("Already registered for this event")

            registration = self.registration_repo.update(db, existing, {
                "rg_status": RegistrationStatus.PENDING.value,
                "rg_registered_at": datetime.now(timezone.utc)
            })
            created = False
        else:
            if event.ev_max_participants:
                taken = self.registration_repo.count_active_for_event(db, event_id)
                if taken >= event.ev_max_participants:
                    raise BadRequestException("Event is full")

            registration = self.registration_repo.create(db, {
                "rg_event_id": event_id,
                "rg_user_id": user_id,
                "rg_status": RegistrationStatus.PENDING.value,
                "rg_registered_at": datetime.now(timezone.utc)
            })
            created = True

        user = self.user_repo.get(db, user_id)
        if user:
            background_tasks.add_task(
                notifier.notify_registration_confirmed,
                user.u_email,
                user.u_first_name,
                event.ev_title
            )

        return Registration.model_validate(registration), created

    def list_mine(self, db: Session, user_id: str) -> List[MyRegistration]:
        registrations = self.registration_repo.get_user_registrations(db, user_id)
        return [MyRegistration.model_validate(r) for r in registrations]

    def cancel(self, db: Session, registration_id: str, user_id: str) -> Registration:
        """Cancel own registration"""
        registration = self.registration_repo.get_by_id(db, registration_id)
        if not registration:
            raise NotFoundException("Registration not found")
        if registration.rg_user_id != user_id:
            raise ForbiddenException("Not authorized to cancel this registration")

        registration = self.registration_repo.update(db, registration, {
            "rg_status": RegistrationStatus.CANCELLED.value
        })
        return Registration.model_validate(registration)

    def list_for_event(self, db: Session, event_id: str, actor: Dict[str, Any]) -> List[EventRegistration]:
        event = self.event_repo.get_by_id(db, event_id)
        if not event:
            raise NotFoundException("Event not found")
        ensure_can_manage_event(event, actor, "Not authorized to view registrations for this event")

        registrations = self.registration_repo.get_event_registrations(db, event_id)
        return [EventRegistration.model_validate(r) for r in registrations]

    def update_status(
        self,
        db: Session,
        registration_id: str,
        status: str,
        actor: Dict[str, Any]
    ) -> Registration:
        """Approve, reject or waitlist a registration"""
        registration = self.registration_repo.get_by_id(db, registration_id)
        if not registration:
            raise NotFoundException("Registration not found")

        event = self.event_repo.get_by_id(db, registration.rg_event_id)
        ensure_can_manage_event(event, actor, "Not authorized to review registrations for this event")

        registration = self.registration_repo.update(db, registration, {
            "rg_status": RegistrationStatus(status).value
        })
        return Registration.model_validate(registration)
