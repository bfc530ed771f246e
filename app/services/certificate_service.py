"""
Certificate Service - Issuing, verifying and rendering certificates

Issuing is idempotent per (event, user): a second request returns the
certificate that already exists instead of creating another one.
"""
import hashlib
import uuid
from typing import List, Dict, Any, Tuple
from datetime import datetime, timezone
from fastapi import BackgroundTasks
from sqlalchemy.orm import Session

from app.models.enums import ATTENDED_STATUSES, CertificateStatus
from app.repositories.attendance_repository import AttendanceRepository
from app.repositories.certificate_repository import CertificateRepository
from app.repositories.event_repository import EventRepository
from app.repositories.user_repository import UserRepository
from app.services.access import can_manage_event, ensure_can_manage_event
from app.services.notification_service import EmailNotifier
from app.services.pdf_service import render_certificate_pdf
from app.schemas.certificate import (
    Certificate,
    MyCertificate,
    EventCertificate,
    BulkIssueResult,
    BulkIssueError,
    CertificateVerification
)
from app.core.config import settings
from app.core.exceptions import NotEligibleException, NoEligibleAttendeesException
from atams.exceptions import AppException, ConflictException, ForbiddenException, NotFoundException
from atams.logging import get_logger

logger = get_logger(__name__)

# Attempts at finding an unused certificate number
MAX_NUMBER_ATTEMPTS = 3


def generate_certificate_number() -> str:
    """First 8 hex characters of a random UUID, upper-cased"""
    return str(uuid.uuid4()).split("-")[0].upper()


def compute_verification_hash(certificate_number: str, user_id: str, event_id: str) -> str:
    """SHA-256 hex digest of number + user_id + event_id"""
    payload = f"{certificate_number}{user_id}{event_id}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class CertificateService:
    def __init__(self) -> None:
        self.certificate_repo = CertificateRepository()
        self.attendance_repo = AttendanceRepository()
        self.event_repo = EventRepository()
        self.user_repo = UserRepository()

    def _get_managed_event(self, db: Session, event_id: str, actor: Dict[str, Any]):
        event = self.event_repo.get_by_id(db, event_id)
        if not event:
            raise NotFoundException("Event not found")
        ensure_can_manage_event(event, actor, "Not authorized to issue certificates for this event")
        return event

    def _issue_for_user(
        self,
        db: Session,
        event,
        user_id: str,
        background_tasks: BackgroundTasks,
        notifier: EmailNotifier
    ) -> Tuple[Certificate, bool]:
        """
        Create the certificate for an eligible attendee or return the existing one

        Returns:
            (certificate, created)
        """
        user = self.user_repo.get(db, user_id)
        if not user:
            raise NotFoundException("User not found")

        existing = self.certificate_repo.get_by_event_and_user(db, event.ev_id, user_id)
        if existing:
            return Certificate.model_validate(existing), False

        event_id = event.ev_id
        event_title = event.ev_title
        recipient_email = user.u_email
        recipient_first_name = user.u_first_name

        for _ in range(MAX_NUMBER_ATTEMPTS):
            number = generate_certificate_number()
            cert_data = {
                "ce_event_id": event_id,
                "ce_user_id": user_id,
                "ce_certificate_number": number,
                "ce_verification_hash": compute_verification_hash(number, user_id, event_id),
                "ce_title": f"Certificate of Participation - {event_title}",
                "ce_status": CertificateStatus.ISSUED.value,
                "ce_issued_at": datetime.now(timezone.utc)
            }
            cert, created = self.certificate_repo.create_certificate(db, cert_data)
            if cert is None:
                # Number collision, retry with a fresh one
                continue

            if created:
                logger.info(
                    "Certificate issued",
                    extra={'extra_data': {
                        'event_id': event_id,
                        'user_id': user_id,
                        'certificate_number': cert.ce_certificate_number
                    }}
                )
                background_tasks.add_task(
                    notifier.notify_certificate_issued,
                    recipient_email,
                    recipient_first_name,
                    event_title,
                    cert.ce_certificate_number
                )
            return Certificate.model_validate(cert), created

        raise ConflictException("Could not allocate a unique certificate number")

    def issue_single(
        self,
        db: Session,
        event_id: str,
        user_id: str,
        actor: Dict[str, Any],
        background_tasks: BackgroundTasks,
        notifier: EmailNotifier
    ) -> Tuple[Certificate, bool]:
        """
        Issue a certificate to one attendee

        Raises:
            NotFoundException: If event or user not found
            ForbiddenException: If actor is not the event organizer or an admin
            NotEligibleException: If the user was not PRESENT or LATE
        """
        event = self._get_managed_event(db, event_id, actor)

        attendance = self.attendance_repo.get_by_event_and_user(db, event_id, user_id)
        if not attendance or attendance.at_status not in [s.value for s in ATTENDED_STATUSES]:
            raise NotEligibleException()

        return self._issue_for_user(db, event, user_id, background_tasks, notifier)

    def issue_bulk(
        self,
        db: Session,
        event_id: str,
        actor: Dict[str, Any],
        background_tasks: BackgroundTasks,
        notifier: EmailNotifier
    ) -> BulkIssueResult:
        """
        Issue certificates to every eligible attendee of an event

        A failure for one attendee is rolled back and reported in the result;
        the remaining attendees are still processed.
        """
        event = self._get_managed_event(db, event_id, actor)

        eligible = self.attendance_repo.get_event_attendance(
            db, event_id, statuses=[s.value for s in ATTENDED_STATUSES]
        )
        if not eligible:
            raise NoEligibleAttendeesException()

        user_ids = [row.at_user_id for row in eligible]
        result = BulkIssueResult(event_id=event_id, total_eligible=len(user_ids))

        for user_id in user_ids:
            try:
                _, created = self._issue_for_user(db, event, user_id, background_tasks, notifier)
            except Exception as e:
                db.rollback()
                message = e.message if isinstance(e, AppException) else str(e)
                logger.error(
                    f"Certificate issue failed: {message}",
                    exc_info=True,
                    extra={'extra_data': {'event_id': event_id, 'user_id': user_id}}
                )
                result.failed += 1
                result.errors.append(BulkIssueError(user_id=user_id, message=message))
                continue

            if created:
                result.issued += 1
            else:
                result.already_issued += 1

        logger.info(
            "Bulk certificate issue finished",
            extra={'extra_data': {
                'event_id': event_id,
                'total_eligible': result.total_eligible,
                'issued': result.issued,
                'already_issued': result.already_issued,
                'failed': result.failed
            }}
        )
        return result

    def verify(self, db: Session, certificate_number: str) -> CertificateVerification:
        """Public lookup; valid when the stored hash matches the recomputed one"""
        cert = self.certificate_repo.get_by_number(db, certificate_number.strip().upper())
        if not cert:
            raise NotFoundException("Certificate not found")

        expected = compute_verification_hash(cert.ce_certificate_number, cert.ce_user_id, cert.ce_event_id)
        return CertificateVerification(
            valid=cert.ce_verification_hash == expected,
            certificate_number=cert.ce_certificate_number,
            recipient_name=cert.user.full_name if cert.user else None,
            event_title=cert.event.ev_title if cert.event else None,
            status=cert.ce_status,
            issued_at=cert.ce_issued_at
        )

    def list_my_certificates(self, db: Session, user_id: str) -> List[MyCertificate]:
        certs = self.certificate_repo.get_user_certificates(db, user_id)
        return [MyCertificate.model_validate(c) for c in certs]

    def list_event_certificates(self, db: Session, event_id: str, actor: Dict[str, Any]) -> List[EventCertificate]:
        event = self.event_repo.get_by_id(db, event_id)
        if not event:
            raise NotFoundException("Event not found")
        ensure_can_manage_event(event, actor, "Not authorized to view certificates for this event")

        certs = self.certificate_repo.get_event_certificates(db, event_id)
        return [EventCertificate.model_validate(c) for c in certs]

    def render_pdf(self, db: Session, certificate_id: str, actor: Dict[str, Any]) -> Tuple[str, bytes]:
        """
        Render certificate as PDF

        Returns:
            (filename, pdf bytes)
        """
        cert = self.certificate_repo.get_by_id(db, certificate_id)
        if not cert:
            raise NotFoundException("Certificate not found")

        if cert.ce_user_id != actor.get("user_id") and not can_manage_event(cert.event, actor):
            raise ForbiddenException("Not authorized to download this certificate")

        event = cert.event
        content = render_certificate_pdf(
            recipient_name=cert.user.full_name,
            event_title=event.ev_title,
            event_date=event.ev_start_at,
            organizer_name=event.organizer.full_name if event.organizer else "",
            certificate_number=cert.ce_certificate_number,
            verification_hash=cert.ce_verification_hash,
            issuer_name=settings.CERTIFICATE_ISSUER_NAME
        )
        return f"certificate-{cert.ce_certificate_number}.pdf", content
