"""
Certificate Endpoints - Issuing, verification and PDF download
"""
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, Response, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.certificate_service import CertificateService
from app.services.notification_service import EmailNotifier
from app.schemas import (
    Certificate,
    MyCertificate,
    EventCertificate,
    IssueCertificateRequest,
    BulkIssueResult,
    CertificateVerification,
    DataResponse
)
from app.api.deps import require_auth, require_min_role_level, get_notifier
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
certificate_service = CertificateService()


@router.post(
    "/issue",
    response_model=DataResponse[Certificate],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_min_role_level(50))]
)
async def issue_certificate(
    request: IssueCertificateRequest,
    response: Response,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth),
    notifier: EmailNotifier = Depends(get_notifier)
):
    """
    Issue a certificate to one attendee

    **Authentication:**
    - Event organizer or Admin

    **Response:**
    - 201: Certificate issued, recipient is emailed
    - 200: Certificate already existed and is returned unchanged

    **Errors:**
    - 400 NOT_ELIGIBLE: User was not PRESENT or LATE
    - 404: Event or user not found
    """
    certificate, created = certificate_service.issue_single(
        db, request.event_id, request.user_id, current_user, background_tasks, notifier
    )
    if not created:
        response.status_code = status.HTTP_200_OK

    return DataResponse(
        success=True,
        message="Certificate issued successfully" if created else "Certificate already issued",
        data=certificate
    )


@router.post(
    "/events/{event_id}/bulk",
    response_model=DataResponse[BulkIssueResult],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def issue_bulk_certificates(
    event_id: str,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth),
    notifier: EmailNotifier = Depends(get_notifier)
):
    """
    Issue certificates to every PRESENT or LATE attendee of an event

    Failures for individual attendees are reported in the result
    (failed, errors) instead of failing the whole request.

    **Errors:**
    - 400 NO_ELIGIBLE_ATTENDEES: Nobody attended
    - 403: Not the event organizer
    - 404: Event not found
    """
    result = certificate_service.issue_bulk(db, event_id, current_user, background_tasks, notifier)
    return DataResponse(
        success=True,
        message=f"Issued {result.issued} certificates",
        data=result
    )


@router.get(
    "/me",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_my_certificates(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """Get current user's certificates"""
    certificates = certificate_service.list_my_certificates(db, current_user["user_id"])
    response = DataResponse[List[MyCertificate]](
        success=True,
        message="Certificates retrieved successfully",
        data=certificates
    )
    return encrypt_response_data(response, settings)


@router.get(
    "/events/{event_id}",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def get_event_certificates(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get certificates issued for an event

    **Authentication:**
    - Event organizer or Admin
    """
    certificates = certificate_service.list_event_certificates(db, event_id, current_user)
    response = DataResponse[List[EventCertificate]](
        success=True,
        message="Certificates retrieved successfully",
        data=certificates
    )
    return encrypt_response_data(response, settings)


@router.get(
    "/verify/{certificate_number}",
    status_code=status.HTTP_200_OK
)
async def verify_certificate(
    certificate_number: str,
    db: Session = Depends(get_db)
):
    """
    Verify a certificate by its number

    **Authentication:**
    - None (public)
    """
    verification = certificate_service.verify(db, certificate_number)
    response = DataResponse[CertificateVerification](
        success=True,
        message="Certificate verified" if verification.valid else "Certificate hash mismatch",
        data=verification
    )
    return encrypt_response_data(response, settings)


@router.get(
    "/{certificate_id}/download",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def download_certificate(
    certificate_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Download certificate as PDF

    **Authentication:**
    - Certificate owner, event organizer or Admin
    """
    filename, content = certificate_service.render_pdf(db, certificate_id, current_user)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
