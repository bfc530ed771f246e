"""
Registration Endpoints - Event sign-up and organizer review
"""
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, Response, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.registration_service import RegistrationService
from app.services.notification_service import EmailNotifier
from app.schemas import (
    Registration,
    RegistrationCreate,
    RegistrationStatusUpdate,
    MyRegistration,
    EventRegistration,
    DataResponse
)
from app.api.deps import require_auth, require_min_role_level, get_notifier
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
registration_service = RegistrationService()


@router.post(
    "",
    response_model=DataResponse[Registration],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_min_role_level(1))]
)
async def register_for_event(
    payload: RegistrationCreate,
    response: Response,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth),
    notifier: EmailNotifier = Depends(get_notifier)
):
    """
    Register the current user for an event

    **Response:**
    - 201: New registration (PENDING)
    - 200: Cancelled registration reactivated

    **Errors:**
    - 400: Already registered, or event is full
    - 404: Event not found
    """
    registration, created = registration_service.register(
        db, payload.event_id, current_user["user_id"], background_tasks, notifier
    )
    if not created:
        response.status_code = status.HTTP_200_OK

    return DataResponse(
        success=True,
        message="Registered successfully" if created else "Registration reactivated",
        data=registration
    )


@router.get(
    "/me",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_my_registrations(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """Get current user's registrations, newest first"""
    registrations = registration_service.list_mine(db, current_user["user_id"])
    response = DataResponse[List[MyRegistration]](
        success=True,
        message="Registrations retrieved successfully",
        data=registrations
    )
    return encrypt_response_data(response, settings)


@router.patch(
    "/{registration_id}/cancel",
    response_model=DataResponse[Registration],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def cancel_registration(
    registration_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Cancel own registration

    **Errors:**
    - 403: Registration belongs to another user
    - 404: Registration not found
    """
    registration = registration_service.cancel(db, registration_id, current_user["user_id"])
    return DataResponse(
        success=True,
        message="Registration cancelled successfully",
        data=registration
    )


@router.patch(
    "/{registration_id}/status",
    response_model=DataResponse[Registration],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def update_registration_status(
    registration_id: str,
    payload: RegistrationStatusUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Approve, reject or waitlist a registration

    **Authentication:**
    - Event organizer or Admin
    """
    registration = registration_service.update_status(
        db, registration_id, payload.rg_status, current_user
    )
    return DataResponse(
        success=True,
        message="Registration status updated successfully",
        data=registration
    )


@router.get(
    "/events/{event_id}",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def get_event_registrations(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get registrations of an event

    **Authentication:**
    - Event organizer or Admin
    """
    registrations = registration_service.list_for_event(db, event_id, current_user)
    response = DataResponse[List[EventRegistration]](
        success=True,
        message="Registrations retrieved successfully",
        data=registrations
    )
    return encrypt_response_data(response, settings)
