"""
Announcement Endpoints
"""
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.announcement_service import AnnouncementService
from app.services.notification_service import EmailNotifier
from app.schemas import Announcement, AnnouncementCreate, DataResponse
from app.api.deps import require_auth, require_min_role_level, get_notifier
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
announcement_service = AnnouncementService()


@router.post(
    "",
    response_model=DataResponse[Announcement],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_min_role_level(50))]
)
async def create_announcement(
    payload: AnnouncementCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth),
    notifier: EmailNotifier = Depends(get_notifier)
):
    """
    Post an announcement for an event

    **Authentication:**
    - Event organizer or Admin

    With send_to_registered, every APPROVED registrant is emailed.
    """
    announcement = announcement_service.create(db, payload, current_user, background_tasks, notifier)
    return DataResponse(
        success=True,
        message="Announcement created successfully",
        data=announcement
    )


@router.get(
    "/events/{event_id}",
    status_code=status.HTTP_200_OK
)
async def get_event_announcements(
    event_id: str,
    db: Session = Depends(get_db)
):
    """Get announcements of an event, newest first (public)"""
    announcements = announcement_service.list_for_event(db, event_id)
    response = DataResponse[List[Announcement]](
        success=True,
        message="Announcements retrieved successfully",
        data=announcements
    )
    return encrypt_response_data(response, settings)


@router.delete(
    "/{announcement_id}",
    response_model=DataResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def delete_announcement(
    announcement_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Delete an announcement

    **Authentication:**
    - Event organizer or Admin
    """
    announcement_service.delete(db, announcement_id, current_user)
    return DataResponse(
        success=True,
        message="Announcement deleted successfully",
        data=None
    )
