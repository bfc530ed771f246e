"""
Analytics Endpoints - Dashboard statistics
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.enums import UserRole
from app.services.analytics_service import AnalyticsService
from app.schemas import OrganizerStats, EventStats, AdminStats, DataResponse
from app.api.deps import require_auth, require_roles, require_min_role_level
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
analytics_service = AnalyticsService()


@router.get(
    "/organizer",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_roles(UserRole.ORGANIZER))]
)
async def get_organizer_stats(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Statistics over the current organizer's events

    **Authentication:**
    - Organizer only
    """
    stats = analytics_service.organizer_stats(db, current_user)
    response = DataResponse[OrganizerStats](
        success=True,
        message="Statistics retrieved successfully",
        data=stats
    )
    return encrypt_response_data(response, settings)


@router.get(
    "/admin",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_roles(UserRole.ADMIN))]
)
async def get_admin_stats(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Platform wide totals

    **Authentication:**
    - Admin only
    """
    stats = analytics_service.admin_stats(db, current_user)
    response = DataResponse[AdminStats](
        success=True,
        message="Statistics retrieved successfully",
        data=stats
    )
    return encrypt_response_data(response, settings)


@router.get(
    "/events/{event_id}",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def get_event_stats(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Registrations, attendance breakdown and certificates of an event

    **Authentication:**
    - Event organizer or Admin
    """
    stats = analytics_service.event_stats(db, event_id, current_user)
    response = DataResponse[EventStats](
        success=True,
        message="Statistics retrieved successfully",
        data=stats
    )
    return encrypt_response_data(response, settings)
