"""
Event Endpoints - Public catalogue and organizer event management
"""
from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.event_service import EventService
from app.schemas import Event, EventCreate, EventUpdate, DataResponse, PaginationResponse
from app.schemas.common import page_meta
from app.api.deps import require_auth, require_min_role_level
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
event_service = EventService()


@router.get(
    "",
    status_code=status.HTTP_200_OK
)
async def list_events(
    search: str = Query("", description="Filter by title"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum records to return"),
    db: Session = Depends(get_db)
):
    """
    List public events (published, live and completed), soonest first

    **Authentication:**
    - None (public)
    """
    events, total = event_service.list_public(db, search, skip, limit)

    response = PaginationResponse[Event](
        success=True,
        message="Events retrieved successfully",
        data=events,
        **page_meta(total, skip, limit)
    )
    return encrypt_response_data(response, settings)


@router.get(
    "/mine",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def list_my_events(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    List events organized by the current user

    **Authentication:**
    - Requires role level >= 50 (Organizer or Admin; Admin sees all events)
    """
    events = event_service.list_mine(db, current_user)
    response = DataResponse[List[Event]](
        success=True,
        message="Events retrieved successfully",
        data=events
    )
    return encrypt_response_data(response, settings)


@router.get(
    "/{event_id}",
    status_code=status.HTTP_200_OK
)
async def get_event(
    event_id: str,
    db: Session = Depends(get_db)
):
    """Get a single event"""
    event = event_service.get(db, event_id)
    response = DataResponse[Event](
        success=True,
        message="Event retrieved successfully",
        data=event
    )
    return encrypt_response_data(response, settings)


@router.post(
    "",
    response_model=DataResponse[Event],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_min_role_level(50))]
)
async def create_event(
    payload: EventCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Create a new event owned by the current user

    **Authentication:**
    - Requires role level >= 50 (Organizer or Admin)

    **Validation:**
    - ev_end_at after ev_start_at
    - latitude in [-90, 90], longitude in [-180, 180], radius > 0
    """
    event = event_service.create(db, payload, current_user)
    return DataResponse(
        success=True,
        message="Event created successfully",
        data=event
    )


@router.put(
    "/{event_id}",
    response_model=DataResponse[Event],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def update_event(
    event_id: str,
    payload: EventUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Update an event (partial)

    **Authentication:**
    - Event organizer or Admin
    """
    event = event_service.update(db, event_id, payload, current_user)
    return DataResponse(
        success=True,
        message="Event updated successfully",
        data=event
    )


@router.delete(
    "/{event_id}",
    response_model=DataResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Delete an event with its registrations, attendance, certificates,
    feedback and announcements

    **Authentication:**
    - Event organizer or Admin
    """
    event_service.delete(db, event_id, current_user)
    return DataResponse(
        success=True,
        message="Event deleted successfully",
        data=None
    )
