"""
Attendance Endpoints - Self check-in, organizer marks and history
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.attendance_service import AttendanceService
from app.schemas import (
    Attendance,
    EventAttendance,
    MyAttendance,
    CheckInRequest,
    MarkAttendanceRequest,
    DataResponse
)
from app.api.deps import require_auth, require_min_role_level
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
attendance_service = AttendanceService()


@router.post(
    "/check-in",
    response_model=DataResponse[Attendance],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def check_in(
    request: CheckInRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Check the current user in to an event

    **Authentication:**
    - Requires valid user authentication (role level >= 1)

    **Process:**
    1. GEOFENCE events require latitude/longitude
    2. Distance to the event center must be within the radius
    3. Attendance is created or updated (one record per event and user)

    **Errors:**
    - 400 LOCATION_REQUIRED: Missing coordinates for a geofenced event
    - 400 OUT_OF_RANGE: Outside the geofence
    - 404: Event not found
    """
    attendance = attendance_service.record_self_check_in(
        db,
        request.event_id,
        current_user["user_id"],
        request.status,
        request.latitude,
        request.longitude
    )
    return DataResponse(
        success=True,
        message="Checked in successfully",
        data=attendance
    )


@router.post(
    "/mark",
    response_model=DataResponse[Attendance],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def mark_attendance(
    request: MarkAttendanceRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Mark attendance for a participant

    **Authentication:**
    - Event organizer or Admin
    """
    attendance = attendance_service.record_organizer_mark(
        db, request.event_id, request.user_id, request.status, current_user
    )
    return DataResponse(
        success=True,
        message="Attendance marked successfully",
        data=attendance
    )


@router.get(
    "/events/{event_id}",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def get_event_attendance(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get attendance sheet of an event

    **Authentication:**
    - Event organizer or Admin
    """
    rows = attendance_service.list_event_attendance(db, event_id, current_user)
    response = DataResponse[List[EventAttendance]](
        success=True,
        message="Attendance retrieved successfully",
        data=rows
    )
    return encrypt_response_data(response, settings)


@router.get(
    "/me",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_my_attendance(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """Get current user's attendance history"""
    rows = attendance_service.list_my_attendance(db, current_user["user_id"])
    response = DataResponse[List[MyAttendance]](
        success=True,
        message="Attendance retrieved successfully",
        data=rows
    )
    return encrypt_response_data(response, settings)
