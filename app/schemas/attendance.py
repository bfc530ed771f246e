"""
Attendance Schemas for check-in and organizer marks
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.enums import AttendanceStatus, AttendanceMethod
from app.schemas.common import fix_pg_timezone
from app.schemas.event import EventBrief
from app.schemas.user import UserSummary


class AttendanceInDB(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    at_id: str
    at_event_id: str
    at_user_id: str
    at_status: AttendanceStatus
    at_check_in_time: datetime
    at_check_in_method: AttendanceMethod
    at_latitude: Optional[float] = None
    at_longitude: Optional[float] = None
    at_created_at: Optional[datetime] = None
    at_updated_at: Optional[datetime] = None

    @field_validator('at_check_in_time', 'at_created_at', 'at_updated_at', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        """Fix datetime timezone format from PostgreSQL"""
        return fix_pg_timezone(v)


class Attendance(AttendanceInDB):
    pass


class EventAttendance(AttendanceInDB):
    user: UserSummary


class MyAttendance(AttendanceInDB):
    event: EventBrief


# Request schemas for API endpoints
class CheckInRequest(BaseModel):
    """Self check-in by the current user"""
    event_id: str = Field(..., min_length=1)
    status: Optional[AttendanceStatus] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class MarkAttendanceRequest(BaseModel):
    """Attendance marked by an organizer or admin"""
    event_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    status: AttendanceStatus = AttendanceStatus.PRESENT
