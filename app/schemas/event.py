"""
Event Schemas for request/response validation
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.models.enums import (
    EventType,
    EventCategory,
    EventState,
    AttendanceMethod,
)
from app.schemas.common import fix_pg_timezone


class EventBase(BaseModel):
    ev_title: str = Field(..., min_length=1, max_length=200)
    ev_description: str = ""
    ev_event_type: EventType = EventType.OTHER
    ev_category: EventCategory = EventCategory.ACADEMIC
    ev_start_at: datetime
    ev_end_at: datetime
    ev_venue: str = ""
    ev_is_online: bool = False
    ev_max_participants: Optional[int] = Field(None, ge=1)
    ev_attendance_method: AttendanceMethod = AttendanceMethod.MANUAL
    ev_latitude: Optional[float] = Field(None, ge=-90, le=90)
    ev_longitude: Optional[float] = Field(None, ge=-180, le=180)
    ev_geofence_radius: Optional[float] = Field(None, gt=0, description="Radius in meters")


class EventCreate(EventBase):
    ev_state: EventState = EventState.PUBLISHED

    @model_validator(mode='after')
    def check_schedule(self):
        if self.ev_end_at <= self.ev_start_at:
            raise ValueError("ev_end_at must be after ev_start_at")
        return self


class EventUpdate(BaseModel):
    ev_title: Optional[str] = Field(None, min_length=1, max_length=200)
    ev_description: Optional[str] = None
    ev_event_type: Optional[EventType] = None
    ev_category: Optional[EventCategory] = None
    ev_start_at: Optional[datetime] = None
    ev_end_at: Optional[datetime] = None
    ev_venue: Optional[str] = None
    ev_is_online: Optional[bool] = None
    ev_max_participants: Optional[int] = Field(None, ge=1)
    ev_state: Optional[EventState] = None
    ev_attendance_method: Optional[AttendanceMethod] = None
    ev_latitude: Optional[float] = Field(None, ge=-90, le=90)
    ev_longitude: Optional[float] = Field(None, ge=-180, le=180)
    ev_geofence_radius: Optional[float] = Field(None, gt=0)


class OrganizerInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    u_id: str
    u_first_name: str
    u_last_name: str


class EventInDB(EventBase):
    model_config = ConfigDict(from_attributes=True)

    ev_id: str
    ev_state: EventState
    ev_organizer_id: str
    ev_created_at: Optional[datetime] = None
    ev_updated_at: Optional[datetime] = None
    organizer: Optional[OrganizerInfo] = None

    @field_validator('ev_start_at', 'ev_end_at', 'ev_created_at', 'ev_updated_at', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        """Fix datetime timezone format from PostgreSQL"""
        return fix_pg_timezone(v)


class Event(EventInDB):
    pass


class EventBrief(BaseModel):
    """Event info embedded in registration/attendance/certificate lists"""
    model_config = ConfigDict(from_attributes=True)

    ev_id: str
    ev_title: str
    ev_start_at: datetime
    ev_venue: Optional[str] = None
