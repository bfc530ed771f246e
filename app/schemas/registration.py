"""
Registration Schemas
"""
from typing import Optional, Literal
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.enums import RegistrationStatus
from app.schemas.common import fix_pg_timezone
from app.schemas.event import EventBrief
from app.schemas.user import UserSummary


class RegistrationCreate(BaseModel):
    event_id: str = Field(..., min_length=1)


class RegistrationStatusUpdate(BaseModel):
    """Organizer decision on a registration"""
    rg_status: Literal["APPROVED", "REJECTED", "WAITLISTED"]


class RegistrationInDB(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    rg_id: str
    rg_event_id: str
    rg_user_id: str
    rg_status: RegistrationStatus
    rg_registered_at: Optional[datetime] = None
    rg_updated_at: Optional[datetime] = None

    @field_validator('rg_registered_at', 'rg_updated_at', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        """Fix datetime timezone format from PostgreSQL"""
        return fix_pg_timezone(v)


class Registration(RegistrationInDB):
    pass


class MyRegistration(RegistrationInDB):
    """Registration with its event"""
    event: EventBrief


class EventRegistration(RegistrationInDB):
    """Registration with the registrant"""
    user: UserSummary
