"""
Announcement Schemas
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import AnnouncementPriority


class AnnouncementCreate(BaseModel):
    event_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    priority: AnnouncementPriority = AnnouncementPriority.NORMAL
    send_to_registered: bool = False


class Announcement(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    an_id: str
    an_event_id: str
    an_title: str
    an_message: str
    an_priority: AnnouncementPriority
    an_send_to_registered: bool
    an_email_sent: bool
    an_created_by: str
    an_created_at: Optional[datetime] = None
