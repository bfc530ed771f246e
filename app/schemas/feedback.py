"""
Feedback Schemas
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class FeedbackCreate(BaseModel):
    event_id: str = Field(..., min_length=1)
    overall_rating: int = Field(..., ge=1, le=5)
    comments: Optional[str] = Field(None, max_length=2000)
    is_anonymous: bool = False


class Feedback(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    fb_id: str
    fb_event_id: str
    fb_user_id: str
    fb_overall_rating: int
    fb_comments: Optional[str] = None
    fb_is_anonymous: bool
    fb_submitted_at: Optional[datetime] = None


class FeedbackAuthor(BaseModel):
    first_name: str
    last_name: str


class EventFeedbackItem(BaseModel):
    fb_id: str
    fb_overall_rating: int
    fb_comments: Optional[str] = None
    fb_is_anonymous: bool
    fb_submitted_at: Optional[datetime] = None
    author: FeedbackAuthor


class EventFeedbackSummary(BaseModel):
    feedbacks: List[EventFeedbackItem]
    average_rating: float
    total_count: int
