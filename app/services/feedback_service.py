"""
Feedback Service - Post-event ratings from attendees
"""
from typing import Dict, Any
from datetime import datetime, timezone
from sqlalchemy.orm import Session

from app.models.enums import ATTENDED_STATUSES
from app.repositories.attendance_repository import AttendanceRepository
from app.repositories.event_repository import EventRepository
from app.repositories.feedback_repository import FeedbackRepository
from app.services.access import ensure_can_manage_event
from app.schemas.feedback import (
    Feedback,
    FeedbackCreate,
    FeedbackAuthor,
    EventFeedbackItem,
    EventFeedbackSummary
)
from atams.exceptions import NotFoundException, BadRequestException, ForbiddenException

ANONYMOUS_AUTHOR = FeedbackAuthor(first_name="Anonymous", last_name="")


class FeedbackService:
    def __init__(self) -> None:
        self.feedback_repo = FeedbackRepository()
        self.attendance_repo = AttendanceRepository()
        self.event_repo = EventRepository()

    def submit(self, db: Session, payload: FeedbackCreate, user_id: str) -> Feedback:
        """
        Submit feedback for an attended event

        Raises:
            NotFoundException: If event not found
            ForbiddenException: If user did not attend (PRESENT or LATE)
            BadRequestException: If feedback was already submitted
        """
        if not self.event_repo.exists(db, payload.event_id):
            raise NotFoundException("Event not found")

        attendance = self.attendance_repo.get_by_event_and_user(db, payload.event_id, user_id)
        if not attendance or attendance.at_status not in [s.value for s in ATTENDED_STATUSES]:
            raise ForbiddenException("You must attend the event to leave feedback.")

        if self.feedback_repo.get_by_event_and_user(db, payload.event_id, user_id):
            raise BadRequestException("You have already submitted feedback for this event.")

        feedback = self.feedback_repo.create(db, {
            "fb_event_id": payload.event_id,
            "fb_user_id": user_id,
            "fb_overall_rating": payload.overall_rating,
            "fb_comments": payload.comments,
            "fb_is_anonymous": payload.is_anonymous,
            "fb_submitted_at": datetime.now(timezone.utc)
        })
        return Feedback.model_validate(feedback)

    def list_for_event(self, db: Session, event_id: str, actor: Dict[str, Any]) -> EventFeedbackSummary:
        """Feedback of an event with average rating; anonymous authors are masked"""
        event = self.event_repo.get_by_id(db, event_id)
        if not event:
            raise NotFoundException("Event not found")
        ensure_can_manage_event(event, actor, "Not authorized to view feedback for this event")

        feedbacks = self.feedback_repo.get_event_feedback(db, event_id)

        items = []
        for fb in feedbacks:
            if fb.fb_is_anonymous:
                author = ANONYMOUS_AUTHOR
            else:
                author = FeedbackAuthor(first_name=fb.user.u_first_name, last_name=fb.user.u_last_name)
            items.append(EventFeedbackItem(
                fb_id=fb.fb_id,
                fb_overall_rating=fb.fb_overall_rating,
                fb_comments=fb.fb_comments,
                fb_is_anonymous=fb.fb_is_anonymous,
                fb_submitted_at=fb.fb_submitted_at,
                author=author
            ))

        total = len(items)
        average = round(sum(i.fb_overall_rating for i in items) / total, 1) if total else 0
        return EventFeedbackSummary(feedbacks=items, average_rating=average, total_count=total)
