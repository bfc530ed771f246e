"""
Feedback Repository - Data access layer for event feedback
"""
from typing import Optional, List
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from app.models.feedback import Feedback


class FeedbackRepository(BaseRepository[Feedback]):
    def __init__(self):
        super().__init__(Feedback)

    def get_by_event_and_user(self, db: Session, event_id: str, user_id: str) -> Optional[Feedback]:
        return db.query(Feedback).filter(
            Feedback.fb_event_id == event_id,
            Feedback.fb_user_id == user_id
        ).first()

    def get_event_feedback(self, db: Session, event_id: str) -> List[Feedback]:
        return (
            db.query(Feedback)
            .filter(Feedback.fb_event_id == event_id)
            .order_by(Feedback.fb_submitted_at.desc())
            .all()
        )
