"""
Announcement Repository - Data access layer for event announcements
"""
from typing import Optional, List
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from app.models.announcement import Announcement


class AnnouncementRepository(BaseRepository[Announcement]):
    def __init__(self):
        super().__init__(Announcement)

    def get_by_id(self, db: Session, announcement_id: str) -> Optional[Announcement]:
        return db.query(Announcement).filter(Announcement.an_id == announcement_id).first()

    def get_event_announcements(self, db: Session, event_id: str) -> List[Announcement]:
        return (
            db.query(Announcement)
            .filter(Announcement.an_event_id == event_id)
            .order_by(Announcement.an_created_at.desc())
            .all()
        )
