"""
Announcement Model - Organizer updates for an event
"""
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from atams.db import Base

from app.models.user import generate_uuid


class Announcement(Base):
    """Announcement model - Table: announcements"""
    __tablename__ = "announcements"

    an_id = Column(String(36), primary_key=True, default=generate_uuid)
    an_event_id = Column(String(36), ForeignKey("events.ev_id", ondelete="CASCADE"), nullable=False, index=True)
    an_title = Column(String(200), nullable=False)
    an_message = Column(Text, nullable=False)
    an_priority = Column(String(10), nullable=False, default="NORMAL")  # LOW, NORMAL, HIGH, URGENT
    an_send_to_registered = Column(Boolean, nullable=False, default=False)
    an_email_sent = Column(Boolean, nullable=False, default=False)
    an_created_by = Column(String(36), ForeignKey("users.u_id"), nullable=False)
    an_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    event = relationship("Event", back_populates="announcements")
