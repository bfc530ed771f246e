"""
Feedback Model - Ratings left by attendees
"""
from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from atams.db import Base

from app.models.user import generate_uuid


class Feedback(Base):
    """Feedback model - Table: feedback"""
    __tablename__ = "feedback"
    __table_args__ = (
        UniqueConstraint("fb_event_id", "fb_user_id", name="uq_feedback_event_user"),
    )

    fb_id = Column(String(36), primary_key=True, default=generate_uuid)
    fb_event_id = Column(String(36), ForeignKey("events.ev_id", ondelete="CASCADE"), nullable=False, index=True)
    fb_user_id = Column(String(36), ForeignKey("users.u_id", ondelete="CASCADE"), nullable=False, index=True)
    fb_overall_rating = Column(Integer, nullable=False)  # 1-5
    fb_comments = Column(Text, nullable=True)
    fb_is_anonymous = Column(Boolean, nullable=False, default=False)
    fb_submitted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    event = relationship("Event", back_populates="feedbacks")
    user = relationship("User", lazy="joined")
