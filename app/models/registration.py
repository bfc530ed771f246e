"""
Registration Model - One registration per (event, user)
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from atams.db import Base

from app.models.user import generate_uuid


class Registration(Base):
    """Registration model - Table: registrations"""
    __tablename__ = "registrations"
    __table_args__ = (
        UniqueConstraint("rg_event_id", "rg_user_id", name="uq_registrations_event_user"),
    )

    rg_id = Column(String(36), primary_key=True, default=generate_uuid)
    rg_event_id = Column(String(36), ForeignKey("events.ev_id", ondelete="CASCADE"), nullable=False, index=True)
    rg_user_id = Column(String(36), ForeignKey("users.u_id", ondelete="CASCADE"), nullable=False, index=True)
    rg_status = Column(String(20), nullable=False, default="PENDING")  # PENDING, APPROVED, REJECTED, CANCELLED, WAITLISTED
    rg_registered_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    rg_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    event = relationship("Event", back_populates="registrations")
    user = relationship("User", lazy="joined")
