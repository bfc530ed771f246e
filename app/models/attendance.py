"""
Attendance Model - One attendance record per (event, user)
"""
from sqlalchemy import Column, String, DateTime, Float, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from atams.db import Base

from app.models.user import generate_uuid


class Attendance(Base):
    """Attendance model - Table: attendance"""
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("at_event_id", "at_user_id", name="uq_attendance_event_user"),
    )

    at_id = Column(String(36), primary_key=True, default=generate_uuid)
    at_event_id = Column(String(36), ForeignKey("events.ev_id", ondelete="CASCADE"), nullable=False, index=True)
    at_user_id = Column(String(36), ForeignKey("users.u_id", ondelete="CASCADE"), nullable=False, index=True)
    at_status = Column(String(20), nullable=False, default="PRESENT")  # PRESENT, ABSENT, LATE, EXCUSED
    at_check_in_time = Column(DateTime(timezone=True), nullable=False)
    at_check_in_method = Column(String(20), nullable=False)
    at_latitude = Column(Float, nullable=True)  # Where the check-in was made from (audit only)
    at_longitude = Column(Float, nullable=True)
    at_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    at_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    event = relationship("Event", back_populates="attendances")
    user = relationship("User", lazy="joined")
