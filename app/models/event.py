"""
Event Model - Campus events with optional geofence
"""
from sqlalchemy import Column, String, Text, DateTime, Integer, Float, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from atams.db import Base

from app.models.user import generate_uuid


class Event(Base):
    """Event model - Table: events"""
    __tablename__ = "events"

    ev_id = Column(String(36), primary_key=True, default=generate_uuid)
    ev_title = Column(String(200), nullable=False)
    ev_description = Column(Text, nullable=False, default="")
    ev_event_type = Column(String(30), nullable=False, default="OTHER")
    ev_category = Column(String(30), nullable=False, default="ACADEMIC")
    ev_start_at = Column(DateTime(timezone=True), nullable=False, index=True)
    ev_end_at = Column(DateTime(timezone=True), nullable=False)
    ev_venue = Column(String(255), nullable=False, default="")
    ev_is_online = Column(Boolean, nullable=False, default=False)
    ev_max_participants = Column(Integer, nullable=True)
    ev_state = Column(String(20), nullable=False, default="PUBLISHED", index=True)
    # Geofence / attendance
    ev_attendance_method = Column(String(20), nullable=False, default="MANUAL")
    ev_latitude = Column(Float, nullable=True)
    ev_longitude = Column(Float, nullable=True)
    ev_geofence_radius = Column(Float, nullable=True)  # meters
    ev_organizer_id = Column(String(36), ForeignKey("users.u_id"), nullable=False, index=True)
    ev_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    ev_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    organizer = relationship("User", lazy="joined")

    # Child rows are removed together with the event
    registrations = relationship("Registration", back_populates="event", cascade="all, delete-orphan")
    attendances = relationship("Attendance", back_populates="event", cascade="all, delete-orphan")
    certificates = relationship("Certificate", back_populates="event", cascade="all, delete-orphan")
    feedbacks = relationship("Feedback", back_populates="event", cascade="all, delete-orphan")
    announcements = relationship("Announcement", back_populates="event", cascade="all, delete-orphan")

    @property
    def has_geofence(self) -> bool:
        """True only when center and radius are all configured"""
        return (
            self.ev_latitude is not None
            and self.ev_longitude is not None
            and bool(self.ev_geofence_radius)
        )
