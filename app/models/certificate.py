"""
Certificate Model - At most one certificate per (event, user)
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from atams.db import Base

from app.models.user import generate_uuid


class Certificate(Base):
    """Certificate model - Table: certificates"""
    __tablename__ = "certificates"
    __table_args__ = (
        UniqueConstraint("ce_event_id", "ce_user_id", name="uq_certificates_event_user"),
    )

    ce_id = Column(String(36), primary_key=True, default=generate_uuid)
    ce_event_id = Column(String(36), ForeignKey("events.ev_id", ondelete="CASCADE"), nullable=False, index=True)
    ce_user_id = Column(String(36), ForeignKey("users.u_id", ondelete="CASCADE"), nullable=False, index=True)
    ce_certificate_number = Column(String(16), nullable=False, unique=True, index=True)
    ce_verification_hash = Column(String(64), nullable=False)  # sha256(number + user_id + event_id)
    ce_title = Column(String(255), nullable=False)
    ce_status = Column(String(20), nullable=False, default="ISSUED")
    ce_issued_at = Column(DateTime(timezone=True), nullable=False)
    ce_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    event = relationship("Event", back_populates="certificates")
    user = relationship("User", lazy="joined")
