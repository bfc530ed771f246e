"""
User Model - Students, organizers and administrators
"""
import uuid

from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from atams.db import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    """User model - Table: users"""
    __tablename__ = "users"

    u_id = Column(String(36), primary_key=True, default=generate_uuid)
    u_email = Column(String(255), nullable=False, unique=True, index=True)
    u_password = Column(String(255), nullable=False)  # werkzeug password hash
    u_first_name = Column(String(100), nullable=False)
    u_last_name = Column(String(100), nullable=False)
    u_role = Column(String(20), nullable=False, default="STUDENT")  # STUDENT, ORGANIZER, ADMIN
    u_roll_number = Column(String(50), nullable=True)
    u_department = Column(String(100), nullable=True)
    u_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    u_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    @property
    def full_name(self) -> str:
        return f"{self.u_first_name} {self.u_last_name}".strip()
