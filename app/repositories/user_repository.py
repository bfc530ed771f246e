"""
User Repository - Data access layer for users
"""
from typing import Optional
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from app.models.user import User


class UserRepository(BaseRepository[User]):
    def __init__(self):
        super().__init__(User)

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get user by email (case insensitive) using ORM"""
        return db.query(User).filter(User.u_email == email.lower()).first()

    def check_email_exists(self, db: Session, email: str) -> bool:
        """Check if email is taken using native SQL"""
        query = "SELECT 1 FROM users WHERE u_email = :email LIMIT 1"
        result = self.execute_raw_sql_scalar(db, query, {"email": email.lower()})
        return result is not None
