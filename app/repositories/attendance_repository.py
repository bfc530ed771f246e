"""
Attendance Repository - Data access layer for attendance records
"""
from typing import Optional, List, Dict, Any, Sequence
from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, joinedload

from atams.db import BaseRepository
from app.models.attendance import Attendance
from app.models.user import generate_uuid

# Dialects that support INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class AttendanceRepository(BaseRepository[Attendance]):
    def __init__(self):
        super().__init__(Attendance)

    def get_by_event_and_user(self, db: Session, event_id: str, user_id: str) -> Optional[Attendance]:
        """Get attendance for (event, user) using ORM"""
        return db.query(Attendance).filter(
            Attendance.at_event_id == event_id,
            Attendance.at_user_id == user_id
        ).first()

    def upsert(
        self,
        db: Session,
        event_id: str,
        user_id: str,
        values: Dict[str, Any],
        create_method: str,
        update_method: Optional[str] = None
    ) -> Attendance:
        """
        Create or update the attendance row for (event, user) in one statement.

        Args:
            values: Columns written on both insert and update
            create_method: at_check_in_method for a new row
            update_method: at_check_in_method overwrite on update (None keeps the stored method)

        Returns:
            Attendance: The row as stored after the upsert
        """
        dialect = db.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"Attendance upsert is not supported on '{dialect}'")

        stmt = insert(Attendance).values(
            at_id=generate_uuid(),
            at_event_id=event_id,
            at_user_id=user_id,
            at_check_in_method=create_method,
            **values
        )

        update_set = dict(values)
        update_set["at_updated_at"] = func.now()
        if update_method is not None:
            update_set["at_check_in_method"] = update_method

        stmt = stmt.on_conflict_do_update(
            index_elements=["at_event_id", "at_user_id"],
            set_=update_set
        )
        db.execute(stmt)
        db.commit()

        return self.get_by_event_and_user(db, event_id, user_id)

    def get_event_attendance(
        self,
        db: Session,
        event_id: str,
        statuses: Optional[Sequence[str]] = None
    ) -> List[Attendance]:
        """Get attendance rows of an event, optionally filtered by status"""
        query = db.query(Attendance).filter(Attendance.at_event_id == event_id)
        if statuses:
            query = query.filter(Attendance.at_status.in_(list(statuses)))
        return query.order_by(Attendance.at_check_in_time.asc()).all()

    def get_user_attendance(self, db: Session, user_id: str) -> List[Attendance]:
        return (
            db.query(Attendance)
            .options(joinedload(Attendance.event))
            .filter(Attendance.at_user_id == user_id)
            .order_by(Attendance.at_created_at.desc())
            .all()
        )

    def count_by_status(self, db: Session, event_id: str) -> Dict[str, int]:
        """Attendance breakdown for an event: {status: count}"""
        rows = (
            db.query(Attendance.at_status, func.count(Attendance.at_id))
            .filter(Attendance.at_event_id == event_id)
            .group_by(Attendance.at_status)
            .all()
        )
        return {status: count for status, count in rows}
