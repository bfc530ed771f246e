"""
Attendance Service - Self check-in (with geofence gate) and organizer marks
"""
from typing import List, Optional, Dict, Any
from datetime import datetime, timezone
from sqlalchemy.orm import Session

from app.models.enums import AttendanceMethod, AttendanceStatus, UserRole
from app.repositories.attendance_repository import AttendanceRepository
from app.repositories.event_repository import EventRepository
from app.repositories.user_repository import UserRepository
from app.services.access import ensure_can_manage_event
from app.services.geo import distance_meters
from app.schemas.attendance import Attendance, EventAttendance, MyAttendance
from app.core.exceptions import LocationRequiredException, OutOfRangeException
from atams.exceptions import NotFoundException, ForbiddenException
from atams.logging import get_logger

logger = get_logger(__name__)


class AttendanceService:
    def __init__(self) -> None:
        self.attendance_repo = AttendanceRepository()
        self.event_repo = EventRepository()
        self.user_repo = UserRepository()

    def _get_event(self, db: Session, event_id: str):
        event = self.event_repo.get_by_id(db, event_id)
        if not event:
            raise NotFoundException("Event not found")
        return event

    def _validate_geofence(self, event, latitude: Optional[float], longitude: Optional[float]) -> None:
        """
        Validate check-in location against the event geofence

        Raises:
            LocationRequiredException: If coordinates are missing
            OutOfRangeException: If user is outside the radius
        """
        if latitude is None or longitude is None:
            raise LocationRequiredException()

        # Geofence not fully configured: location is required but not checked
        if not event.has_geofence:
            return

        distance = distance_meters(event.ev_latitude, event.ev_longitude, latitude, longitude)
        if distance > event.ev_geofence_radius:
            logger.info(
                "Check-in rejected outside geofence",
                extra={'extra_data': {
                    'event_id': event.ev_id,
                    'distance_m': round(distance),
                    'radius_m': event.ev_geofence_radius
                }}
            )
            raise OutOfRangeException(distance, event.ev_geofence_radius)

    def record_self_check_in(
        self,
        db: Session,
        event_id: str,
        user_id: str,
        status: Optional[AttendanceStatus] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None
    ) -> Attendance:
        """
        Check the current user in to an event

        Args:
            db: Database session
            event_id: Event to check in to
            user_id: Current user ID from auth
            status: Attendance status (default PRESENT)
            latitude, longitude: Device location, required for GEOFENCE events

        Returns:
            Attendance: Stored attendance record
        """
        event = self._get_event(db, event_id)

        if event.ev_attendance_method == AttendanceMethod.GEOFENCE.value:
            self._validate_geofence(event, latitude, longitude)

        values = {
            "at_status": AttendanceStatus(status or AttendanceStatus.PRESENT).value,
            "at_check_in_time": datetime.now(timezone.utc),
            "at_latitude": latitude,
            "at_longitude": longitude
        }
        # First check-in records the event's method, later ones keep it
        attendance = self.attendance_repo.upsert(
            db, event_id, user_id, values,
            create_method=event.ev_attendance_method
        )
        return Attendance.model_validate(attendance)

    def record_organizer_mark(
        self,
        db: Session,
        event_id: str,
        user_id: str,
        status: AttendanceStatus,
        actor: Dict[str, Any]
    ) -> Attendance:
        """
        Mark attendance for a participant (organizer of the event or admin)

        Raises:
            ForbiddenException: If actor is not the event organizer or an admin
            NotFoundException: If event or user not found
        """
        if actor.get("role") not in (UserRole.ORGANIZER.value, UserRole.ADMIN.value):
            raise ForbiddenException("Only organizers can mark attendance")

        event = self._get_event(db, event_id)
        ensure_can_manage_event(event, actor, "Not authorized to mark attendance for this event")

        if not self.user_repo.exists(db, user_id):
            raise NotFoundException("User not found")

        values = {
            "at_status": AttendanceStatus(status).value,
            "at_check_in_time": datetime.now(timezone.utc),
            "at_latitude": None,
            "at_longitude": None
        }
        attendance = self.attendance_repo.upsert(
            db, event_id, user_id, values,
            create_method=AttendanceMethod.MANUAL.value,
            update_method=AttendanceMethod.MANUAL.value
        )

        logger.info(
            "Attendance marked by organizer",
            extra={'extra_data': {
                'event_id': event_id,
                'user_id': user_id,
                'status': AttendanceStatus(status).value,
                'marked_by': actor.get("user_id")
            }}
        )
        return Attendance.model_validate(attendance)

    def list_event_attendance(self, db: Session, event_id: str, actor: Dict[str, Any]) -> List[EventAttendance]:
        """Get attendance sheet of an event"""
        event = self._get_event(db, event_id)
        ensure_can_manage_event(event, actor, "Not authorized to view attendance for this event")

        rows = self.attendance_repo.get_event_attendance(db, event_id)
        return [EventAttendance.model_validate(r) for r in rows]

    def list_my_attendance(self, db: Session, user_id: str) -> List[MyAttendance]:
        """Get user's attendance history"""
        rows = self.attendance_repo.get_user_attendance(db, user_id)
        return [MyAttendance.model_validate(r) for r in rows]
