"""Tests for self check-in, the geofence gate and organizer marks."""

import pytest
from atams.exceptions import ForbiddenException, NotFoundException

from app.core.exceptions import LocationRequiredException, OutOfRangeException
from app.models import Attendance
from app.models.enums import AttendanceStatus
from app.services.attendance_service import AttendanceService
from tests.conftest import actor_for


@pytest.fixture
def service():
    return AttendanceService()


class TestSelfCheckIn:
    def test_unknown_event(self, service, db, student):
        with pytest.raises(NotFoundException):
            service.record_self_check_in(db, "missing", student.u_id)

    def test_manual_event_needs_no_location(self, service, db, event, student):
        attendance = service.record_self_check_in(db, event.ev_id, student.u_id)

        assert attendance.at_status == AttendanceStatus.PRESENT
        assert attendance.at_check_in_method == "MANUAL"
        assert attendance.at_latitude is None
        assert attendance.at_longitude is None

    @pytest.mark.parametrize("lat,lon", [(None, None), (0.0001, None), (None, 0.0001)])
    def test_geofence_requires_both_coordinates(self, service, db, geofence_event, student, lat, lon):
        with pytest.raises(LocationRequiredException) as exc_info:
            service.record_self_check_in(db, geofence_event.ev_id, student.u_id, latitude=lat, longitude=lon)

        assert exc_info.value.details["code"] == "LOCATION_REQUIRED"
        assert db.query(Attendance).count() == 0

    def test_zero_coordinates_are_a_valid_location(self, service, db, geofence_event, student):
        attendance = service.record_self_check_in(db, geofence_event.ev_id, student.u_id, latitude=0.0, longitude=0.0)

        assert attendance.at_latitude == 0.0
        assert attendance.at_longitude == 0.0
        assert attendance.at_check_in_method == "GEOFENCE"

    def test_inside_radius_is_accepted(self, service, db, geofence_event, student):
        # about 15.7 m from the center
        attendance = service.record_self_check_in(
            db, geofence_event.ev_id, student.u_id, latitude=0.0001, longitude=0.0001
        )
        assert attendance.at_status == AttendanceStatus.PRESENT

    def test_outside_radius_is_rejected(self, service, db, geofence_event, student):
        with pytest.raises(OutOfRangeException) as exc_info:
            service.record_self_check_in(db, geofence_event.ev_id, student.u_id, latitude=0.1, longitude=0.1)

        exc = exc_info.value
        assert exc.details["code"] == "OUT_OF_RANGE"
        assert exc.details["distance"] == pytest.approx(15725, abs=20)
        assert exc.details["radius"] == 100.0
        assert exc.message.startswith("You are too far from the event location. Distance: ")
        assert exc.message.endswith("m. Allowed: 100m.")
        assert db.query(Attendance).count() == 0

    def test_incomplete_geofence_skips_distance_check(self, service, db, make_event, organizer, student):
        event = make_event(organizer, ev_attendance_method="GEOFENCE", ev_latitude=0.0, ev_longitude=0.0)

        attendance = service.record_self_check_in(db, event.ev_id, student.u_id, latitude=45.0, longitude=45.0)

        assert attendance.at_latitude == 45.0

    def test_incomplete_geofence_still_requires_location(self, service, db, make_event, organizer, student):
        event = make_event(organizer, ev_attendance_method="GEOFENCE")

        with pytest.raises(LocationRequiredException):
            service.record_self_check_in(db, event.ev_id, student.u_id)

    def test_repeat_check_in_updates_single_row(self, service, db, event, student):
        first = service.record_self_check_in(db, event.ev_id, student.u_id)
        second = service.record_self_check_in(db, event.ev_id, student.u_id, status=AttendanceStatus.LATE)

        assert second.at_id == first.at_id
        assert second.at_status == AttendanceStatus.LATE
        assert db.query(Attendance).count() == 1

    def test_update_keeps_original_method(self, service, db, geofence_event, student):
        service.record_self_check_in(db, geofence_event.ev_id, student.u_id, latitude=0.0, longitude=0.0)

        geofence_event.ev_attendance_method = "MANUAL"
        db.commit()

        attendance = service.record_self_check_in(db, geofence_event.ev_id, student.u_id)

        assert attendance.at_check_in_method == "GEOFENCE"
        assert attendance.at_latitude is None

    def test_status_accepts_plain_string(self, service, db, event, student):
        attendance = service.record_self_check_in(db, event.ev_id, student.u_id, status="LATE")
        assert attendance.at_status == AttendanceStatus.LATE


class TestOrganizerMark:
    def test_creates_manual_record(self, service, db, geofence_event, organizer, student):
        attendance = service.record_organizer_mark(
            db, geofence_event.ev_id, student.u_id, AttendanceStatus.PRESENT, actor_for(organizer)
        )

        assert attendance.at_check_in_method == "MANUAL"
        assert attendance.at_latitude is None

    def test_overrides_method_and_clears_location(self, service, db, geofence_event, organizer, student):
        service.record_self_check_in(db, geofence_event.ev_id, student.u_id, latitude=0.0, longitude=0.0)

        attendance = service.record_organizer_mark(
            db, geofence_event.ev_id, student.u_id, AttendanceStatus.ABSENT, actor_for(organizer)
        )

        assert attendance.at_status == AttendanceStatus.ABSENT
        assert attendance.at_check_in_method == "MANUAL"
        assert attendance.at_latitude is None
        assert attendance.at_longitude is None
        assert db.query(Attendance).count() == 1

    def test_admin_can_mark_any_event(self, service, db, event, admin, student):
        attendance = service.record_organizer_mark(
            db, event.ev_id, student.u_id, AttendanceStatus.LATE, actor_for(admin)
        )
        assert attendance.at_status == AttendanceStatus.LATE

    def test_student_cannot_mark(self, service, db, event, student):
        with pytest.raises(ForbiddenException):
            service.record_organizer_mark(db, event.ev_id, student.u_id, AttendanceStatus.PRESENT, actor_for(student))

    def test_organizer_of_another_event_cannot_mark(self, service, db, event, other_organizer, student):
        with pytest.raises(ForbiddenException):
            service.record_organizer_mark(
                db, event.ev_id, student.u_id, AttendanceStatus.PRESENT, actor_for(other_organizer)
            )

    def test_unknown_user(self, service, db, event, organizer):
        with pytest.raises(NotFoundException):
            service.record_organizer_mark(db, event.ev_id, "missing", AttendanceStatus.PRESENT, actor_for(organizer))


class TestAttendanceLists:
    def test_event_sheet_includes_user(self, service, db, event, organizer, student):
        service.record_self_check_in(db, event.ev_id, student.u_id)

        rows = service.list_event_attendance(db, event.ev_id, actor_for(organizer))

        assert len(rows) == 1
        assert rows[0].user.u_id == student.u_id

    def test_student_cannot_view_event_sheet(self, service, db, event, student):
        with pytest.raises(ForbiddenException):
            service.list_event_attendance(db, event.ev_id, actor_for(student))

    def test_my_history_includes_event(self, service, db, event, student):
        service.record_self_check_in(db, event.ev_id, student.u_id)

        rows = service.list_my_attendance(db, student.u_id)

        assert [r.event.ev_title for r in rows] == [event.ev_title]
