"""Tests for dashboard statistics."""

import pytest

from app.models import Attendance, Certificate, Registration
from tests.conftest import auth_headers


@pytest.fixture
def populated(db, make_event, organizer, other_organizer, make_user):
    live = make_event(organizer, ev_title="Live one", ev_state="LIVE")
    make_event(organizer, ev_title="Done", ev_state="COMPLETED")
    make_event(other_organizer, ev_title="Not mine")

    attendees = [make_user() for _ in range(3)]
    for user, status in zip(attendees, ["PRESENT", "PRESENT", "ABSENT"]):
        db.add(Registration(rg_event_id=live.ev_id, rg_user_id=user.u_id, rg_status="APPROVED"))
        db.add(Attendance(
            at_event_id=live.ev_id,
            at_user_id=user.u_id,
            at_status=status,
            at_check_in_time=live.ev_start_at,
            at_check_in_method="MANUAL",
        ))
    db.add(Certificate(
        ce_event_id=live.ev_id,
        ce_user_id=attendees[0].u_id,
        ce_certificate_number="AAAA0001",
        ce_verification_hash="0" * 64,
        ce_title="Certificate of Participation - Live one",
        ce_status="ISSUED",
        ce_issued_at=live.ev_start_at,
    ))
    db.commit()
    return live


class TestAnalytics:
    def test_organizer_stats(self, client, populated, organizer):
        response = client.get("/api/v1/analytics/organizer", headers=auth_headers(organizer))

        assert response.status_code == 200
        assert response.json()["data"] == {
            "total_events": 2,
            "active_events": 1,
            "total_registrations": 3,
            "total_certificates": 1,
        }

    def test_organizer_stats_not_for_admin(self, client, admin):
        assert client.get("/api/v1/analytics/organizer", headers=auth_headers(admin)).status_code == 403

    def test_event_stats(self, client, populated, organizer):
        data = client.get(f"/api/v1/analytics/events/{populated.ev_id}", headers=auth_headers(organizer)).json()["data"]

        assert data["event_name"] == "Live one"
        assert data["total_registrations"] == 3
        assert data["total_certificates"] == 1
        assert data["attendance_data"] == [
            {"name": "ABSENT", "value": 1},
            {"name": "PRESENT", "value": 2},
        ]

    def test_event_stats_other_organizer(self, client, populated, other_organizer):
        response = client.get(f"/api/v1/analytics/events/{populated.ev_id}", headers=auth_headers(other_organizer))
        assert response.status_code == 403

    def test_admin_stats(self, client, populated, admin):
        data = client.get("/api/v1/analytics/admin", headers=auth_headers(admin)).json()["data"]

        # organizer, other_organizer, 3 attendees, admin
        assert data == {
            "total_users": 6,
            "total_events": 3,
            "total_registrations": 3,
            "total_certificates": 1,
        }
