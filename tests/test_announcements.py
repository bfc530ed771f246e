"""Tests for event announcements."""

import pytest

from app.models import Registration
from tests.conftest import auth_headers


def post_announcement(client, user, event_id, send=False, title="Room change"):
    return client.post(
        "/api/v1/announcements",
        json={
            "event_id": event_id,
            "title": title,
            "message": "We moved to Hall B",
            "priority": "HIGH",
            "send_to_registered": send,
        },
        headers=auth_headers(user),
    )


class TestAnnouncements:
    def test_emails_only_approved_registrants(self, client, db, event, organizer, make_user, notifier):
        approved = make_user()
        pending = make_user()
        db.add(Registration(rg_event_id=event.ev_id, rg_user_id=approved.u_id, rg_status="APPROVED"))
        db.add(Registration(rg_event_id=event.ev_id, rg_user_id=pending.u_id, rg_status="PENDING"))
        db.commit()

        response = post_announcement(client, organizer, event.ev_id, send=True)

        assert response.status_code == 201
        assert response.json()["data"]["an_email_sent"] is True
        assert notifier.announcements == [
            (approved.u_email, event.ev_title, "Room change", "We moved to Hall B")
        ]

    def test_without_email(self, client, event, organizer, notifier):
        response = post_announcement(client, organizer, event.ev_id)

        assert response.json()["data"]["an_email_sent"] is False
        assert notifier.announcements == []

    def test_public_list_newest_first(self, client, event, organizer):
        post_announcement(client, organizer, event.ev_id, title="First")
        post_announcement(client, organizer, event.ev_id, title="Second")

        data = client.get(f"/api/v1/announcements/events/{event.ev_id}").json()["data"]

        assert [a["an_title"] for a in data] == ["Second", "First"]

    def test_other_organizer_cannot_post(self, client, event, other_organizer):
        assert post_announcement(client, other_organizer, event.ev_id).status_code == 403

    def test_delete(self, client, event, organizer):
        announcement_id = post_announcement(client, organizer, event.ev_id).json()["data"]["an_id"]

        response = client.delete(f"/api/v1/announcements/{announcement_id}", headers=auth_headers(organizer))

        assert response.status_code == 200
        assert client.get(f"/api/v1/announcements/events/{event.ev_id}").json()["data"] == []

    @pytest.mark.parametrize("missing", ["title", "message"])
    def test_required_fields(self, client, event, organizer, missing):
        payload = {"event_id": event.ev_id, "title": "T", "message": "M"}
        del payload[missing]

        response = client.post("/api/v1/announcements", json=payload, headers=auth_headers(organizer))

        assert response.status_code == 422
