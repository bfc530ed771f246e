"""Tests for certificate issuing, bulk issuing and verification."""

import hashlib
import re

import pytest
from atams.exceptions import ConflictException, ForbiddenException, NotFoundException
from fastapi import BackgroundTasks
from sqlalchemy.exc import OperationalError

from app.core.exceptions import NoEligibleAttendeesException, NotEligibleException
from app.models import Attendance, Certificate
from app.services import certificate_service
from app.services.certificate_service import (
    MAX_NUMBER_ATTEMPTS,
    CertificateService,
    compute_verification_hash,
    generate_certificate_number,
)
from tests.conftest import FakeNotifier, actor_for


@pytest.fixture
def service():
    return CertificateService()


@pytest.fixture
def tasks():
    return BackgroundTasks()


@pytest.fixture
def mark(db):
    def _mark(event, user, status="PRESENT"):
        db.add(Attendance(
            at_event_id=event.ev_id,
            at_user_id=user.u_id,
            at_status=status,
            at_check_in_time=event.ev_start_at,
            at_check_in_method="MANUAL",
        ))
        db.commit()

    return _mark


class TestHelpers:
    def test_certificate_number_format(self):
        number = generate_certificate_number()
        assert re.fullmatch(r"[0-9A-F]{8}", number)

    def test_verification_hash(self):
        expected = hashlib.sha256(b"ABCD1234user-1event-1").hexdigest()
        assert compute_verification_hash("ABCD1234", "user-1", "event-1") == expected

    def test_hash_depends_on_every_part(self):
        base = compute_verification_hash("ABCD1234", "user-1", "event-1")
        assert compute_verification_hash("ABCD1235", "user-1", "event-1") != base
        assert compute_verification_hash("ABCD1234", "user-2", "event-1") != base
        assert compute_verification_hash("ABCD1234", "user-1", "event-2") != base


class TestIssueSingle:
    def test_issues_certificate(self, service, db, tasks, event, organizer, student, mark):
        mark(event, student)
        notifier = FakeNotifier()

        cert, created = service.issue_single(db, event.ev_id, student.u_id, actor_for(organizer), tasks, notifier)

        assert created is True
        assert re.fullmatch(r"[0-9A-F]{8}", cert.ce_certificate_number)
        assert cert.ce_verification_hash == compute_verification_hash(
            cert.ce_certificate_number, student.u_id, event.ev_id
        )
        assert cert.ce_title == f"Certificate of Participation - {event.ev_title}"
        assert cert.ce_status == "ISSUED"

        assert len(tasks.tasks) == 1
        task = tasks.tasks[0]
        assert task.func == notifier.notify_certificate_issued
        assert task.args == (student.u_email, student.u_first_name, event.ev_title, cert.ce_certificate_number)

    def test_late_attendee_is_eligible(self, service, db, tasks, event, organizer, student, mark):
        mark(event, student, "LATE")

        _, created = service.issue_single(db, event.ev_id, student.u_id, actor_for(organizer), tasks, FakeNotifier())

        assert created is True

    def test_second_issue_returns_existing(self, service, db, tasks, event, organizer, student, mark):
        mark(event, student)
        first, _ = service.issue_single(db, event.ev_id, student.u_id, actor_for(organizer), tasks, FakeNotifier())

        again_tasks = BackgroundTasks()
        second, created = service.issue_single(
            db, event.ev_id, student.u_id, actor_for(organizer), again_tasks, FakeNotifier()
        )

        assert created is False
        assert second.ce_id == first.ce_id
        assert second.ce_certificate_number == first.ce_certificate_number
        assert db.query(Certificate).count() == 1
        assert again_tasks.tasks == []

    @pytest.mark.parametrize("status", ["ABSENT", "EXCUSED"])
    def test_absent_attendee_is_not_eligible(self, service, db, tasks, event, organizer, student, mark, status):
        mark(event, student, status)

        with pytest.raises(NotEligibleException) as exc_info:
            service.issue_single(db, event.ev_id, student.u_id, actor_for(organizer), tasks, FakeNotifier())

        assert exc_info.value.details["code"] == "NOT_ELIGIBLE"

    def test_missing_attendance_is_not_eligible(self, service, db, tasks, event, organizer, student):
        with pytest.raises(NotEligibleException):
            service.issue_single(db, event.ev_id, student.u_id, actor_for(organizer), tasks, FakeNotifier())

    def test_unknown_event(self, service, db, tasks, organizer, student):
        with pytest.raises(NotFoundException):
            service.issue_single(db, "missing", student.u_id, actor_for(organizer), tasks, FakeNotifier())

    def test_other_organizer_is_forbidden(self, service, db, tasks, event, other_organizer, student, mark):
        mark(event, student)

        with pytest.raises(ForbiddenException):
            service.issue_single(db, event.ev_id, student.u_id, actor_for(other_organizer), tasks, FakeNotifier())

    def test_student_is_forbidden(self, service, db, tasks, event, student, mark):
        mark(event, student)

        with pytest.raises(ForbiddenException):
            service.issue_single(db, event.ev_id, student.u_id, actor_for(student), tasks, FakeNotifier())

    def test_admin_can_issue(self, service, db, tasks, event, admin, student, mark):
        mark(event, student)

        _, created = service.issue_single(db, event.ev_id, student.u_id, actor_for(admin), tasks, FakeNotifier())

        assert created is True


class TestIssueBulk:
    @pytest.fixture
    def attendees(self, make_user, event, mark):
        present = make_user(first_name="Pia")
        late = make_user(first_name="Lou")
        absent = make_user(first_name="Abe")
        also_present = make_user(first_name="Pat")
        mark(event, present, "PRESENT")
        mark(event, late, "LATE")
        mark(event, absent, "ABSENT")
        mark(event, also_present, "PRESENT")
        return [present, late, absent, also_present]

    def test_issues_to_every_eligible_attendee(self, service, db, tasks, event, organizer, attendees):
        result = service.issue_bulk(db, event.ev_id, actor_for(organizer), tasks, FakeNotifier())

        assert result.total_eligible == 3
        assert result.issued == 3
        assert result.already_issued == 0
        assert result.failed == 0
        assert result.errors == []
        assert len(tasks.tasks) == 3

        holders = {c.ce_user_id for c in db.query(Certificate).all()}
        assert attendees[2].u_id not in holders

    def test_rerun_counts_already_issued(self, service, db, tasks, event, organizer, attendees):
        service.issue_bulk(db, event.ev_id, actor_for(organizer), tasks, FakeNotifier())

        result = service.issue_bulk(db, event.ev_id, actor_for(organizer), BackgroundTasks(), FakeNotifier())

        assert result.issued == 0
        assert result.already_issued == 3
        assert db.query(Certificate).count() == 3

    def test_mixed_with_single_issue(self, service, db, tasks, event, organizer, attendees):
        service.issue_single(db, event.ev_id, attendees[0].u_id, actor_for(organizer), tasks, FakeNotifier())

        result = service.issue_bulk(db, event.ev_id, actor_for(organizer), tasks, FakeNotifier())

        assert result.issued == 2
        assert result.already_issued == 1

    def test_one_store_failure_does_not_stop_the_batch(
        self, service, db, tasks, event, organizer, attendees, monkeypatch
    ):
        failing_user = attendees[1]
        original_create = service.certificate_repo.create_certificate

        def flaky_create(session, data):
            if data["ce_user_id"] == failing_user.u_id:
                raise OperationalError("INSERT INTO certificates", {}, Exception("disk I/O error"))
            return original_create(session, data)

        monkeypatch.setattr(service.certificate_repo, "create_certificate", flaky_create)

        result = service.issue_bulk(db, event.ev_id, actor_for(organizer), tasks, FakeNotifier())

        assert result.total_eligible == 3
        assert result.issued == 2
        assert result.failed == 1
        assert len(result.errors) == 1
        assert result.errors[0].user_id == failing_user.u_id
        assert db.query(Certificate).count() == 2

    def test_no_eligible_attendees(self, service, db, tasks, event, organizer, student, mark):
        mark(event, student, "ABSENT")

        with pytest.raises(NoEligibleAttendeesException) as exc_info:
            service.issue_bulk(db, event.ev_id, actor_for(organizer), tasks, FakeNotifier())

        assert exc_info.value.details["code"] == "NO_ELIGIBLE_ATTENDEES"

    def test_other_organizer_is_forbidden(self, service, db, tasks, event, other_organizer, attendees):
        with pytest.raises(ForbiddenException):
            service.issue_bulk(db, event.ev_id, actor_for(other_organizer), tasks, FakeNotifier())

        assert db.query(Certificate).count() == 0


class TestConcurrentIssue:
    @pytest.fixture
    def issued(self, service, db, tasks, event, organizer, make_user, mark):
        holder = make_user(first_name="Hana")
        mark(event, holder)
        cert, _ = service.issue_single(db, event.ev_id, holder.u_id, actor_for(organizer), tasks, FakeNotifier())
        return holder, cert

    def test_lost_insert_race_returns_existing(
        self, service, db, event, organizer, issued, monkeypatch
    ):
        holder, cert = issued
        real_lookup = service.certificate_repo.get_by_event_and_user
        calls = {"n": 0}

        def stale_then_real(session, event_id, user_id):
            # First lookup misses, as if the other request had not committed yet
            calls["n"] += 1
            if calls["n"] == 1:
                return None
            return real_lookup(session, event_id, user_id)

        monkeypatch.setattr(service.certificate_repo, "get_by_event_and_user", stale_then_real)
        race_tasks = BackgroundTasks()

        result, created = service.issue_single(
            db, event.ev_id, holder.u_id, actor_for(organizer), race_tasks, FakeNotifier()
        )

        assert created is False
        assert result.ce_id == cert.ce_id
        assert result.ce_certificate_number == cert.ce_certificate_number
        assert db.query(Certificate).count() == 1
        assert race_tasks.tasks == []

    def test_number_collision_is_retried(
        self, service, db, tasks, event, organizer, student, mark, issued, monkeypatch
    ):
        _, cert = issued
        mark(event, student)
        numbers = iter([cert.ce_certificate_number, "NEWNUM01"])
        monkeypatch.setattr(certificate_service, "generate_certificate_number", lambda: next(numbers))

        result, created = service.issue_single(db, event.ev_id, student.u_id, actor_for(organizer), tasks, FakeNotifier())

        assert created is True
        assert result.ce_certificate_number == "NEWNUM01"
        assert result.ce_verification_hash == compute_verification_hash("NEWNUM01", student.u_id, event.ev_id)
        assert db.query(Certificate).count() == 2

    def test_gives_up_after_repeated_collisions(
        self, service, db, event, organizer, student, mark, issued, monkeypatch
    ):
        _, cert = issued
        mark(event, student)
        attempts = {"n": 0}

        def always_taken():
            attempts["n"] += 1
            return cert.ce_certificate_number

        monkeypatch.setattr(certificate_service, "generate_certificate_number", always_taken)
        failed_tasks = BackgroundTasks()

        with pytest.raises(ConflictException):
            service.issue_single(db, event.ev_id, student.u_id, actor_for(organizer), failed_tasks, FakeNotifier())

        assert attempts["n"] == MAX_NUMBER_ATTEMPTS
        assert db.query(Certificate).count() == 1
        assert failed_tasks.tasks == []


class TestVerify:
    @pytest.fixture
    def certificate(self, service, db, tasks, event, organizer, student, mark):
        mark(event, student)
        cert, _ = service.issue_single(db, event.ev_id, student.u_id, actor_for(organizer), tasks, FakeNotifier())
        return cert

    def test_valid_certificate(self, service, db, certificate, student, event):
        verification = service.verify(db, certificate.ce_certificate_number)

        assert verification.valid is True
        assert verification.recipient_name == student.full_name
        assert verification.event_title == event.ev_title

    def test_lookup_is_case_insensitive(self, service, db, certificate):
        verification = service.verify(db, certificate.ce_certificate_number.lower())
        assert verification.certificate_number == certificate.ce_certificate_number

    def test_tampered_hash_is_invalid(self, service, db, certificate):
        row = db.query(Certificate).filter(Certificate.ce_id == certificate.ce_id).one()
        row.ce_verification_hash = "0" * 64
        db.commit()

        assert service.verify(db, certificate.ce_certificate_number).valid is False

    def test_unknown_number(self, service, db):
        with pytest.raises(NotFoundException):
            service.verify(db, "DEADBEEF")

    def test_pdf_for_owner(self, service, db, certificate, student):
        filename, content = service.render_pdf(db, certificate.ce_id, actor_for(student))

        assert filename == f"certificate-{certificate.ce_certificate_number}.pdf"
        assert content.startswith(b"%PDF")

    def test_pdf_forbidden_for_other_student(self, service, db, certificate, make_user):
        stranger = make_user()

        with pytest.raises(ForbiddenException):
            service.render_pdf(db, certificate.ce_id, actor_for(stranger))
