"""Unit tests for the waiver gate."""
from datetime import date, timedelta

import pytest

from volunteerhub.core.exceptions import (
    InvalidInputError,
    WaiverRequestExpiredError,
    WaiverRequestNotFoundError,
)
from volunteerhub.core.mail import MailResult
from volunteerhub.db.models import WaiverRequest
from volunteerhub.schemas.user import RegistrationRequest
from volunteerhub.schemas.waiver import InPersonCompletion, RemoteGuardianCompletion, WaiverState
from volunteerhub.services.accounting import check_in
from volunteerhub.services.users import register_volunteer
from volunteerhub.services.waiver import (
    complete_waiver,
    complete_waiver_in_person,
    create_waiver_request,
    get_waiver_request,
    sign_waiver_request,
    waiver_state,
)
from tests.utils import make_user, utc

NOW = utc(2024, 3, 15, 15, 0)


def registration(**overrides):
    fields = {
        "name": "Sam Lee",
        "email": "sam@example.org",
        "phone": "555-987-6543",
        "date_of_birth": date(1985, 1, 1),
        "waiver_accepted": True,
    }
    fields.update(overrides)
    return RegistrationRequest(**fields)


class RecordingMailer:
    def __init__(self, ok=True):
        self.ok = ok
        self.sent = []

    def __call__(self, to_address, template_kind, template_data):
        self.sent.append((to_address, template_kind, template_data))
        return MailResult(ok=self.ok, error=None if self.ok else "smtp down")


@pytest.mark.unit
class TestWaiverState:

    def test_unregistered_person(self):
        assert waiver_state(None) == WaiverState.NO_WAIVER

    def test_states_follow_flags(self, db_session):
        adult = make_user(db_session, waiver_signed=False)
        minor = make_user(db_session, email="kid@example.org", is_minor=True, waiver_signed=False)
        done = make_user(db_session, email="done@example.org")

        assert waiver_state(adult) == WaiverState.ADULT_WAIVER_PENDING
        assert waiver_state(minor) == WaiverState.MINOR_WAIVER_PENDING
        assert waiver_state(done) == WaiverState.WAIVER_COMPLETE


@pytest.mark.unit
class TestRegistration:

    def test_adult_is_signed_at_registration(self, db_session):
        user = register_volunteer(db_session, registration(), now=NOW)

        assert user.is_minor is False
        assert user.waiver_signed is True
        assert user.waiver_method == "in_person"

    def test_adult_must_accept_waiver(self, db_session):
        with pytest.raises(InvalidInputError, match="complete the waiver"):
            register_volunteer(db_session, registration(waiver_accepted=False), now=NOW)

    def test_minor_needs_guardian_name(self, db_session):
        with pytest.raises(InvalidInputError, match="parent/guardian"):
            register_volunteer(db_session, registration(date_of_birth=date(2010, 5, 1)), now=NOW)

    def test_minor_walk_up_is_complete(self, db_session):
        user = register_volunteer(
            db_session,
            registration(date_of_birth=date(2010, 5, 1), parent_guardian_name="Pat Lee", mode="walk_up"),
            now=NOW,
        )

        assert user.is_minor is True
        assert waiver_state(user) == WaiverState.WAIVER_COMPLETE

    def test_minor_remote_registration_stays_pending(self, db_session):
        user = register_volunteer(
            db_session,
            registration(date_of_birth=date(2010, 5, 1), parent_guardian_name="Pat Lee", mode="remote"),
            now=NOW,
        )

        assert waiver_state(user) == WaiverState.MINOR_WAIVER_PENDING
        assert user.waiver_signed_at is None

    def test_seventeenth_birthday_vs_eighteenth(self, db_session):
        minor = register_volunteer(
            db_session,
            registration(date_of_birth=date(2006, 3, 16), parent_guardian_name="Pat Lee"),
            now=NOW,
        )
        adult = register_volunteer(
            db_session,
            registration(email="adult@example.org", date_of_birth=date(2006, 3, 15)),
            now=NOW,
        )

        assert minor.is_minor is True
        assert adult.is_minor is False


@pytest.mark.unit
class TestInPersonCompletion:

    def test_adult_completes_and_can_check_in(self, db_session):
        user = make_user(db_session, waiver_signed=False, waiver_method=None)

        complete_waiver_in_person(db_session, user.id, "Jordan Rivera", True, now=NOW)
        result = check_in(db_session, user.id, now=NOW)

        assert result.is_checked_in is True
        assert result.waiver_method == "in_person"

    def test_minor_requires_present_guardian(self, db_session):
        user = make_user(db_session, is_minor=True, waiver_signed=False, waiver_method=None)

        with pytest.raises(InvalidInputError, match="guardian"):
            complete_waiver_in_person(db_session, user.id, "Kid", True, now=NOW)

    def test_minor_with_guardian(self, db_session):
        user = make_user(db_session, is_minor=True, waiver_signed=False, waiver_method=None)

        result = complete_waiver(
            db_session,
            user.id,
            InPersonCompletion(signer_name="Pat Lee", acknowledged=True, guardian_name="Pat Lee"),
            now=NOW,
        )

        assert result.waiver_signed is True
        assert result.parent_guardian_name == "Pat Lee"

    def test_acknowledgement_required(self, db_session):
        user = make_user(db_session, waiver_signed=False)

        with pytest.raises(InvalidInputError, match="acknowledged"):
            complete_waiver_in_person(db_session, user.id, "Jordan", False, now=NOW)

    def test_already_complete_is_noop(self, db_session):
        signed_at = utc(2024, 1, 1)
        user = make_user(db_session, waiver_signed_at=signed_at)

        result = complete_waiver_in_person(db_session, user.id, "Jordan", False, now=NOW)

        assert result.waiver_signed is True
        assert result.waiver_signed_at.replace(tzinfo=None) == signed_at.replace(tzinfo=None)


@pytest.mark.unit
class TestRemoteGuardianRequests:

    def test_create_request_sends_link(self, db_session):
        user = make_user(db_session, is_minor=True, waiver_signed=False)
        mailer = RecordingMailer()

        request, link, sent = create_waiver_request(db_session, user.id, "Parent@Example.org ", now=NOW, mailer=mailer)

        assert sent is True
        assert link.endswith(f"/waiver/{request.token}")
        assert request.parent_email == "parent@example.org"
        assert request.expires_at.replace(tzinfo=None) == (NOW + timedelta(days=7)).replace(tzinfo=None)
        assert mailer.sent[0][2]["url"] == link

    def test_request_kept_when_email_fails(self, db_session):
        user = make_user(db_session, is_minor=True, waiver_signed=False)

        request, _, sent = create_waiver_request(
            db_session, user.id, "parent@example.org", now=NOW, mailer=RecordingMailer(ok=False)
        )

        assert sent is False
        assert db_session.get(WaiverRequest, request.id) is not None

    def test_sign_completes_waiver_once(self, db_session):
        user = make_user(db_session, is_minor=True, waiver_signed=False)
        request, _, _ = create_waiver_request(db_session, user.id, "p@example.org", now=NOW, mailer=RecordingMailer())

        signed = sign_waiver_request(db_session, request.token, "Pat Lee", now=NOW + timedelta(hours=1))

        assert signed.waiver_signed is True
        assert signed.waiver_method == "remote_guardian"
        with pytest.raises(WaiverRequestExpiredError):
            sign_waiver_request(db_session, request.token, "Pat Lee", now=NOW + timedelta(hours=2))

    def test_expired_link(self, db_session):
        user = make_user(db_session, is_minor=True, waiver_signed=False)
        request, _, _ = create_waiver_request(db_session, user.id, "p@example.org", now=NOW, mailer=RecordingMailer())

        with pytest.raises(WaiverRequestExpiredError):
            get_waiver_request(db_session, request.token, now=NOW + timedelta(days=7, seconds=1))

    def test_unknown_token(self, db_session):
        with pytest.raises(WaiverRequestNotFoundError):
            get_waiver_request(db_session, "nope", now=NOW)

    def test_remote_completion_must_match_user(self, db_session):
        user = make_user(db_session, is_minor=True, waiver_signed=False)
        other = make_user(db_session, email="other@example.org")
        request, _, _ = create_waiver_request(db_session, user.id, "p@example.org", now=NOW, mailer=RecordingMailer())

        with pytest.raises(WaiverRequestNotFoundError):
            complete_waiver(
                db_session,
                other.id,
                RemoteGuardianCompletion(token=request.token, signature="Pat Lee"),
                now=NOW,
            )
