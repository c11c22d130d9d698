"""Unit tests for user records and donations."""
from datetime import date, timedelta

import pytest

from volunteerhub.core.exceptions import InvalidInputError, UserNotFoundError
from volunteerhub.db.models import Donation, User, WaiverRequest
from volunteerhub.schemas.user import UserCreate, UserUpdate
from volunteerhub.services.donations import add_donation, list_user_donations
from volunteerhub.services.users import (
    create_user,
    delete_user,
    list_communication_opt_ins,
    list_users,
    search_users,
    update_user,
)
from tests.utils import make_user, utc

NOW = utc(2024, 3, 15, 12, 0)


@pytest.mark.unit
class TestCreateAndUpdate:

    def test_create_user_normalizes_fields(self, db_session):
        user = create_user(
            db_session,
            UserCreate(name="  Ana   Gomez ", email="ANA@Example.org", phone="(555) 111-2222"),
            now=NOW,
        )

        assert user.name == "Ana Gomez"
        assert user.email == "ana@example.org"
        assert user.city == ""
        assert user.waiver_signed is False

    def test_create_user_reports_all_errors(self, db_session):
        with pytest.raises(InvalidInputError) as exc_info:
            create_user(db_session, UserCreate(name="", email="bad", phone="12"), now=NOW)

        assert len(exc_info.value.errors) == 3

    def test_create_user_rejects_markup(self, db_session):
        with pytest.raises(InvalidInputError):
            create_user(
                db_session,
                UserCreate(name="Ana", email="ana@example.org", phone="5551112222", city="a < b"),
                now=NOW,
            )

    def test_update_does_not_touch_totals(self, db_session):
        user = make_user(db_session, total_hours=5.0, total_bags=2)

        updated = update_user(db_session, user.id, UserUpdate(city="Shelbyville"), now=NOW)

        assert updated.city == "Shelbyville"
        assert updated.total_hours == 5.0
        assert updated.total_bags == 2

    def test_update_birth_date_recomputes_minor(self, db_session):
        user = make_user(db_session)

        updated = update_user(db_session, user.id, UserUpdate(date_of_birth=date(2012, 1, 1)), now=NOW)

        assert updated.is_minor is True

    def test_update_validates_email(self, db_session):
        user = make_user(db_session)

        with pytest.raises(InvalidInputError, match="email"):
            update_user(db_session, user.id, UserUpdate(email="nope"), now=NOW)

    def test_update_rejects_clearing_required_fields(self, db_session):
        user = make_user(db_session, allow_communication=True)

        with pytest.raises(InvalidInputError, match="allow_communication"):
            update_user(db_session, user.id, UserUpdate(allow_communication=None), now=NOW)

        db_session.refresh(user)
        assert user.allow_communication is True

    def test_delete_cascades(self, db_session):
        user = make_user(db_session)
        add_donation(db_session, user.id, 2, now=NOW)
        db_session.add(WaiverRequest(
            token="t", user_id=user.id, parent_email="p@example.org",
            volunteer_name=user.name, expires_at=NOW + timedelta(days=7),
        ))
        db_session.commit()

        assert delete_user(db_session, user.id) is True
        assert db_session.query(User).count() == 0
        assert db_session.query(Donation).count() == 0
        assert db_session.query(WaiverRequest).count() == 0

    def test_delete_missing_user(self, db_session):
        assert delete_user(db_session, 42) is False


@pytest.mark.unit
class TestSearchAndList:

    def test_search_matches_any_contact_field(self, db_session):
        make_user(db_session, name="Alice Park", email="alice@example.org", phone="555-000-1111")
        make_user(db_session, name="Bob Stone", email="bob@example.org", organization="Rotary Club")

        assert [u.name for u in search_users(db_session, "alice")] == ["Alice Park"]
        assert [u.name for u in search_users(db_session, "ROTARY")] == ["Bob Stone"]
        assert [u.name for u in search_users(db_session, "000-1111")] == ["Alice Park"]
        assert search_users(db_session, "   ") == []

    def test_list_puts_checked_in_first_then_newest(self, db_session):
        old = make_user(db_session, name="Old", created_at=utc(2023, 1, 1))
        new = make_user(db_session, name="New", created_at=utc(2024, 3, 1))
        active = make_user(db_session, name="Active", created_at=utc(2022, 1, 1),
                           is_checked_in=True, last_check_in=NOW)

        assert [u.id for u in list_users(db_session, now=NOW)] == [active.id, new.id, old.id]

    def test_list_filters(self, db_session):
        make_user(db_session, name="Helper", total_hours=2.0)
        make_user(db_session, name="Donor", total_bags=3)
        make_user(db_session, name="Recent", created_at=NOW - timedelta(days=2))

        assert [u.name for u in list_users(db_session, "volunteers", now=NOW)] == ["Helper"]
        assert [u.name for u in list_users(db_session, "donors", now=NOW)] == ["Donor"]
        assert [u.name for u in list_users(db_session, "recent", now=NOW)] == ["Recent"]
        with pytest.raises(InvalidInputError):
            list_users(db_session, "everyone", now=NOW)

    def test_communication_opt_ins(self, db_session):
        make_user(db_session, name="Yes", allow_communication=True)
        make_user(db_session, name="No")

        assert [u.name for u in list_communication_opt_ins(db_session)] == ["Yes"]


@pytest.mark.unit
class TestDonations:

    def test_total_bags_is_sum_of_donations(self, db_session):
        user = make_user(db_session)

        add_donation(db_session, user.id, 3, now=NOW)
        add_donation(db_session, user.id, 4, now=NOW + timedelta(minutes=5))

        db_session.refresh(user)
        assert user.total_bags == 7
        assert [d.bag_count for d in list_user_donations(db_session, user.id)] == [4, 3]

    @pytest.mark.parametrize("bags", [0, -2, 1.5, True])
    def test_bag_count_must_be_positive_integer(self, db_session, bags):
        user = make_user(db_session)

        with pytest.raises(InvalidInputError):
            add_donation(db_session, user.id, bags, now=NOW)

    def test_unknown_donor(self, db_session):
        with pytest.raises(UserNotFoundError):
            add_donation(db_session, 999, 1, now=NOW)
