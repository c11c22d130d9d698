"""Staff login, lockout and account management."""
import pytest

from tests.utils import STAFF_PASSWORD, make_staff


@pytest.mark.integration
class TestStaffLogin:

    def test_login_sets_cookie(self, client, db_session):
        make_staff(db_session)

        response = client.post(
            "/api/v1/auth/staff/login",
            json={"identifier": "coordinator", "password": STAFF_PASSWORD},
        )

        assert response.status_code == 200
        assert response.json()["requires_password_change"] is True
        assert "staff_token" in response.cookies
        assert client.get("/api/v1/auth/staff/me").json()["email"] == "coordinator@example.org"

    def test_login_with_email_any_case(self, client, db_session):
        make_staff(db_session)

        response = client.post(
            "/api/v1/auth/staff/login",
            json={"identifier": "Coordinator@Example.org", "password": STAFF_PASSWORD},
        )

        assert response.status_code == 200

    def test_wrong_password(self, client, db_session):
        make_staff(db_session)

        response = client.post(
            "/api/v1/auth/staff/login",
            json={"identifier": "coordinator", "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert "staff_token" not in response.cookies

    def test_lockout_after_five_failures(self, client, db_session):
        make_staff(db_session)
        bad = {"identifier": "coordinator", "password": "wrong-password"}

        for _ in range(5):
            assert client.post("/api/v1/auth/staff/login", json=bad).status_code == 401

        locked = client.post(
            "/api/v1/auth/staff/login",
            json={"identifier": "coordinator", "password": STAFF_PASSWORD},
        )

        assert locked.status_code == 429
        assert int(locked.headers["retry-after"]) > 0

    def test_me_requires_cookie(self, client):
        assert client.get("/api/v1/auth/staff/me").status_code == 401

    def test_logout_clears_cookie(self, staff_client):
        response = staff_client.post("/api/v1/auth/staff/logout")

        assert response.status_code == 200
        assert "staff_token=" in response.headers["set-cookie"]


@pytest.mark.integration
class TestStaffAccounts:

    def test_change_password(self, client, db_session):
        make_staff(db_session)
        client.post("/api/v1/auth/staff/login", json={"identifier": "coordinator", "password": STAFF_PASSWORD})

        changed = client.post("/api/v1/auth/staff/password", json={"new_password": "a-much-longer-secret"})
        client.post("/api/v1/auth/staff/logout")
        relogin = client.post(
            "/api/v1/auth/staff/login",
            json={"identifier": "coordinator", "password": "a-much-longer-secret"},
        )

        assert changed.status_code == 200
        assert changed.json()["requires_password_change"] is False
        assert relogin.status_code == 200

    def test_short_password_rejected(self, staff_client):
        response = staff_client.post("/api/v1/auth/staff/password", json={"new_password": "short"})

        assert response.status_code == 422

    def test_create_account(self, staff_client):
        response = staff_client.post(
            "/api/v1/auth/staff/accounts",
            json={"email": "sam@example.org", "display_name": "Sam Lee", "username": "sam.lee"},
        )

        assert response.status_code == 201
        assert response.json()["role"] == "staff"
        assert response.json()["invite_sent"] is True

    def test_duplicate_account(self, staff_client):
        response = staff_client.post(
            "/api/v1/auth/staff/accounts",
            json={"email": "coordinator@example.org", "display_name": "Copy", "username": "other"},
        )

        assert response.status_code == 400
