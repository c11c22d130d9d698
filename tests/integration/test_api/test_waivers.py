"""Remote guardian waiver links."""
from datetime import timedelta

import pytest

from volunteerhub.core.utils import utcnow
from volunteerhub.db.models import WaiverRequest
from tests.utils import make_user


@pytest.fixture
def minor(db_session):
    return make_user(
        db_session,
        name="Riley Park",
        is_minor=True,
        waiver_signed=False,
        waiver_method=None,
        parent_guardian_name="Dana Park",
    )


@pytest.mark.integration
class TestGuardianLink:

    def test_full_flow(self, staff_client, minor):
        created = staff_client.post(
            "/api/v1/waivers/requests",
            json={"user_id": minor.id, "parent_email": "dana@example.org"},
        )
        assert created.status_code == 201
        link = created.json()["waiver_link"]
        token = link.rsplit("/", 1)[-1]
        assert created.json()["email_sent"] is True

        view = staff_client.get(f"/api/v1/waivers/{token}").json()
        assert view["status"] == "pending"
        assert view["volunteer_name"] == "Riley Park"

        signed = staff_client.post(f"/api/v1/waivers/{token}/sign", json={"signature": "Dana Park"})
        assert signed.status_code == 200

        state = staff_client.get(f"/api/v1/volunteers/{minor.id}/waiver").json()
        assert state["state"] == "waiver_complete"

        again = staff_client.post(f"/api/v1/waivers/{token}/sign", json={"signature": "Dana Park"})
        assert again.status_code == 410
        assert staff_client.get(f"/api/v1/waivers/{token}").json()["status"] == "expired"

    def test_expired_link(self, staff_client, db_session, minor):
        staff_client.post(
            "/api/v1/waivers/requests",
            json={"user_id": minor.id, "parent_email": "dana@example.org"},
        )
        request = db_session.query(WaiverRequest).one()
        request.expires_at = utcnow() - timedelta(minutes=1)
        db_session.commit()

        response = staff_client.post(f"/api/v1/waivers/{request.token}/sign", json={"signature": "Dana Park"})

        assert response.status_code == 410

    def test_unknown_token(self, client):
        assert client.get("/api/v1/waivers/not-a-token").status_code == 404

    def test_requests_need_staff(self, client, minor):
        response = client.post(
            "/api/v1/waivers/requests",
            json={"user_id": minor.id, "parent_email": "dana@example.org"},
        )

        assert response.status_code == 401
