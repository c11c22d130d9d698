"""Test rate limiting functionality."""
import pytest

from tests.utils import make_staff


@pytest.mark.integration
@pytest.mark.rate_limit
class TestRateLimiting:
    """Test rate limiting on public endpoints."""

    def test_public_waiver_rate_limit(self, client):
        """Public waiver pages allow 30 requests per minute."""
        for i in range(30):
            response = client.get("/api/v1/waivers/unknown-token")
            assert response.status_code == 404, f"Request {i+1} should get through under 30/min limit"

        response = client.get("/api/v1/waivers/unknown-token")
        assert response.status_code == 429, "Request 31 should be rate limited with 429 status"

    def test_staff_login_rate_limit(self, client, db_session):
        """Login allows 20 requests per minute regardless of identifier."""
        make_staff(db_session)

        for i in range(20):
            response = client.post(
                "/api/v1/auth/staff/login",
                json={"identifier": f"nobody-{i}", "password": "wrong-password"},
            )
            assert response.status_code == 401, f"Request {i+1} should get through under 20/min limit"

        response = client.post(
            "/api/v1/auth/staff/login",
            json={"identifier": "nobody-20", "password": "wrong-password"},
        )
        assert response.status_code == 429
