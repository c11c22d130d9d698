"""Unit tests for sanitization, security helpers and email rendering."""
from datetime import timedelta
from unittest.mock import Mock, patch

import jwt
import pytest
import requests
from fastapi import HTTPException

from volunteerhub.core import config
from volunteerhub.core.mail import render_template, send_transactional_email
from volunteerhub.core.sanitization import (
    sanitize_signature,
    sanitize_text,
    validate_time_of_day,
    validate_user_input,
)
from volunteerhub.core.security import (
    create_access_token,
    decode_access_token,
    generate_waiver_token,
    get_password_hash,
    verify_password,
    verify_staff_token,
)


@pytest.mark.unit
class TestSanitization:

    def test_none_becomes_empty(self):
        assert sanitize_text(None) == ""

    def test_tags_stripped_and_whitespace_collapsed(self):
        assert sanitize_text("  <b>Food</b>   Bank ") == "Food Bank"

    def test_leftover_angle_brackets_rejected(self):
        with pytest.raises(ValueError):
            sanitize_text("<script")

    def test_max_length(self):
        with pytest.raises(ValueError):
            sanitize_text("x" * 11, max_length=10)

    def test_valid_contact(self):
        assert validate_user_input("Ana", "ana@example.org", "+1 (555) 123-4567") == []

    def test_invalid_contact_reports_each_field(self):
        errors = validate_user_input(" ", "ana@", "123")
        assert errors == ["Name must be 1-100 characters", "Invalid email format", "Invalid phone format"]

    @pytest.mark.parametrize("value", ["18:00", "00:00", "23:59"])
    def test_time_of_day_ok(self, value):
        assert validate_time_of_day(value) == value

    @pytest.mark.parametrize("value", ["6:00", "24:00", "18:60", "6pm"])
    def test_time_of_day_rejected(self, value):
        with pytest.raises(ValueError):
            validate_time_of_day(value)

    def test_empty_signature(self):
        with pytest.raises(ValueError):
            sanitize_signature("   ")


@pytest.mark.unit
class TestSecurity:

    def test_password_round_trip(self):
        hashed = get_password_hash("s3cret-pass")
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("wrong", hashed)
        assert not verify_password("s3cret-pass", "not-a-hash")

    def test_waiver_tokens_are_unique(self):
        assert generate_waiver_token() != generate_waiver_token()

    def test_token_payload(self):
        token = create_access_token({"sub": "7", "role": "staff"})
        assert decode_access_token(token)["sub"] == "7"

    def test_expired_token_rejected(self):
        token = create_access_token({"sub": "7", "role": "staff"}, expires_delta=timedelta(seconds=-1))
        request = Mock(cookies={"staff_token": token})

        with pytest.raises(HTTPException) as exc_info:
            verify_staff_token(request)
        assert exc_info.value.status_code == 401

    def test_missing_cookie(self):
        with pytest.raises(HTTPException) as exc_info:
            verify_staff_token(Mock(cookies={}))
        assert exc_info.value.status_code == 401

    def test_token_signed_with_other_key(self):
        token = jwt.encode({"sub": "1", "role": "admin"}, "other-key", algorithm="HS256")

        with pytest.raises(HTTPException):
            verify_staff_token(Mock(cookies={"staff_token": token}))


@pytest.mark.unit
class TestMail:

    def test_invite_template_includes_credentials(self):
        subject, body = render_template("invite", {"username": "casey", "temporary_password": "Tmp123"})

        assert "invited" in subject
        assert "casey" in body and "Tmp123" in body

    def test_generic_template_escapes_message(self):
        _, body = render_template("generic", {"message": "<b>hi</b>", "url": "https://x.test/a"})

        assert "&lt;b&gt;" in body
        assert "https://x.test/a" in body

    def test_unknown_template(self):
        with pytest.raises(ValueError):
            render_template("newsletter", {})

    def test_test_environment_does_not_send(self):
        with patch("volunteerhub.core.mail.requests.post") as post:
            result = send_transactional_email("a@example.org", "magic_link", {"url": "https://x.test"})

        assert result.ok is True
        post.assert_not_called()

    def test_transport_failure_is_reported(self, monkeypatch):
        monkeypatch.setattr(config.settings, "ENVIRONMENT", "production")
        with patch(
            "volunteerhub.core.mail.requests.post",
            side_effect=requests.ConnectionError("unreachable"),
        ):
            result = send_transactional_email("a@example.org", "recovery", {"url": "https://x.test"})

        assert result.ok is False
        assert "unreachable" in result.error

    def test_payload_shape(self, monkeypatch):
        monkeypatch.setattr(config.settings, "ENVIRONMENT", "production")
        response = Mock()
        response.raise_for_status.return_value = None
        with patch("volunteerhub.core.mail.requests.post", return_value=response) as post:
            result = send_transactional_email("a@example.org", "confirmation", {"url": "https://x.test"})

        assert result.ok is True
        payload = post.call_args.kwargs["json"]
        assert payload["personalizations"] == [{"to": [{"email": "a@example.org"}]}]
        assert payload["content"][0]["type"] == "text/html"
