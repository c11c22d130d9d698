"""Transactional email delivery."""
import html
from typing import Optional

import requests
from pydantic import BaseModel

from volunteerhub.core import config
from volunteerhub.core.logging_config import get_logger

logger = get_logger(__name__)

TEMPLATE_KINDS = ("confirmation", "recovery", "magic_link", "invite", "generic")

_BUTTON = (
    '<a href="{url}" style="background: {color}; color: white; padding: 12px 24px; '
    'text-decoration: none; border-radius: 6px;">{label}</a>'
    "<p>If the button doesn't work, copy and paste this link: {url}</p>"
)


class MailResult(BaseModel):
    ok: bool
    error: Optional[str] = None


def render_template(template_kind: str, template_data: dict) -> tuple:
    """Return (subject, html body) for a template kind."""
    app_name = config.settings.MAIL_FROM_NAME
    url = html.escape(template_data.get("url") or "", quote=True)

    if template_kind == "confirmation":
        subject = f"Welcome to {app_name} - Confirm Your Account"
        body = f"<h1>Welcome to {app_name}!</h1><p>Please click the link below to confirm your account:</p>"
        body += _BUTTON.format(url=url, color="#4F46E5", label="Confirm Account")
    elif template_kind == "recovery":
        subject = f"Reset Your {app_name} Password"
        body = "<h1>Reset Your Password</h1><p>Click the link below to reset your password:</p>"
        body += _BUTTON.format(url=url, color="#DC2626", label="Reset Password")
        body += "<p>If you didn't request this, please ignore this email.</p>"
    elif template_kind == "magic_link":
        subject = f"Your {app_name} Login Link"
        body = f"<h1>Login to {app_name}</h1><p>Click the link below to log in:</p>"
        body += _BUTTON.format(url=url, color="#059669", label="Log In")
    elif template_kind == "invite":
        subject = f"You've been invited to {app_name}"
        body = f"<h1>You're Invited to {app_name}!</h1>"
        body += "<p>A staff account has been created for you.</p>"
        if template_data.get("username"):
            body += f"<p>Username: {html.escape(template_data['username'])}</p>"
        if template_data.get("temporary_password"):
            body += (
                f"<p>Temporary password: {html.escape(template_data['temporary_password'])}</p>"
                "<p>You will be asked to choose a new password when you first log in.</p>"
            )
        if url:
            body += _BUTTON.format(url=url, color="#7C3AED", label="Accept Invitation")
    elif template_kind == "generic":
        subject = template_data.get("subject") or f"{app_name} Notification"
        message = html.escape(template_data.get("message") or f"You have a notification from {app_name}.")
        body = f"<h1>{app_name}</h1><p>{message}</p>"
        if url:
            body += f'<a href="{url}">{html.escape(template_data.get("link_text") or "Click here to continue")}</a>'
    else:
        raise ValueError(f"Unknown email template: {template_kind}")

    return subject, body


def send_transactional_email(to_address: str, template_kind: str, template_data: dict) -> MailResult:
    """
    Send one templated email.

    Delivery problems are reported in the result rather than raised; the
    caller decides whether a failed email should fail its operation.
    """
    subject, body = render_template(template_kind, template_data)
    logger.info("email_sending", template=template_kind, to=to_address)

    if config.settings.ENVIRONMENT == "test":
        return MailResult(ok=True)

    payload = {
        "personalizations": [{"to": [{"email": to_address}]}],
        "from": {
            "email": config.settings.MAIL_FROM_ADDRESS,
            "name": config.settings.MAIL_FROM_NAME,
        },
        "subject": subject,
        "content": [{"type": "text/html", "value": body}],
    }

    try:
        response = requests.post(
            config.settings.MAIL_API_URL,
            json=payload,
            timeout=config.settings.MAIL_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error("email_failed", template=template_kind, to=to_address, error=str(e))
        return MailResult(ok=False, error=str(e))

    logger.info("email_sent", template=template_kind, to=to_address)
    return MailResult(ok=True)
