"""Email sending via Resend API.

Simple HTTP POST to Resend. Messages are short HTML bodies built by the
compose_* helpers; there is no template engine.

Delivery failures are not swallowed: EmailSender.send raises
MailDeliveryError so the request that triggered the email fails and its
transaction rolls back. Nothing is retried.
"""

import logging
from html import escape

import httpx

from ucp.core.config import settings
from ucp.core.errors import MailDeliveryError

logger = logging.getLogger(__name__)

_RESEND_API_URL = "https://api.resend.com/emails"
_RESEND_TIMEOUT = 10.0


class EmailSender:
    """Sends HTML email through the Resend HTTP API.

    Args:
        api_key: Resend API key. Defaults to settings.resend_api_key.
        sender: From address. Defaults to settings.email_from.
        transport: Optional httpx transport (tests inject a MockTransport).
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        sender: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or settings.resend_api_key.get_secret_value()
        self._sender = sender or settings.email_from
        self._transport = transport

    async def send(self, *, to_email: str, subject: str, html: str) -> None:
        """Deliver one message.

        Args:
            to_email: Recipient address.
            subject: Subject line.
            html: HTML body.

        Raises:
            MailDeliveryError: On transport errors or a non-2xx response.
        """
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.post(
                    _RESEND_API_URL,
                    headers={"Authorization": f"Bearer {self._api_key}"},
                    json={
                        "from": self._sender,
                        "to": to_email,
                        "subject": subject,
                        "html": html,
                    },
                    timeout=_RESEND_TIMEOUT,
                )
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Failed to send email: %s", subject, exc_info=True)
            raise MailDeliveryError() from exc


def _wrap(name: str, *paragraphs: str) -> str:
    body = "".join(f"<p>{p}</p>" for p in paragraphs)
    return f"<p>Hi <b>{escape(name)}</b>,</p>{body}"


def compose_password_reset(*, name: str, code: str) -> tuple[str, str]:
    """Subject and body for a forgot-password email."""
    link = f"{settings.frontend_url}/reset/password/{code}"
    return "Forgot Password", _wrap(
        name,
        "To choose a new password, please click the link below:",
        f'<a href="{escape(link)}">Change New Password</a>',
    )


def compose_email_verification(*, name: str, code: str) -> tuple[str, str]:
    """Subject and body for an email verification email."""
    link = f"{settings.frontend_url}/verify/email/{code}"
    return "Email Verification", _wrap(
        name,
        "To verify your email address, please click the link below:",
        f'<a href="{escape(link)}">Verify Email</a>',
    )


def compose_password_changed(*, name: str) -> tuple[str, str]:
    """Subject and body for the password-changed notice."""
    return "Password Changed", _wrap(
        name,
        "The password of your account has just been changed.",
        "If this wasn't you, reset your password immediately.",
    )


def compose_email_changed(*, name: str) -> tuple[str, str]:
    """Subject and body sent to the new address after an email change."""
    return "Email Changed", _wrap(
        name,
        "This address is now linked to your account.",
        "Please verify it from the control panel.",
    )


def compose_application_reviewed(
    *, name: str, approved: bool, reason: str
) -> tuple[str, str]:
    """Subject and body telling an applicant the review outcome."""
    outcome = "approved" if approved else "denied"
    return f"Application {outcome.capitalize()}", _wrap(
        name,
        f"Your whitelist application has been <b>{outcome}</b>.",
        f"Reason: {escape(reason)}",
    )
