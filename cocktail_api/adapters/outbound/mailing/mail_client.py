# cocktail_api/adapters/outbound/mailing/mail_client.py (async version)

"""
Email clients.

MailjetMailClient talks to the Mailjet v3.1 send API. LoggingMailClient is
used when no Mailjet credentials are configured (development and tests).
"""

import logging
from typing import Optional

import httpx

from cocktail_api.adapters.configuration.config import settings
from cocktail_api.application.ports.outbound import IMailClient
from cocktail_api.domain.exceptions import EmailClientException

logger = logging.getLogger(__name__)

MAILJET_TIMEOUT_S = 10.0


class MailjetMailClient(IMailClient):
    """Send plain text messages through Mailjet."""

    def __init__(
            self,
            api_user: str,
            api_key: str,
            sender_address: str,
            sender_name: Optional[str] = None,
            api_url: str = settings.MAILJET_API_URL,
            transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_user = api_user
        self.api_key = api_key
        self.sender_address = sender_address
        self.sender_name = sender_name
        self.api_url = api_url
        self.transport = transport

    def _build_payload(self, to: str, subject: str, body: str) -> dict:
        sender = {"Email": self.sender_address}
        if self.sender_name:
            sender["Name"] = self.sender_name

        return {
            "SandboxMode": False,
            "Messages": [
                {
                    "From": sender,
                    "To": [{"Email": to}],
                    "Subject": subject,
                    "TextPart": body,
                }
            ],
        }

    async def send(self, to: str, subject: str, body: str) -> None:
        """
        Send a message.

        Raises:
            EmailClientException: If Mailjet is unreachable or rejects the message
        """
        payload = self._build_payload(to, subject, body)
        try:
            async with httpx.AsyncClient(
                    timeout=MAILJET_TIMEOUT_S,
                    auth=(self.api_user, self.api_key),
                    transport=self.transport,
            ) as client:
                resp = await client.post(self.api_url, json=payload)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to send email to {to} (HTTP {e.response.status_code})")
            raise EmailClientException(
                detail=f"The email service answered with status {e.response.status_code}"
            )
        except httpx.HTTPError as e:
            logger.error(f"Failed to send email to {to} ({type(e).__name__})")
            raise EmailClientException(original_error=e)

        logger.info(f"Email sent to {to}")


class LoggingMailClient(IMailClient):
    """
    Mail client that only logs.

    The message body holds secrets, so only the recipient and subject are
    written to the log.
    """

    async def send(self, to: str, subject: str, body: str) -> None:
        logger.info(f"Email not delivered (no mail service configured): to={to} subject={subject!r}")


def get_mail_client() -> IMailClient:
    """Build the mail client matching the current settings."""
    if settings.mailjet_enabled:
        return MailjetMailClient(
            api_user=settings.MAILJET_API_USER,
            api_key=settings.MAILJET_API_KEY,
            sender_address=settings.EMAIL_SENDER_ADDRESS,
            sender_name=settings.EMAIL_SENDER_NAME,
            api_url=settings.MAILJET_API_URL,
        )
    return LoggingMailClient()
