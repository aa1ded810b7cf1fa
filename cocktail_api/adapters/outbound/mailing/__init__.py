# cocktail_api/adapters/outbound/mailing/__init__.py

from cocktail_api.adapters.outbound.mailing.mail_client import (
    MailjetMailClient,
    LoggingMailClient,
    get_mail_client,
)

__all__ = [
    "MailjetMailClient",
    "LoggingMailClient",
    "get_mail_client",
]
