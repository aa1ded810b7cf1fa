# cocktail_api/adapters/outbound/mailing/messages.py

"""Text of the emails sent during the registration workflow."""

CONFIRMATION_SUBJECT = "Verify your email"

CONFIRMATION_BODY = """Hi,

somebody (hopefully you) requested an access token for the Cocktail API
using this email address.

Please confirm your email by following this link:

{confirmation_link}

The link is valid for {valid_days} day(s). Once the email is confirmed, the
request will be evaluated by an administrator and you will receive news about
the following steps.

If you did not request a token, you can ignore this message.
"""

ADMIN_NOTIFICATION_SUBJECT = "New client of the API validated"

ADMIN_NOTIFICATION_BODY = (
    "A new client ({client_id}) has validated the account. "
    "Proceed to the evaluation of the request."
)


def confirmation_email(confirmation_link: str, valid_days: int) -> tuple:
    """Return (subject, body) of the email confirmation message."""
    return CONFIRMATION_SUBJECT, CONFIRMATION_BODY.format(
        confirmation_link=confirmation_link,
        valid_days=valid_days,
    )


def admin_notification(client_id) -> tuple:
    """Return (subject, body) of the message sent to the operator."""
    return ADMIN_NOTIFICATION_SUBJECT, ADMIN_NOTIFICATION_BODY.format(client_id=client_id)
