# cocktail_api/shared/utils/email_validation.py
"""
Email helpers.

Format validation is done by pydantic's EmailStr (email-validator). Here the
address is only brought to the canonical form used for lookups.
"""


def normalize_email(email: str) -> str:
    """
    Normalize an email address by removing surrounding spaces and converting it to lowercase.

    Args:
        email: The email address to be normalized

    Returns:
        Normalized email
    """
    return email.strip().lower()
