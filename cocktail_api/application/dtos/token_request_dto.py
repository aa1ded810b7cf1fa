# cocktail_api/application/dtos/token_request_dto.py

"""
Schemas for the token request workflow.

These DTOs validate the data sent through the token request form and
describe the values handed back to the client.
"""

from typing import Optional

from pydantic import EmailStr, Field, ValidationError, field_validator

from cocktail_api.application.dtos.base_dto import CustomBaseModel
from cocktail_api.domain.exceptions import InvalidFormDataException

NAME_MAX_LENGTH = 40
EMAIL_MAX_LENGTH = 80
EXPLANATION_MIN_LENGTH = 20
EXPLANATION_MAX_LENGTH = 400


class TokenRequest(CustomBaseModel):
    """
    Data of a request for an API token.

    The explanation tells the administrators what the token will be used for.
    """
    name: Optional[str] = Field(None, max_length=NAME_MAX_LENGTH, description="Name of the requester")
    email: EmailStr = Field(..., description="Contact email")
    explanation: str = Field(
        ...,
        min_length=EXPLANATION_MIN_LENGTH,
        max_length=EXPLANATION_MAX_LENGTH,
        description="Intended use of the API",
    )

    @field_validator("name", mode="before")
    def empty_name_is_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("email", mode="before")
    def check_email_length(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if len(v) > EMAIL_MAX_LENGTH:
                raise ValueError(f"must have at most {EMAIL_MAX_LENGTH} characters")
        return v

    @field_validator("explanation", mode="before")
    def strip_explanation(cls, v):
        return v.strip() if isinstance(v, str) else v

    @classmethod
    def from_form(cls, name: str, email: str, explanation: str) -> "TokenRequest":
        """
        Build a request from raw form fields.

        Raises:
            InvalidFormDataException: With the error of each invalid field
        """
        try:
            return cls(name=name, email=email, explanation=explanation)
        except ValidationError as e:
            fields = {}
            for error in e.errors():
                field = str(error["loc"][0]) if error.get("loc") else "form"
                fields.setdefault(field, error["msg"])
            raise InvalidFormDataException(fields=fields)


class ValidatedToken(CustomBaseModel):
    """Bearer string handed out once the email is confirmed."""
    client_id: str = Field(..., description="Client identifier")
    token: str = Field(..., description="Bearer string: '<client_id>:<secret>'")
