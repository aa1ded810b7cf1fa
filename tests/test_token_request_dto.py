import pytest

from cocktail_api.application.dtos.token_request_dto import (
    EMAIL_MAX_LENGTH,
    EXPLANATION_MIN_LENGTH,
    NAME_MAX_LENGTH,
    TokenRequest,
)
from cocktail_api.domain.exceptions import InvalidFormDataException
from tests.helpers import VALID_EXPLANATION


class TestTokenRequestForm:

    def test_valid_form(self):
        request = TokenRequest.from_form("Ada", "ada@example.com", VALID_EXPLANATION)
        assert request.name == "Ada"
        assert request.email == "ada@example.com"
        assert request.explanation == VALID_EXPLANATION

    def test_empty_name_is_optional(self):
        request = TokenRequest.from_form("   ", "ada@example.com", VALID_EXPLANATION)
        assert request.name is None

    def test_explanation_is_stripped(self):
        request = TokenRequest.from_form("", "ada@example.com", f"  {VALID_EXPLANATION}  ")
        assert request.explanation == VALID_EXPLANATION

    def test_short_explanation(self):
        with pytest.raises(InvalidFormDataException) as exc_info:
            TokenRequest.from_form("Ada", "ada@example.com", "x" * (EXPLANATION_MIN_LENGTH - 1))
        assert exc_info.value.internal_code == "INVALID_FORM_DATA"
        assert set(exc_info.value.details) == {"explanation"}

    def test_long_name(self):
        with pytest.raises(InvalidFormDataException) as exc_info:
            TokenRequest.from_form("n" * (NAME_MAX_LENGTH + 1), "ada@example.com", VALID_EXPLANATION)
        assert set(exc_info.value.details) == {"name"}

    def test_long_email(self):
        email = "a" * EMAIL_MAX_LENGTH + "@example.com"
        with pytest.raises(InvalidFormDataException) as exc_info:
            TokenRequest.from_form("Ada", email, VALID_EXPLANATION)
        assert set(exc_info.value.details) == {"email"}

    def test_every_invalid_field_is_reported(self):
        with pytest.raises(InvalidFormDataException) as exc_info:
            TokenRequest.from_form("", "not-an-email", "short")
        assert set(exc_info.value.details) == {"email", "explanation"}
