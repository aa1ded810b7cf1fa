# cocktail_api/application/dtos/__init__.py

from cocktail_api.application.dtos.base_dto import CustomBaseModel
from cocktail_api.application.dtos.token_request_dto import TokenRequest, ValidatedToken
from cocktail_api.application.dtos.api_user_dto import ApiUserOutput, ClientStatusOutput, RevocationOutput

__all__ = [
    "CustomBaseModel",
    "TokenRequest",
    "ValidatedToken",
    "ApiUserOutput",
    "ClientStatusOutput",
    "RevocationOutput",
]
