# cocktail_api/domain/models/__init__.py

from cocktail_api.domain.models.client_identity import ClientIdentity, ID_LENGTH
from cocktail_api.domain.models.api_user_domain_model import ApiUser
from cocktail_api.domain.models.api_token_domain_model import ApiToken

__all__ = [
    "ClientIdentity",
    "ID_LENGTH",
    "ApiUser",
    "ApiToken",
]
