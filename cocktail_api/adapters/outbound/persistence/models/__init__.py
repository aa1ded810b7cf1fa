# cocktail_api/adapters/outbound/persistence/models/__init__.py

"""
Data models module.

This module exports all SQLAlchemy models of the system, so that importing
the package registers every table in Base.metadata.
"""

from cocktail_api.adapters.outbound.persistence.models.base_model import Base
from cocktail_api.adapters.outbound.persistence.models.api_user_model import ApiUser
from cocktail_api.adapters.outbound.persistence.models.api_token_model import ApiToken

__all__ = [
    "Base",
    "ApiUser",
    "ApiToken",
]
