# cocktail_api/adapters/outbound/persistence/repositories/__init__.py (async version)

"""
Repositories module.

This module exports the repository classes and their singleton instances,
implementing the Repository pattern.
"""

from cocktail_api.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from cocktail_api.adapters.outbound.persistence.repositories.api_user_repository import (
    AsyncApiUserCRUD,
    api_user_repository,
)
from cocktail_api.adapters.outbound.persistence.repositories.credential_repository import (
    AsyncCredentialStore,
    credential_store,
)

__all__ = [
    # Classes
    "AsyncCRUDBase",
    "AsyncApiUserCRUD",
    "AsyncCredentialStore",

    # Instances
    "api_user_repository",
    "credential_store",
]
