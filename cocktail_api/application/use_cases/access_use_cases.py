# cocktail_api/application/use_cases/access_use_cases.py (async version)

"""
Access gate of the restricted endpoints.

The bearer string has the form ``<client_id>:<secret>``. The gate only reads
from the database, so it is safe to call concurrently.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from cocktail_api.adapters.outbound.persistence.repositories.api_user_repository import api_user_repository
from cocktail_api.adapters.outbound.persistence.repositories.credential_repository import credential_store
from cocktail_api.adapters.outbound.security.secret_codec import SecretCodec
from cocktail_api.application.ports.inbound import IAccessGate
from cocktail_api.application.ports.outbound import IApiUserRepository, ICredentialStore
from cocktail_api.domain.exceptions import (
    AccountDisabledException,
    ExpiredAccessException,
    InvalidIdException,
)
from cocktail_api.domain.models.client_identity import ClientIdentity

logger = logging.getLogger(__name__)

BEARER_SEPARATOR = ":"


class AsyncAccessGate(IAccessGate):
    """Decide whether a bearer string grants access to the API."""

    def __init__(
            self,
            db_session: AsyncSession,
            users: IApiUserRepository = api_user_repository,
            credentials: ICredentialStore = credential_store,
    ):
        self.db_session = db_session
        self.users = users
        self.credentials = credentials

    async def check_access(self, bearer: Optional[str]) -> ClientIdentity:
        """
        Check a bearer string.

        The checks run in a fixed order: format, existence, secret, account
        status and expiry.

        Returns:
            Identity of the caller

        Raises:
            InvalidIdException: Malformed bearer, unknown client or client without token
            InvalidAccessCredentialsException: Wrong secret
            AccountDisabledException: The client is not enabled
            ExpiredAccessException: The token is past its expiry date
        """
        if not bearer or BEARER_SEPARATOR not in bearer:
            raise InvalidIdException(detail="Malformed access token")

        raw_id, secret = bearer.split(BEARER_SEPARATOR, 1)
        client_id = ClientIdentity.parse(raw_id)

        user = await self.users.get_by_client_id(self.db_session, client_id)
        credential = await self.credentials.lookup_by_owner(self.db_session, client_id) if user else None
        if not user or not credential:
            logger.warning(f"Access attempt with an unknown client ID: {client_id}")
            raise InvalidIdException()

        await SecretCodec.verify(secret, credential.token_hash)

        if not user.enabled:
            logger.info(f"Access attempt of the disabled client {client_id}")
            raise AccountDisabledException()

        if credential.is_expired():
            logger.info(f"Access attempt of client {client_id} with an expired token")
            raise ExpiredAccessException()

        logger.debug(f"Access granted to client {client_id}")
        return client_id
