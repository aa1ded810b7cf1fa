# cocktail_api/application/use_cases/client_admin_use_cases.py (async version)

"""
Service for the administration of API clients.

Enabling a client is the last step of the registration workflow and can only
be performed by an administrator.
"""

import logging

from fastapi_pagination import Params
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from cocktail_api.adapters.outbound.persistence.repositories.api_user_repository import (
    AsyncApiUserCRUD,
    api_user_repository,
)
from cocktail_api.adapters.outbound.persistence.repositories.credential_repository import (
    AsyncCredentialStore,
    credential_store,
)
from cocktail_api.application.ports.inbound import IClientAdminUseCase
from cocktail_api.domain.exceptions import (
    AccountNotValidatedException,
    DatabaseOperationException,
    ResourceNotFoundException,
)
from cocktail_api.domain.models.api_user_domain_model import ApiUser
from cocktail_api.domain.models.client_identity import ClientIdentity

logger = logging.getLogger(__name__)


class AsyncClientAdminService(IClientAdminUseCase):
    """
    Service for administrative operations on clients.

    Each operation runs in its own transaction.
    """

    def __init__(
            self,
            db_session: AsyncSession,
            users: AsyncApiUserCRUD = api_user_repository,
            credentials: AsyncCredentialStore = credential_store,
    ):
        self.db_session = db_session
        self.users = users
        self.credentials = credentials

    async def _get_client(self, client_id: str) -> ApiUser:
        identity = ClientIdentity.parse(client_id)
        user = await self.users.get_by_client_id(self.db_session, identity)
        if not user:
            logger.warning(f"Client not found: ID {client_id}")
            raise ResourceNotFoundException(detail="Client not found", resource_id=client_id)
        return user

    async def _commit(self, action: str, client_id) -> None:
        try:
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(f"Database error trying to {action} client {client_id}: {e}")
            raise DatabaseOperationException(detail=f"Error trying to {action} client", original_error=e)

    async def enable_client(self, client_id: str) -> ApiUser:
        """
        Enable a client whose email has been validated.

        Raises:
            InvalidIdException: If the client ID is malformed
            ResourceNotFoundException: If the client does not exist
            AccountNotValidatedException: If the email is not validated yet
        """
        user = await self._get_client(client_id)
        if not user.validated:
            logger.warning(f"Attempt to enable client {client_id} before email validation")
            raise AccountNotValidatedException(resource_id=client_id)

        try:
            await self.users.set_enabled(self.db_session, user.client_id, True)
        except DatabaseOperationException:
            await self.db_session.rollback()
            raise
        await self._commit("enable", client_id)

        logger.info(f"Client {client_id} enabled")
        return await self._get_client(client_id)

    async def disable_client(self, client_id: str) -> ApiUser:
        """
        Disable a client. Its tokens are kept, so it can be enabled again.

        Raises:
            ResourceNotFoundException: If the client does not exist
        """
        user = await self._get_client(client_id)

        try:
            await self.users.set_enabled(self.db_session, user.client_id, False)
        except DatabaseOperationException:
            await self.db_session.rollback()
            raise
        await self._commit("disable", client_id)

        logger.info(f"Client {client_id} disabled")
        return await self._get_client(client_id)

    async def revoke_credentials(self, client_id: str) -> int:
        """
        Delete every token of a client.

        Returns:
            Number of tokens deleted

        Raises:
            ResourceNotFoundException: If the client does not exist
        """
        user = await self._get_client(client_id)

        try:
            revoked = await self.credentials.delete_for_owner(self.db_session, user.client_id)
        except DatabaseOperationException:
            await self.db_session.rollback()
            raise
        await self._commit("revoke the tokens of", client_id)

        logger.info(f"{revoked} token(s) of client {client_id} revoked")
        return revoked

    async def list_pending(self, params: Params):
        """
        Paginated list of clients with a validated email that wait for approval,
        oldest first.
        """
        try:
            return await paginate(self.db_session, self.users.pending_approval_query(), params)
        except SQLAlchemyError as e:
            logger.error(f"Error listing pending clients: {e}")
            raise DatabaseOperationException(detail="Error listing pending clients", original_error=e)
