# cocktail_api/adapters/outbound/persistence/repositories/credential_repository.py (async version)

"""
Credential store.

Persists the argon2 hashes of the client secrets together with their
expiry date. Every write runs inside the session handed in by the caller
and is only flushed, so that pairing a credential write with an account
update ends up in a single transaction.
"""

from datetime import timedelta
from typing import Optional
from sqlalchemy import delete as sql_delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from cocktail_api.adapters.outbound.persistence.models.api_token_model import ApiToken
from cocktail_api.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from cocktail_api.application.ports.outbound import ICredentialStore
from cocktail_api.domain.exceptions import DatabaseOperationException
from cocktail_api.domain.models.api_token_domain_model import ApiToken as DomainApiToken
from cocktail_api.domain.models.client_identity import ClientIdentity
from cocktail_api.shared.utils.clock import utcnow


class AsyncCredentialStore(AsyncCRUDBase[ApiToken], ICredentialStore):
    """Repository of hashed client credentials."""

    async def store(
            self, db: AsyncSession, owner: ClientIdentity, token_hash: str, ttl: timedelta
    ) -> DomainApiToken:
        """
        Store a credential for a client.

        Args:
            db: Async database session (transaction owned by the caller)
            owner: Client the credential belongs to
            token_hash: Argon2 hash of the secret
            ttl: Validity of the credential counted from now

        Returns:
            The stored credential

        Raises:
            DatabaseOperationException: In case of database error
        """
        now = utcnow()
        db_obj = ApiToken(
            api_token=token_hash,
            client_id=str(owner),
            created=now,
            valid_until=now + ttl,
        )
        try:
            db.add(db_obj)
            await db.flush()
        except SQLAlchemyError as e:
            self.logger.error(f"Error storing credential for client {owner}: {str(e)}")
            raise DatabaseOperationException(
                detail="Error storing credential",
                original_error=e
            )

        self.logger.debug(f"Credential stored for client {owner}, valid until {db_obj.valid_until}")
        return self.to_domain(db_obj)

    async def lookup_by_owner(self, db: AsyncSession, owner: ClientIdentity) -> Optional[DomainApiToken]:
        """
        Get the most recent credential of a client, expired or not.

        Args:
            db: Async database session
            owner: Client identifier

        Returns:
            The credential or None if the client has none
        """
        try:
            query = (
                select(ApiToken)
                .where(ApiToken.client_id == str(owner))
                .order_by(ApiToken.created.desc())
                .limit(1)
            )
            result = await db.execute(query)
            db_obj = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching credential of client {owner}: {str(e)}")
            raise DatabaseOperationException(
                detail="Error fetching credential",
                original_error=e
            )

        return self.to_domain(db_obj) if db_obj else None

    async def delete(self, db: AsyncSession, token_hash: str) -> int:
        """
        Delete a credential by its hash.

        A missing row is not an error at this layer.

        Returns:
            Number of credentials deleted (0 or 1)
        """
        try:
            result = await db.execute(sql_delete(ApiToken).where(ApiToken.api_token == token_hash))
            await db.flush()
        except SQLAlchemyError as e:
            self.logger.error(f"Error deleting credential: {str(e)}")
            raise DatabaseOperationException(
                detail="Error deleting credential",
                original_error=e
            )

        if result.rowcount == 0:
            self.logger.warning("Attempt to delete a credential that is not stored")
        return result.rowcount

    async def replace(
            self, db: AsyncSession, owner: ClientIdentity, old_hash: str, new_hash: str, ttl: timedelta
    ) -> DomainApiToken:
        """
        Replace a superseded credential by a new one.

        The old row is removed before the new one is inserted, both in the
        caller's transaction, so two valid secrets never coexist once it
        commits.
        """
        await self.delete(db, old_hash)
        return await self.store(db, owner, new_hash, ttl)

    async def delete_for_owner(self, db: AsyncSession, owner: ClientIdentity) -> int:
        """
        Delete every credential of a client.

        Returns:
            Number of credentials deleted
        """
        try:
            result = await db.execute(sql_delete(ApiToken).where(ApiToken.client_id == str(owner)))
            await db.flush()
        except SQLAlchemyError as e:
            self.logger.error(f"Error deleting credentials of client {owner}: {str(e)}")
            raise DatabaseOperationException(
                detail="Error deleting credentials",
                original_error=e
            )
        return result.rowcount

    async def purge_expired(self, db: AsyncSession) -> int:
        """
        Remove expired credentials to keep the table size manageable.

        Returns:
            Number of records deleted
        """
        try:
            result = await db.execute(sql_delete(ApiToken).where(ApiToken.valid_until < utcnow()))
            await db.flush()
        except SQLAlchemyError as e:
            self.logger.error(f"Error cleaning up expired credentials: {str(e)}")
            raise DatabaseOperationException(
                detail="Error cleaning up expired credentials",
                original_error=e
            )
        return result.rowcount

    def to_domain(self, db_model: ApiToken) -> DomainApiToken:
        return DomainApiToken(
            client_id=ClientIdentity(db_model.client_id),
            token_hash=db_model.api_token,
            created=db_model.created,
            valid_until=db_model.valid_until,
        )


# Public instance to be used by use cases
credential_store = AsyncCredentialStore(ApiToken)
