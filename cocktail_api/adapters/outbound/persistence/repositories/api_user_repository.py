# cocktail_api/adapters/outbound/persistence/repositories/api_user_repository.py (async version)

"""
Repository for client account operations.

This module implements the repository that performs database operations
related to API clients, implementing the IApiUserRepository interface.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from cocktail_api.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from cocktail_api.adapters.outbound.persistence.models import ApiUser
from cocktail_api.application.ports.outbound import IApiUserRepository
from cocktail_api.domain.models.api_user_domain_model import ApiUser as DomainApiUser
from cocktail_api.domain.models.client_identity import ClientIdentity
from cocktail_api.shared.utils.clock import utcnow
from cocktail_api.domain.exceptions import (
    ResourceNotFoundException,
    DatabaseOperationException,
)


class AsyncApiUserCRUD(AsyncCRUDBase[ApiUser], IApiUserRepository):
    """
    Async repository for the ApiUser entity.

    Returns domain models; ORM objects never leave this module.
    """

    async def get_by_client_id(self, db: AsyncSession, client_id: ClientIdentity) -> Optional[DomainApiUser]:
        """
        Find an account by client ID.

        Args:
            db: Async database session
            client_id: Client identifier

        Returns:
            Account found or None if it doesn't exist

        Raises:
            DatabaseOperationException: In case of database error
        """
        db_obj = await self.get(db, str(client_id))
        return self.to_domain(db_obj) if db_obj else None

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[DomainApiUser]:
        """
        Find an account by email.

        Args:
            db: Async database session
            email: Normalized email

        Returns:
            Account found or None if it doesn't exist
        """
        db_obj = await self.get_by_field(db, "email", email)
        return self.to_domain(db_obj) if db_obj else None

    async def add(self, db: AsyncSession, user: DomainApiUser) -> DomainApiUser:
        """
        Insert a new account inside the current transaction.

        Integrity errors (duplicate email) are raised on flush and left to
        the caller, which knows how to report them.
        """
        db_obj = ApiUser(
            client_id=str(user.client_id),
            name=user.name,
            email=user.email,
            explanation=user.explanation,
            validated=user.validated,
            enabled=user.enabled,
        )
        db.add(db_obj)
        await db.flush()
        self.logger.info(f"ApiUser created: {db_obj.client_id}")
        return self.to_domain(db_obj)

    async def set_validated(self, db: AsyncSession, client_id: ClientIdentity, validated: bool = True) -> None:
        await self._set_flag(db, client_id, validated=validated)

    async def set_enabled(self, db: AsyncSession, client_id: ClientIdentity, enabled: bool) -> None:
        await self._set_flag(db, client_id, enabled=enabled)

    async def _set_flag(self, db: AsyncSession, client_id: ClientIdentity, **values) -> None:
        db_obj = await self.get(db, str(client_id))
        if db_obj is None:
            raise ResourceNotFoundException(
                detail="Client not found",
                resource_id=str(client_id)
            )

        try:
            for field, value in values.items():
                setattr(db_obj, field, value)
            db_obj.updated_at = utcnow()
            await db.flush()
        except SQLAlchemyError as e:
            self.logger.error(f"Error updating ApiUser {client_id}: {str(e)}")
            raise DatabaseOperationException(
                detail="Error updating client account",
                original_error=e
            )

        self.logger.info(f"ApiUser {client_id} updated: {values}")

    def pending_approval_query(self):
        """Select accounts with a confirmed email that are waiting for approval."""
        return (
            select(ApiUser)
            .where(ApiUser.validated.is_(True), ApiUser.enabled.is_(False))
            .order_by(ApiUser.created_at.asc(), ApiUser.client_id.asc())
        )

    def to_domain(self, db_model: ApiUser) -> DomainApiUser:
        """
        Convert database model to domain model.

        Args:
            db_model: ApiUser ORM model

        Returns:
            Domain model of the account
        """
        return DomainApiUser(
            client_id=ClientIdentity(db_model.client_id),
            name=db_model.name,
            email=db_model.email,
            explanation=db_model.explanation,
            validated=bool(db_model.validated),
            enabled=bool(db_model.enabled),
            created_at=db_model.created_at,
            updated_at=db_model.updated_at,
        )


# Public instance to be used by use cases
api_user_repository = AsyncApiUserCRUD(ApiUser)
