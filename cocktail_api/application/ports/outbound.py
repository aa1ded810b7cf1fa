# cocktail_api/application/ports/outbound.py

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from cocktail_api.domain.models.api_token_domain_model import ApiToken
from cocktail_api.domain.models.api_user_domain_model import ApiUser
from cocktail_api.domain.models.client_identity import ClientIdentity


class IApiUserRepository(ABC):
    """Client account repository interface."""

    @abstractmethod
    async def get_by_client_id(self, db: AsyncSession, client_id: ClientIdentity) -> Optional[ApiUser]:
        """Get an account by client ID."""
        pass

    @abstractmethod
    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[ApiUser]:
        """Get an account by email."""
        pass

    @abstractmethod
    async def add(self, db: AsyncSession, user: ApiUser) -> ApiUser:
        """Insert a new account (flush only)."""
        pass

    @abstractmethod
    async def set_validated(self, db: AsyncSession, client_id: ClientIdentity, validated: bool = True) -> None:
        """Flip the email validation flag."""
        pass

    @abstractmethod
    async def set_enabled(self, db: AsyncSession, client_id: ClientIdentity, enabled: bool) -> None:
        """Flip the administrative approval flag."""
        pass


class ICredentialStore(ABC):
    """Store of hashed client credentials."""

    @abstractmethod
    async def store(self, db: AsyncSession, owner: ClientIdentity, token_hash: str, ttl: timedelta) -> ApiToken:
        """Insert a credential valid from now until now + ttl."""
        pass

    @abstractmethod
    async def lookup_by_owner(self, db: AsyncSession, owner: ClientIdentity) -> Optional[ApiToken]:
        """Return the most recent credential of a client."""
        pass

    @abstractmethod
    async def delete(self, db: AsyncSession, token_hash: str) -> int:
        """Remove a credential by its hash and return the number of rows removed."""
        pass

    @abstractmethod
    async def replace(
            self, db: AsyncSession, owner: ClientIdentity, old_hash: str, new_hash: str, ttl: timedelta
    ) -> ApiToken:
        """Delete a superseded credential and store its replacement."""
        pass


class IMailClient(ABC):
    """Mail sending collaborator."""

    @abstractmethod
    async def send(self, to: str, subject: str, body: str) -> None:
        """Send a plain text email. Raises EmailClientException on failure."""
        pass
