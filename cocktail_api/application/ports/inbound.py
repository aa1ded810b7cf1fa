# cocktail_api/application/ports/inbound.py

from abc import ABC, abstractmethod
from typing import Optional

from fastapi_pagination import Params

from cocktail_api.application.dtos.token_request_dto import TokenRequest, ValidatedToken
from cocktail_api.domain.models.api_user_domain_model import ApiUser
from cocktail_api.domain.models.client_identity import ClientIdentity


class IRegistrationUseCase(ABC):
    """Interface for the token request workflow."""

    @abstractmethod
    async def issue_request(self, request: TokenRequest) -> ApiUser:
        """Register a token request and send the confirmation email."""
        pass

    @abstractmethod
    async def confirm_email(self, email: str, secret: str) -> ValidatedToken:
        """Confirm the email and hand out the bearer string."""
        pass

    @abstractmethod
    async def resend_confirmation(self, email: str) -> None:
        """Replace the confirmation token and send a new link."""
        pass


class IAccessGate(ABC):
    """Interface for the access check of restricted endpoints."""

    @abstractmethod
    async def check_access(self, bearer: Optional[str]) -> ClientIdentity:
        """Return the caller identity or raise."""
        pass


class IClientAdminUseCase(ABC):
    """Interface for the administration of API clients."""

    @abstractmethod
    async def enable_client(self, client_id: str) -> ApiUser:
        """Approve a client whose email is validated."""
        pass

    @abstractmethod
    async def disable_client(self, client_id: str) -> ApiUser:
        """Withdraw the approval of a client."""
        pass

    @abstractmethod
    async def revoke_credentials(self, client_id: str) -> int:
        """Delete every credential of a client."""
        pass

    @abstractmethod
    async def list_pending(self, params: Params):
        """Paginated list of clients waiting for approval."""
        pass
