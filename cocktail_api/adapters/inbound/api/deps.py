# cocktail_api/adapters/inbound/api/deps.py (async version)

"""
Dependencies for injection into API endpoints.

This module defines functions that provide dependencies via
FastAPI Depends() for client access checks, administrative authorization,
the email client and database access.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, Security
from fastapi.security import APIKeyQuery, HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from cocktail_api.adapters.outbound.mailing.mail_client import get_mail_client as build_mail_client
from cocktail_api.adapters.outbound.persistence.database import get_db
from cocktail_api.adapters.outbound.security.admin_token import AdminTokenStore
from cocktail_api.application.ports.outbound import IMailClient
from cocktail_api.application.use_cases.access_use_cases import AsyncAccessGate
from cocktail_api.domain.models.client_identity import ClientIdentity

# Configure logger
logger = logging.getLogger(__name__)

# The bearer string is accepted both as query parameter and as header
api_key_scheme = APIKeyQuery(name="api_key", auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)

########################################################################
# Database Session Management
########################################################################

# Aliases for get_db
get_session = get_db
get_db_session = get_db


########################################################################
# Email client
########################################################################

def get_mail_client() -> IMailClient:
    """Email client for the current settings. Overridden in tests."""
    return build_mail_client()


########################################################################
# Client Access
########################################################################

async def require_api_access(
        api_key: Optional[str] = Security(api_key_scheme),
        credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
        db: AsyncSession = Depends(get_db),
) -> ClientIdentity:
    """
    Check the bearer string of the caller.

    Args:
        api_key: Bearer string sent as ``api_key`` query parameter
        credentials: Bearer string sent in the Authorization header
        db: Async database session

    Returns:
        Identity of the authorized client

    Raises:
        DomainException: Any error of the access gate, mapped to an HTTP
            status by the exception middleware
    """
    bearer = api_key or (credentials.credentials if credentials else None)
    gate = AsyncAccessGate(db)
    return await gate.check_access(bearer)


########################################################################
# Administration
########################################################################

async def require_admin(
        x_admin_token: Optional[str] = Header(None, description="Administrative token"),
) -> None:
    """
    Check the administrative token sent in the ``X-Admin-Token`` header.

    Raises:
        PermissionDeniedException: If the token is missing or wrong
    """
    await AdminTokenStore.validate(x_admin_token)
