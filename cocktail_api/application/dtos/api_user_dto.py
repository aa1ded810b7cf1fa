# cocktail_api/application/dtos/api_user_dto.py

"""
Schemas for the administrative views of the API clients.

Only metadata is exposed. Credentials never leave the service.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from cocktail_api.application.dtos.base_dto import CustomBaseModel


class ApiUserOutput(CustomBaseModel):
    """Client account as seen by the administrators."""
    client_id: str = Field(..., description="Client identifier")
    name: Optional[str] = Field(None, description="Name of the requester")
    email: str = Field(..., description="Contact email")
    explanation: str = Field(..., description="Intended use of the API")
    validated: bool = Field(..., description="Email ownership confirmed")
    enabled: bool = Field(..., description="Approved by an administrator")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ClientStatusOutput(CustomBaseModel):
    """Result of an administrative action on a client."""
    client_id: str
    validated: bool
    enabled: bool
    message: str


class RevocationOutput(CustomBaseModel):
    client_id: str
    revoked: int = Field(..., description="Number of credentials deleted")
