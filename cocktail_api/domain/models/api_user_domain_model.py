# cocktail_api/domain/models/api_user_domain_model.py

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from cocktail_api.domain.models.client_identity import ClientIdentity


@dataclass
class ApiUser:
    """Domain model for a client account of the API."""
    client_id: ClientIdentity
    email: str
    explanation: str
    name: Optional[str] = None
    validated: bool = False  # email ownership confirmed
    enabled: bool = False  # approved by an administrator
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def pending_email_confirmation(self) -> bool:
        return not self.validated

    @property
    def pending_approval(self) -> bool:
        return self.validated and not self.enabled
