# cocktail_api/domain/models/api_token_domain_model.py

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from cocktail_api.domain.models.client_identity import ClientIdentity
from cocktail_api.shared.utils.clock import utcnow


@dataclass
class ApiToken:
    """Domain model for a stored credential. Only the hash is kept."""
    client_id: ClientIdentity
    token_hash: str
    created: datetime
    valid_until: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or utcnow()
        return self.valid_until < now
