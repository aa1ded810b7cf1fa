# cocktail_api/adapters/outbound/persistence/models/api_user_model.py

"""
Model of the API clients that requested an access token.

An ApiUser row is created when somebody submits a token request. The email
is unique: the constraint backs the duplicate registration check when two
requests race.
"""

from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship

from cocktail_api.adapters.outbound.persistence.models.base_model import Base
from cocktail_api.domain.models.client_identity import ID_LENGTH
from cocktail_api.shared.utils.clock import utcnow


class ApiUser(Base):
    """
    Client account of the API.

    Attributes:
        client_id: Opaque client identifier (primary key)
        name: Optional display name
        email: Contact email, unique
        explanation: Why the client wants access to the restricted endpoints
        validated: The email ownership was confirmed
        enabled: An administrator approved the account
        created_at: Creation date and time
        updated_at: Last update date and time
        tokens: Credentials stored for this client
    """
    __tablename__ = "api_users"

    client_id = Column(String(ID_LENGTH), primary_key=True)
    name = Column(String(40), nullable=True)
    email = Column(String(80), unique=True, nullable=False, index=True)
    explanation = Column(String(400), nullable=False)
    validated = Column(Boolean, default=False, nullable=False)
    enabled = Column(Boolean, default=False, nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, nullable=True)

    tokens = relationship(
        "ApiToken",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<ApiUser(client_id={self.client_id}, validated={self.validated}, enabled={self.enabled})>"
