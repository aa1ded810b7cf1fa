# cocktail_api/adapters/outbound/persistence/models/api_token_model.py

"""
Model for the stored access credentials.

Only the argon2 hash of a secret is persisted, never the plain value.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from cocktail_api.adapters.outbound.persistence.models.base_model import Base
from cocktail_api.domain.models.client_identity import ID_LENGTH


class ApiToken(Base):
    """
    Credential of an API client.

    Attributes:
        api_token: Argon2 hash of the secret (primary key)
        client_id: Owner of the credential
        created: Date and time of creation
        valid_until: Date and time after which the credential is expired
    """
    __tablename__ = "api_tokens"

    api_token = Column(String(255), primary_key=True)
    client_id = Column(
        String(ID_LENGTH),
        ForeignKey("api_users.client_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created = Column(DateTime, nullable=False)
    valid_until = Column(DateTime, nullable=False, index=True)

    owner = relationship("ApiUser", back_populates="tokens")

    def __repr__(self) -> str:
        return f"<ApiToken(client_id={self.client_id}, valid_until={self.valid_until})>"
