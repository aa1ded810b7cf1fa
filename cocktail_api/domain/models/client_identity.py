# cocktail_api/domain/models/client_identity.py

"""
Opaque identifier of an API client.

The identifier is built from a time-based UUID truncated to ``ID_LENGTH``
characters. Parsing only checks the length.
"""

import uuid
from dataclasses import dataclass

from cocktail_api.domain.exceptions import InvalidIdException

# Length of the string that represents a client ID.
ID_LENGTH = 8


@dataclass(frozen=True)
class ClientIdentity:
    """Value object for a client ID."""
    value: str

    @classmethod
    def new(cls) -> "ClientIdentity":
        """
        Generate a fresh client ID.

        The leading field of a UUID1 (``time_low``) changes every 100ns, so
        consecutive IDs differ. Uniqueness is enforced by the primary key
        of the accounts table.
        """
        return cls(uuid.uuid1().hex[:ID_LENGTH])

    @classmethod
    def parse(cls, value: str) -> "ClientIdentity":
        """
        Build a ClientIdentity from its string form.

        Raises:
            InvalidIdException: If the string length is not ID_LENGTH
        """
        if not isinstance(value, str) or len(value) != ID_LENGTH:
            raise InvalidIdException(detail="The given client ID has an invalid format")
        return cls(value)

    def __str__(self) -> str:
        return self.value
