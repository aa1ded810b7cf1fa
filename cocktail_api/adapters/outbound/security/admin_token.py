# cocktail_api/adapters/outbound/security/admin_token.py

"""
Administrative token used to approve, disable and revoke API clients.

Only the argon2 hash of the token is configured (ADMIN_TOKEN_HASH). Run this
module to produce one:

    python -m cocktail_api.adapters.outbound.security.admin_token
"""

from typing import Optional

from cocktail_api.adapters.configuration.config import settings
from cocktail_api.adapters.outbound.security.secret_codec import SecretCodec
from cocktail_api.domain.exceptions import InvalidAccessCredentialsException, PermissionDeniedException


class AdminTokenStore:

    @classmethod
    async def validate(cls, plain_token: Optional[str], expected_hash: Optional[str] = None) -> None:
        """
        Validate the administrative token.

        Raises:
            PermissionDeniedException: If no admin hash is configured or the
                token does not match
        """
        expected_hash = expected_hash or settings.ADMIN_TOKEN_HASH
        if not expected_hash or not plain_token:
            raise PermissionDeniedException(detail="Administrative token required")

        try:
            await SecretCodec.verify(plain_token, expected_hash)
        except InvalidAccessCredentialsException:
            raise PermissionDeniedException(detail="Invalid administrative token")


if __name__ == "__main__":
    import asyncio
    import getpass

    print("Administrative token hash generator")
    token = getpass.getpass("Type the administrative token: ")

    token_hash = asyncio.run(SecretCodec.hash(token))

    print("\nHash generated, set it as ADMIN_TOKEN_HASH:\n")
    print(token_hash)
