# cocktail_api/adapters/outbound/security/secret_codec.py (async version)

"""
Generation and hashing of the client secrets.

Secrets are random alphanumeric strings. Only their Argon2id hash is ever
stored. Hashing and verification are CPU and memory bound, so they run in
the threadpool instead of on the event loop.
"""

import secrets
import string

from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from cocktail_api.domain.exceptions import InvalidAccessCredentialsException, SecretHashingException

SECRET_LENGTH = 25
SECRET_ALPHABET = string.ascii_letters + string.digits

# Argon2id tuned for interactive latency: 15000 KiB, 2 iterations, 1 lane
ARGON2_MEMORY_COST = 15000
ARGON2_TIME_COST = 2
ARGON2_PARALLELISM = 1


class SecretCodec:
    """
    Codec for the bearer secrets handed to API clients.
    """

    crypt_context = CryptContext(
        schemes=["argon2"],
        deprecated="auto",
        argon2__type="ID",
        argon2__memory_cost=ARGON2_MEMORY_COST,
        argon2__rounds=ARGON2_TIME_COST,
        argon2__parallelism=ARGON2_PARALLELISM,
    )

    @classmethod
    def generate_secret(cls) -> str:
        """
        Generate a new random secret using the system CSPRNG.
        """
        return "".join(secrets.choice(SECRET_ALPHABET) for _ in range(SECRET_LENGTH))

    @classmethod
    async def hash(cls, secret: str) -> str:
        """
        Compute a salted Argon2id hash of the secret.

        A fresh salt is used on every call, so two hashes of the same secret
        differ.

        Raises:
            SecretHashingException: If the hash could not be computed
        """
        try:
            return await run_in_threadpool(cls.crypt_context.hash, secret)
        except (ValueError, TypeError) as e:
            raise SecretHashingException(detail=f"Error hashing secret: {type(e).__name__}")

    @classmethod
    async def verify(cls, candidate: str, expected_hash: str) -> None:
        """
        Check a candidate secret against a stored hash.

        A malformed stored hash is reported exactly like a wrong secret.

        Raises:
            InvalidAccessCredentialsException: If the secret does not match
        """
        try:
            matches = await run_in_threadpool(cls.crypt_context.verify, candidate, expected_hash)
        except (ValueError, TypeError):
            matches = False

        if not matches:
            raise InvalidAccessCredentialsException()
