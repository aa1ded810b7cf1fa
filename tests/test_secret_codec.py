import pytest

from cocktail_api.adapters.outbound.security.secret_codec import SECRET_LENGTH, SecretCodec
from cocktail_api.domain.exceptions import InvalidAccessCredentialsException


class TestGenerateSecret:

    def test_secret_is_alphanumeric_with_fixed_length(self):
        secret = SecretCodec.generate_secret()
        assert len(secret) == SECRET_LENGTH
        assert secret.isalnum()

    def test_secrets_are_random(self):
        assert SecretCodec.generate_secret() != SecretCodec.generate_secret()


class TestHashAndVerify:

    async def test_hash_uses_argon2id_parameters(self):
        token_hash = await SecretCodec.hash("secret")
        assert token_hash.startswith("$argon2id$")
        assert "m=15000,t=2,p=1" in token_hash

    async def test_hash_is_salted(self):
        first = await SecretCodec.hash("same secret")
        second = await SecretCodec.hash("same secret")

        assert first != second
        await SecretCodec.verify("same secret", first)
        await SecretCodec.verify("same secret", second)

    async def test_hash_never_contains_the_secret(self):
        secret = SecretCodec.generate_secret()
        assert secret not in await SecretCodec.hash(secret)

    async def test_other_secret_is_rejected(self):
        token_hash = await SecretCodec.hash(SecretCodec.generate_secret())
        with pytest.raises(InvalidAccessCredentialsException):
            await SecretCodec.verify(SecretCodec.generate_secret(), token_hash)

    @pytest.mark.parametrize("corrupt_hash", ["", "not-a-hash", "$argon2id$v=19$broken"])
    async def test_corrupt_hash_is_a_mismatch(self, corrupt_hash):
        with pytest.raises(InvalidAccessCredentialsException):
            await SecretCodec.verify("secret", corrupt_hash)
