import pytest

from cocktail_api.adapters.outbound.security.admin_token import AdminTokenStore
from cocktail_api.adapters.outbound.security.secret_codec import SecretCodec
from cocktail_api.domain.exceptions import PermissionDeniedException
from tests.conftest import ADMIN_TOKEN


class TestAdminTokenStore:

    async def test_configured_token_is_accepted(self):
        await AdminTokenStore.validate(ADMIN_TOKEN)

    async def test_wrong_token_is_rejected(self):
        with pytest.raises(PermissionDeniedException):
            await AdminTokenStore.validate("wrong-token")

    async def test_missing_token_is_rejected(self):
        with pytest.raises(PermissionDeniedException):
            await AdminTokenStore.validate(None)

    async def test_explicit_hash(self):
        token_hash = await SecretCodec.hash("other-admin")
        await AdminTokenStore.validate("other-admin", expected_hash=token_hash)
        with pytest.raises(PermissionDeniedException):
            await AdminTokenStore.validate(ADMIN_TOKEN, expected_hash=token_hash)
