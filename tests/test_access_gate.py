from datetime import timedelta

import pytest
from sqlalchemy import update

from cocktail_api.adapters.outbound.persistence.models import ApiToken as ApiTokenModel
from cocktail_api.application.use_cases.access_use_cases import AsyncAccessGate
from cocktail_api.application.use_cases.client_admin_use_cases import AsyncClientAdminService
from cocktail_api.application.use_cases.registration_use_cases import AsyncRegistrationService
from cocktail_api.domain.exceptions import (
    AccountDisabledException,
    ExpiredAccessException,
    InvalidAccessCredentialsException,
    InvalidIdException,
)
from cocktail_api.domain.models import ClientIdentity
from cocktail_api.shared.utils.clock import utcnow
from tests.helpers import token_request


@pytest.fixture
def gate(db_session):
    return AsyncAccessGate(db_session)


@pytest.fixture
def admin(db_session):
    return AsyncClientAdminService(db_session)


@pytest.fixture
async def bearer(db_session, mail_client) -> str:
    """Bearer string of a client that confirmed its email."""
    registration = AsyncRegistrationService(db_session, mail_client)
    await registration.issue_request(token_request())
    validated = await registration.confirm_email(*mail_client.last_confirmation("user@example.com"))
    return validated.token


class TestAccessGate:

    async def test_disabled_until_enabled(self, gate, admin, bearer):
        with pytest.raises(AccountDisabledException):
            await gate.check_access(bearer)

        client_id = bearer.split(":", 1)[0]
        await admin.enable_client(client_id)

        assert await gate.check_access(bearer) == ClientIdentity.parse(client_id)

    async def test_expired_token(self, gate, admin, bearer, db_session):
        await admin.enable_client(bearer.split(":", 1)[0])
        await db_session.execute(update(ApiTokenModel).values(valid_until=utcnow() - timedelta(seconds=1)))
        await db_session.commit()

        with pytest.raises(ExpiredAccessException):
            await gate.check_access(bearer)

    async def test_wrong_secret(self, gate, admin, bearer):
        client_id = bearer.split(":", 1)[0]
        await admin.enable_client(client_id)

        with pytest.raises(InvalidAccessCredentialsException):
            await gate.check_access(f"{client_id}:not-the-secret")

    async def test_secret_is_checked_before_account_status(self, gate, bearer):
        client_id = bearer.split(":", 1)[0]
        with pytest.raises(InvalidAccessCredentialsException):
            await gate.check_access(f"{client_id}:not-the-secret")

    async def test_unknown_client(self, gate):
        with pytest.raises(InvalidIdException):
            await gate.check_access("zzzzzzzz:whatever")

    @pytest.mark.parametrize("malformed", [None, "", "no-separator", "short:secret", "toolongid:secret"])
    async def test_malformed_bearer(self, gate, malformed):
        with pytest.raises(InvalidIdException):
            await gate.check_access(malformed)

    async def test_revoked_client(self, gate, admin, bearer):
        client_id = bearer.split(":", 1)[0]
        await admin.enable_client(client_id)
        await admin.revoke_credentials(client_id)

        with pytest.raises(InvalidIdException):
            await gate.check_access(bearer)

    async def test_disabled_again(self, gate, admin, bearer):
        client_id = bearer.split(":", 1)[0]
        await admin.enable_client(client_id)
        await admin.disable_client(client_id)

        with pytest.raises(AccountDisabledException):
            await gate.check_access(bearer)
