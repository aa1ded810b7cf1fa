"""
Pytest configuration for the Cocktail API tests.

The settings are read at import time, so the environment is prepared before
any application module is imported. Tests run against a temporary SQLite
database through aiosqlite.
"""

import os
import tempfile

# Must be set before any application import
_test_data_dir = tempfile.mkdtemp(prefix="cocktail_api_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_data_dir}/test.db"
os.environ["ENVIRONMENT"] = "testing"
os.environ["BASE_URL"] = "http://testserver"
os.environ["ADMIN_EMAIL_ADDRESS"] = "admin@example.com"
for _var in ("MAILJET_API_USER", "MAILJET_API_KEY"):
    os.environ.pop(_var, None)

ADMIN_TOKEN = "test-admin-token"

from cocktail_api.adapters.outbound.security.secret_codec import SecretCodec  # noqa: E402

os.environ["ADMIN_TOKEN_HASH"] = SecretCodec.crypt_context.hash(ADMIN_TOKEN)

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from cocktail_api.adapters.inbound.api.deps import get_mail_client  # noqa: E402
from cocktail_api.adapters.outbound.persistence.database import AsyncSessionLocal, engine  # noqa: E402
from cocktail_api.adapters.outbound.persistence.models import Base  # noqa: E402
from cocktail_api.main import app  # noqa: E402
from tests.helpers import RecordingMailClient  # noqa: E402


@pytest.fixture(autouse=True)
async def database():
    """Fresh schema for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest.fixture
async def db_session(database):
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
def mail_client():
    return RecordingMailClient()


@pytest.fixture
async def client(database, mail_client):
    """HTTP client bound to the application, with the mail client replaced."""
    app.dependency_overrides[get_mail_client] = lambda: mail_client
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"X-Admin-Token": ADMIN_TOKEN}
