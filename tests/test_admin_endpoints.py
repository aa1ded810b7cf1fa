import pytest

from cocktail_api.adapters.outbound.persistence.repositories import api_user_repository
from tests.helpers import VALID_EXPLANATION


@pytest.fixture
async def validated_client_id(client, mail_client) -> str:
    await client.post(
        "/token/request",
        data={"email": "user@example.com", "explanation": VALID_EXPLANATION},
    )
    email, token = mail_client.last_confirmation("user@example.com")
    await client.get("/token/validate", params={"email": email, "token": token})

    admin_messages = mail_client.messages_to("admin@example.com")
    return admin_messages[-1][2].split("(", 1)[1].split(")", 1)[0]


class TestAdminAuthorization:

    async def test_missing_admin_token(self, client):
        response = await client.get("/api/v1/admin/clients/pending")

        assert response.status_code == 403
        assert response.json()["code"] == "PERMISSION_DENIED"

    async def test_wrong_admin_token(self, client):
        response = await client.get("/api/v1/admin/clients/pending", headers={"X-Admin-Token": "nope"})
        assert response.status_code == 403


class TestClientAdministration:

    async def test_list_pending(self, client, admin_headers, validated_client_id):
        response = await client.get("/api/v1/admin/clients/pending", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["items"][0]["client_id"] == validated_client_id
        assert body["items"][0]["validated"] is True
        assert "api_token" not in body["items"][0]

    async def test_enable_and_disable(self, client, admin_headers, validated_client_id):
        response = await client.post(
            f"/api/v1/admin/clients/{validated_client_id}/enable", headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["enabled"] is True

        response = await client.get("/api/v1/admin/clients/pending", headers=admin_headers)
        assert response.json()["total"] == 0

        response = await client.post(
            f"/api/v1/admin/clients/{validated_client_id}/disable", headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["enabled"] is False

    async def test_enable_unknown_client(self, client, admin_headers):
        response = await client.post("/api/v1/admin/clients/abcdefgh/enable", headers=admin_headers)
        assert response.status_code == 404

    async def test_enable_malformed_client_id(self, client, admin_headers):
        response = await client.post("/api/v1/admin/clients/abc/enable", headers=admin_headers)
        assert response.status_code == 400

    async def test_enable_before_email_validation(self, client, db_session, admin_headers):
        await client.post(
            "/token/request",
            data={"email": "late@example.com", "explanation": VALID_EXPLANATION},
        )
        user = await api_user_repository.get_by_email(db_session, "late@example.com")

        response = await client.post(f"/api/v1/admin/clients/{user.client_id}/enable", headers=admin_headers)

        assert response.status_code == 409
        assert response.json()["code"] == "ACCOUNT_NOT_VALIDATED"

    async def test_revoke(self, client, admin_headers, validated_client_id):
        response = await client.delete(
            f"/api/v1/admin/clients/{validated_client_id}/credentials", headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json() == {"client_id": validated_client_id, "revoked": 1}
