import logging

from tests.helpers import VALID_EXPLANATION

EMAIL = "user@example.com"


async def request_token(client, email=EMAIL, explanation=VALID_EXPLANATION, name="Tester"):
    return await client.post(
        "/token/request",
        data={"name": name, "email": email, "explanation": explanation},
    )


async def confirm(client, mail_client, email=EMAIL):
    link_email, token = mail_client.last_confirmation(email)
    return await client.get("/token/validate", params={"email": link_email, "token": token})


class TestTokenRequestPages:

    async def test_form(self, client):
        response = await client.get("/token/request")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert 'action="/token/request"' in response.text

    async def test_request_is_accepted(self, client, mail_client):
        response = await request_token(client)

        assert response.status_code == 202
        assert "The request was sent" in response.text
        assert mail_client.messages_to(EMAIL)

    async def test_name_is_optional(self, client):
        response = await request_token(client, name="")
        assert response.status_code == 202

    async def test_duplicate_email(self, client):
        await request_token(client)

        response = await request_token(client)
        assert response.status_code == 406

    async def test_short_explanation(self, client, mail_client):
        response = await request_token(client, explanation="too short")

        assert response.status_code == 400
        assert "Please introduce valid data" in response.text
        assert mail_client.sent == []

    async def test_invalid_email(self, client):
        response = await request_token(client, email="not-an-email")
        assert response.status_code == 400

    async def test_mail_failure(self, client, mail_client):
        mail_client.fail_all = True

        response = await request_token(client)
        assert response.status_code == 500


class TestValidatePage:

    async def test_shows_bearer_once(self, client, mail_client):
        await request_token(client)

        response = await confirm(client, mail_client)

        assert response.status_code == 202
        assert response.headers["cache-control"] == "no-store"
        assert mail_client.messages_to("admin@example.com")

        second = await confirm(client, mail_client)
        assert second.status_code == 403

    async def test_wrong_token(self, client):
        await request_token(client)

        response = await client.get("/token/validate", params={"email": EMAIL, "token": "wrong"})
        assert response.status_code == 403

    async def test_unknown_email(self, client):
        response = await client.get("/token/validate", params={"email": "nobody@example.com", "token": "x"})
        assert response.status_code == 404

    async def test_incomplete_link(self, client):
        response = await client.get("/token/validate", params={"email": EMAIL})
        assert response.status_code == 400


class TestResendPage:

    async def test_resend(self, client, mail_client):
        await request_token(client)

        response = await client.post("/token/resend", data={"email": EMAIL})

        assert response.status_code == 202
        assert len(mail_client.messages_to(EMAIL)) == 2

    async def test_unknown_email_gets_the_same_answer(self, client, mail_client):
        response = await client.post("/token/resend", data={"email": "nobody@example.com"})
        assert response.status_code == 202
        assert mail_client.sent == []

    async def test_already_confirmed_gets_the_same_answer(self, client, mail_client):
        await request_token(client)
        await confirm(client, mail_client)

        response = await client.post("/token/resend", data={"email": EMAIL})
        assert response.status_code == 202
        assert len(mail_client.messages_to(EMAIL)) == 1


class TestAccessCheck:

    async def bearer(self, client, mail_client) -> str:
        await request_token(client)
        response = await confirm(client, mail_client)
        return response.text.split('<p class="token">', 1)[1].split("</p>", 1)[0].strip()

    async def test_missing_token(self, client):
        response = await client.get("/api/v1/token/check")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ID"

    async def test_full_lifecycle(self, client, mail_client, admin_headers):
        bearer = await self.bearer(client, mail_client)
        client_id = bearer.split(":", 1)[0]

        response = await client.get("/api/v1/token/check", params={"api_key": bearer})
        assert response.status_code == 403
        assert response.json()["code"] == "ACCOUNT_DISABLED"

        response = await client.post(f"/api/v1/admin/clients/{client_id}/enable", headers=admin_headers)
        assert response.status_code == 200

        response = await client.get("/api/v1/token/check", params={"api_key": bearer})
        assert response.status_code == 204

        response = await client.get("/api/v1/token/check", headers={"Authorization": f"Bearer {bearer}"})
        assert response.status_code == 204

    async def test_wrong_secret(self, client, mail_client):
        bearer = await self.bearer(client, mail_client)
        client_id = bearer.split(":", 1)[0]

        response = await client.get("/api/v1/token/check", params={"api_key": f"{client_id}:wrong"})

        assert response.status_code == 403
        assert response.json()["code"] == "INVALID_ACCESS_CREDENTIALS"

    async def test_unknown_client(self, client):
        response = await client.get("/api/v1/token/check", params={"api_key": "abcdefgh:secret"})
        assert response.status_code == 400


class TestMisc:

    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200

    async def test_root_redirects_to_the_form(self, client):
        response = await client.get("/")
        assert response.status_code == 307
        assert response.headers["location"] == "/token/request"


class TestRequestLogging:

    async def test_query_string_is_not_logged(self, client, caplog):
        caplog.set_level(logging.INFO, logger="cocktail_api.shared.middleware.logging_middleware")

        await client.get("/token/validate", params={"email": EMAIL, "token": "confirmation-secret"})
        await client.get("/api/v1/token/check", params={"api_key": "abcdefgh:access-secret"})

        lines = [
            record.getMessage() for record in caplog.records
            if record.name == "cocktail_api.shared.middleware.logging_middleware"
        ]
        assert any("/token/validate" in line for line in lines)
        assert not any("secret" in line or EMAIL in line for line in lines)
