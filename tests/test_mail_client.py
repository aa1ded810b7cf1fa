import json
import logging

import httpx
import pytest

from cocktail_api.adapters.outbound.mailing.mail_client import (
    LoggingMailClient,
    MailjetMailClient,
    get_mail_client,
)
from cocktail_api.domain.exceptions import EmailClientException


def mailjet_client(handler) -> MailjetMailClient:
    return MailjetMailClient(
        api_user="user",
        api_key="key",
        sender_address="noreply@example.com",
        sender_name="Cocktail API",
        api_url="https://mailjet.test/v3.1/send",
        transport=httpx.MockTransport(handler),
    )


class TestMailjetMailClient:

    async def test_sends_message(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"Messages": [{"Status": "success"}]})

        await mailjet_client(handler).send("user@example.com", "Verify your email", "body")

        request = requests[0]
        assert request.url == "https://mailjet.test/v3.1/send"
        assert request.headers["authorization"].startswith("Basic ")
        message = json.loads(request.content)["Messages"][0]
        assert message["From"] == {"Email": "noreply@example.com", "Name": "Cocktail API"}
        assert message["To"] == [{"Email": "user@example.com"}]
        assert message["Subject"] == "Verify your email"
        assert message["TextPart"] == "body"

    async def test_rejected_message(self):
        client = mailjet_client(lambda request: httpx.Response(401, json={"ErrorMessage": "unauthorized"}))

        with pytest.raises(EmailClientException):
            await client.send("user@example.com", "subject", "body")

    async def test_unreachable_service(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(EmailClientException):
            await mailjet_client(handler).send("user@example.com", "subject", "body")


class TestLoggingMailClient:

    async def test_body_is_never_logged(self, caplog):
        with caplog.at_level(logging.INFO):
            await LoggingMailClient().send("user@example.com", "Verify your email", "secret-link")

        assert "user@example.com" in caplog.text
        assert "secret-link" not in caplog.text

    def test_used_without_mailjet_credentials(self):
        assert isinstance(get_mail_client(), LoggingMailClient)
