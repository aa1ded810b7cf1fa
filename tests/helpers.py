"""Shared helpers of the test suite."""

import re
from typing import List, Optional, Set, Tuple
from urllib.parse import parse_qs, urlparse

from cocktail_api.application.dtos.token_request_dto import TokenRequest
from cocktail_api.application.ports.outbound import IMailClient
from cocktail_api.domain.exceptions import EmailClientException

VALID_EXPLANATION = "I want to build a cocktail suggestion app for my bar."


class RecordingMailClient(IMailClient):
    """Mail client that keeps the messages in memory."""

    def __init__(self):
        self.sent: List[Tuple[str, str, str]] = []
        self.failing_recipients: Set[str] = set()
        self.fail_all = False

    async def send(self, to: str, subject: str, body: str) -> None:
        if self.fail_all or to in self.failing_recipients:
            raise EmailClientException(detail="Mail service unavailable")
        self.sent.append((to, subject, body))

    def messages_to(self, to: str) -> List[Tuple[str, str, str]]:
        return [m for m in self.sent if m[0] == to]

    def last_confirmation(self, to: str) -> Tuple[str, str]:
        """Return (email, token) of the last confirmation link sent to ``to``."""
        bodies = [body for (recipient, subject, body) in self.sent
                  if recipient == to and subject == "Verify your email"]
        assert bodies, f"no confirmation email sent to {to}"
        return parse_confirmation_link(bodies[-1])


def parse_confirmation_link(body: str) -> Tuple[str, str]:
    match = re.search(r"(https?://\S+/token/validate\?\S+)", body)
    assert match, "confirmation link not found"
    query = parse_qs(urlparse(match.group(1)).query)
    return query["email"][0], query["token"][0]


def token_request(email: str = "user@example.com", name: Optional[str] = "Tester",
                  explanation: str = VALID_EXPLANATION) -> TokenRequest:
    return TokenRequest(name=name, email=email, explanation=explanation)
