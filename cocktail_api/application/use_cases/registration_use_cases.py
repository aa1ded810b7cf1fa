# cocktail_api/application/use_cases/registration_use_cases.py (async version)

"""
Service for the token request workflow.

A client asks for a token, confirms the email through the link it receives
and gets its bearer string. An administrator enables the account afterwards
(see client_admin_use_cases).

Every account and credential write of a step happens in one transaction
owned by this service. Emails are sent only after the commit.
"""

import logging
from datetime import timedelta
from urllib.parse import urlencode

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from cocktail_api.adapters.configuration.config import settings
from cocktail_api.adapters.outbound.mailing.messages import admin_notification, confirmation_email
from cocktail_api.adapters.outbound.persistence.repositories.api_user_repository import api_user_repository
from cocktail_api.adapters.outbound.persistence.repositories.credential_repository import credential_store
from cocktail_api.adapters.outbound.security.secret_codec import SecretCodec
from cocktail_api.application.dtos.token_request_dto import TokenRequest, ValidatedToken
from cocktail_api.application.ports.inbound import IRegistrationUseCase
from cocktail_api.application.ports.outbound import IApiUserRepository, ICredentialStore, IMailClient
from cocktail_api.domain.exceptions import (
    AccountAlreadyValidatedException,
    DatabaseOperationException,
    EmailAlreadyRegisteredException,
    EmailClientException,
    InvalidAccessCredentialsException,
    InvalidEmailException,
)
from cocktail_api.domain.models.api_user_domain_model import ApiUser
from cocktail_api.domain.models.client_identity import ClientIdentity
from cocktail_api.shared.utils.email_validation import normalize_email

logger = logging.getLogger(__name__)


class AsyncRegistrationService(IRegistrationUseCase):
    """
    Service for the registration of API clients.

    Attributes:
        db_session: Session whose transaction this service commits
        mail_client: Outbound email client
    """

    def __init__(
            self,
            db_session: AsyncSession,
            mail_client: IMailClient,
            users: IApiUserRepository = api_user_repository,
            credentials: ICredentialStore = credential_store,
    ):
        self.db_session = db_session
        self.mail_client = mail_client
        self.users = users
        self.credentials = credentials

    @property
    def confirmation_ttl(self) -> timedelta:
        return timedelta(days=settings.CONFIRMATION_TOKEN_EXPIRE_DAYS)

    @property
    def access_ttl(self) -> timedelta:
        return timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)

    @staticmethod
    def confirmation_link(email: str, secret: str) -> str:
        query = urlencode({"email": email, "token": secret})
        return f"{settings.BASE_URL.rstrip('/')}/token/validate?{query}"

    async def issue_request(self, request: TokenRequest) -> ApiUser:
        """
        Register a token request.

        The account and its confirmation token are stored together. Once
        committed, the confirmation link is sent to the given email.

        Args:
            request: Validated form data

        Returns:
            The new account, waiting for email confirmation

        Raises:
            EmailAlreadyRegisteredException: If the email is already on file
            DatabaseOperationException: If the request could not be stored
            EmailClientException: If the confirmation email could not be sent.
                The request stays registered (see resend_confirmation)
        """
        email = normalize_email(request.email)

        if await self.users.get_by_email(self.db_session, email):
            logger.warning(f"Token request for an email already registered: {email}")
            raise EmailAlreadyRegisteredException(email=email)

        client_id = ClientIdentity.new()
        secret = SecretCodec.generate_secret()
        token_hash = await SecretCodec.hash(secret)

        try:
            user = await self.users.add(self.db_session, ApiUser(
                client_id=client_id,
                name=request.name,
                email=email,
                explanation=request.explanation,
            ))
            await self.credentials.store(self.db_session, client_id, token_hash, self.confirmation_ttl)
            await self.db_session.commit()

        except IntegrityError as e:
            await self.db_session.rollback()
            # A concurrent request for the same email won the race
            if await self.users.get_by_email(self.db_session, email):
                logger.warning(f"Concurrent token request for {email} rejected")
                raise EmailAlreadyRegisteredException(email=email)
            logger.error(f"Integrity error registering token request: {e}")
            raise DatabaseOperationException(detail="Error registering token request", original_error=e)

        except DatabaseOperationException:
            await self.db_session.rollback()
            raise

        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(f"Database error registering token request: {e}")
            raise DatabaseOperationException(detail="Error registering token request", original_error=e)

        logger.info(f"An API token was requested by {email} (client {client_id})")

        await self._send_confirmation(email, secret)
        return user

    async def confirm_email(self, email: str, secret: str) -> ValidatedToken:
        """
        Confirm the ownership of an email.

        The confirmation token is exchanged for an access token, and the
        account becomes pending approval. The operator is notified.

        Args:
            email: Email of the account
            secret: Confirmation token received by email

        Returns:
            The bearer string of the client. Only its hash is stored

        Raises:
            InvalidEmailException: If the email is not registered
            InvalidAccessCredentialsException: If the token is wrong or expired,
                or if the email is already confirmed
            DatabaseOperationException: If the update could not be stored
        """
        email = normalize_email(email)

        user = await self.users.get_by_email(self.db_session, email)
        if not user:
            logger.warning(f"Email confirmation for an unknown email: {email}")
            raise InvalidEmailException()

        if user.validated:
            # Only the confirmation token can be exchanged, never an access token
            logger.warning(f"Email confirmation for the validated client {user.client_id}")
            raise InvalidAccessCredentialsException()

        credential = await self.credentials.lookup_by_owner(self.db_session, user.client_id)
        if not credential:
            logger.warning(f"Email confirmation for client {user.client_id} without token")
            raise InvalidAccessCredentialsException()

        await SecretCodec.verify(secret, credential.token_hash)

        if credential.is_expired():
            logger.warning(f"Expired confirmation token used by client {user.client_id}")
            raise InvalidAccessCredentialsException(detail="The confirmation token has expired")

        access_secret = SecretCodec.generate_secret()
        access_hash = await SecretCodec.hash(access_secret)

        try:
            removed = await self.credentials.delete(self.db_session, credential.token_hash)
            if not removed:
                # Consumed by a concurrent confirmation
                await self.db_session.rollback()
                raise InvalidAccessCredentialsException()

            await self.credentials.store(self.db_session, user.client_id, access_hash, self.access_ttl)
            await self.users.set_validated(self.db_session, user.client_id)
            await self.db_session.commit()

        except DatabaseOperationException:
            await self.db_session.rollback()
            raise

        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(f"Database error confirming email of client {user.client_id}: {e}")
            raise DatabaseOperationException(detail="Error confirming email", original_error=e)

        logger.info(f"Email confirmed for client {user.client_id}")

        subject, body = admin_notification(user.client_id)
        try:
            await self.mail_client.send(settings.admin_email, subject, body)
        except EmailClientException as e:
            # The token is already committed, the client must still get it
            logger.error(f"Failed to notify the operator about client {user.client_id}: {e}")

        return ValidatedToken(
            client_id=str(user.client_id),
            token=f"{user.client_id}:{access_secret}",
        )

    async def resend_confirmation(self, email: str) -> None:
        """
        Send a new confirmation link.

        The previous confirmation token is replaced, so only the latest link
        works.

        Raises:
            InvalidEmailException: If the email is not registered
            AccountAlreadyValidatedException: If the email is already confirmed
            DatabaseOperationException: If the new token could not be stored
            EmailClientException: If the email could not be sent
        """
        email = normalize_email(email)

        user = await self.users.get_by_email(self.db_session, email)
        if not user:
            logger.warning(f"Confirmation resend for an unknown email: {email}")
            raise InvalidEmailException()

        if user.validated:
            logger.warning(f"Confirmation resend for the validated client {user.client_id}")
            raise AccountAlreadyValidatedException()

        secret = SecretCodec.generate_secret()
        token_hash = await SecretCodec.hash(secret)

        try:
            previous = await self.credentials.lookup_by_owner(self.db_session, user.client_id)
            if previous:
                await self.credentials.replace(
                    self.db_session, user.client_id, previous.token_hash, token_hash, self.confirmation_ttl
                )
            else:
                await self.credentials.store(self.db_session, user.client_id, token_hash, self.confirmation_ttl)
            await self.db_session.commit()

        except DatabaseOperationException:
            await self.db_session.rollback()
            raise

        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(f"Database error renewing confirmation token of client {user.client_id}: {e}")
            raise DatabaseOperationException(detail="Error renewing confirmation token", original_error=e)

        logger.info(f"Confirmation token renewed for client {user.client_id}")
        await self._send_confirmation(email, secret)

    async def _send_confirmation(self, email: str, secret: str) -> None:
        subject, body = confirmation_email(
            self.confirmation_link(email, secret),
            settings.CONFIRMATION_TOKEN_EXPIRE_DAYS,
        )
        try:
            await self.mail_client.send(email, subject, body)
        except EmailClientException:
            logger.error(f"Failed to send the confirmation email to {email}")
            raise
