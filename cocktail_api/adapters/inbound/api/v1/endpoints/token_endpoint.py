# cocktail_api/adapters/inbound/api/v1/endpoints/token_endpoint.py

"""
Endpoints for requesting an API token.

These routes serve simple HTML pages: the token request form, the email
confirmation link and the re-send of that link. Errors are rendered in the
page with a matching status code.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

import cocktail_api
from cocktail_api.adapters.configuration.config import settings
from cocktail_api.adapters.inbound.api.deps import get_db_session, get_mail_client
from cocktail_api.application.dtos.token_request_dto import TokenRequest
from cocktail_api.application.ports.outbound import IMailClient
from cocktail_api.application.use_cases.registration_use_cases import AsyncRegistrationService
from cocktail_api.domain.exceptions import (
    AccountAlreadyValidatedException,
    DomainException,
    EmailAlreadyRegisteredException,
    EmailClientException,
    InvalidAccessCredentialsException,
    InvalidEmailException,
    InvalidFormDataException,
)

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/token", tags=["Token Request"])

# Templates for the HTML pages
templates = Jinja2Templates(directory=str(Path(cocktail_api.__file__).parent / "templates"))


def _message(request: Request, title: str, message: str, status_code: int) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "message.html",
        {"title": title, "message": message},
        status_code=status_code,
    )


@router.get("/request", response_class=HTMLResponse)
async def token_request_form(request: Request):
    """
    Show the HTML form to request an API token.
    """
    return templates.TemplateResponse(request, "token_request.html", {})


@router.post("/request", response_class=HTMLResponse)
async def token_request(
        request: Request,
        name: str = Form(""),
        email: str = Form(""),
        explanation: str = Form(""),
        db_session: AsyncSession = Depends(get_db_session),
        mail_client: IMailClient = Depends(get_mail_client),
):
    """
    Register a token request and send the confirmation email.

    Returns:
        202 when the request is registered, 406 if the email is already
        registered, 400 for invalid form data and 500 on server errors
    """
    try:
        token_request_data = TokenRequest.from_form(name, email, explanation)
    except InvalidFormDataException as e:
        errors = e.details
        logger.debug(
            "Failed attempt to request an API token from %s (invalid fields: %s)",
            request.client.host if request.client else "Unknown",
            ", ".join(errors),
        )
        return templates.TemplateResponse(
            request,
            "token_request.html",
            {
                "error": "Please introduce valid data into the form to request an API token.",
                "field_errors": errors,
                "name": name,
                "email": email,
                "explanation": explanation,
            },
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    service = AsyncRegistrationService(db_session, mail_client)
    try:
        await service.issue_request(token_request_data)

    except EmailAlreadyRegisteredException:
        return _message(
            request,
            "Request rejected",
            "There is already a token request for this email.",
            status.HTTP_406_NOT_ACCEPTABLE,
        )

    except EmailClientException:
        return _message(
            request,
            "Email not sent",
            "The request was registered but the confirmation email could not be sent. "
            "Please ask for a new confirmation email later.",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    except DomainException as e:
        logger.error(f"Error registering token request: {e.internal_code}")
        return _message(
            request,
            "Server error",
            "The request could not be registered. Please try again later.",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return _message(
        request,
        "Request sent",
        "The request was sent. Please check your inbox and confirm your email. After the request "
        "is evaluated, an email will be sent to inform you about the following steps.",
        status.HTTP_202_ACCEPTED,
    )


@router.get("/validate", response_class=HTMLResponse)
async def token_validate(
        request: Request,
        email: str = Query(""),
        token: str = Query(""),
        db_session: AsyncSession = Depends(get_db_session),
        mail_client: IMailClient = Depends(get_mail_client),
):
    """
    Confirm the email of a token request through the link sent by email.

    The bearer string is shown once on the returned page.

    Returns:
        202 with the bearer string, 400 if a parameter is missing, 403 for a
        wrong or expired token, 404 for an unknown email and 500 on server errors
    """
    if not email or not token:
        return _message(
            request,
            "Invalid link",
            "The confirmation link is incomplete.",
            status.HTTP_400_BAD_REQUEST,
        )

    service = AsyncRegistrationService(db_session, mail_client)
    try:
        validated = await service.confirm_email(email, token)

    except InvalidEmailException:
        return _message(request, "Invalid link", "The email is not registered.", status.HTTP_404_NOT_FOUND)

    except InvalidAccessCredentialsException:
        return _message(
            request,
            "Invalid link",
            "The confirmation link is invalid or has expired.",
            status.HTTP_403_FORBIDDEN,
        )

    except DomainException as e:
        logger.error(f"Error confirming email: {e.internal_code}")
        return _message(
            request,
            "Server error",
            "The email could not be confirmed. Please try again later.",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return templates.TemplateResponse(
        request,
        "token_validate.html",
        {
            "client_id": validated.client_id,
            "token": validated.token,
            "valid_days": settings.ACCESS_TOKEN_EXPIRE_DAYS,
        },
        status_code=status.HTTP_202_ACCEPTED,
        headers={"Cache-Control": "no-store"},
    )


@router.post("/resend", response_class=HTMLResponse)
async def token_resend(
        request: Request,
        email: str = Form(""),
        db_session: AsyncSession = Depends(get_db_session),
        mail_client: IMailClient = Depends(get_mail_client),
):
    """
    Send a new confirmation link for a pending token request.

    Unknown and already confirmed emails get the same answer as a pending
    one, so the page does not tell which emails are registered.
    """
    if not email:
        return _message(request, "Invalid request", "Please introduce your email.", status.HTTP_400_BAD_REQUEST)

    service = AsyncRegistrationService(db_session, mail_client)
    try:
        await service.resend_confirmation(email)

    except (InvalidEmailException, AccountAlreadyValidatedException) as e:
        logger.info(f"Confirmation resend ignored: {e.internal_code}")

    except DomainException as e:
        logger.error(f"Error re-sending confirmation email: {e.internal_code}")
        return _message(
            request,
            "Server error",
            "The confirmation email could not be sent. Please try again later.",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return _message(
        request,
        "Email sent",
        "If the email has a pending token request, a new confirmation link was sent. "
        "Previous links no longer work.",
        status.HTTP_202_ACCEPTED,
    )
