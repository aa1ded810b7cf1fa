# cocktail_api/shared/middleware/exception_middleware.py (async version)

"""
Middleware for centralized exception handling.

This module defines middleware that intercepts exceptions and formats
appropriate error responses for the client.
"""

import re
import time
import logging
import traceback
from typing import Callable, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from starlette.middleware.base import BaseHTTPMiddleware

from cocktail_api.domain.exceptions import DomainException
from cocktail_api.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)

# HTTP status of each domain error code
STATUS_BY_CODE = {
    "INVALID_ID": status.HTTP_400_BAD_REQUEST,
    "INVALID_FORM_DATA": status.HTTP_400_BAD_REQUEST,
    "INVALID_ACCESS_CREDENTIALS": status.HTTP_403_FORBIDDEN,
    "INVALID_EMAIL": status.HTTP_404_NOT_FOUND,
    "RESOURCE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "PERMISSION_DENIED": status.HTTP_403_FORBIDDEN,
    "ACCOUNT_DISABLED": status.HTTP_403_FORBIDDEN,
    "EXPIRED_ACCESS": status.HTTP_401_UNAUTHORIZED,
    "EMAIL_ALREADY_REGISTERED": status.HTTP_406_NOT_ACCEPTABLE,
    "ACCOUNT_NOT_VALIDATED": status.HTTP_409_CONFLICT,
    "ACCOUNT_ALREADY_VALIDATED": status.HTTP_409_CONFLICT,
    "DATABASE_OPERATION_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "EMAIL_CLIENT_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "SECRET_HASHING_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

SERVER_ERROR_MESSAGE = "Internal server error"


def status_for(exc: DomainException) -> int:
    return STATUS_BY_CODE.get(exc.internal_code, status.HTTP_400_BAD_REQUEST)


class AsyncExceptionMiddleware(BaseHTTPMiddleware):
    """
    Middleware for centralized exception handling.
    Captures specific exceptions and formats the response accordingly.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.time()
        try:
            response = await call_next(request)
            process_time = time.time() - start_time
            response.headers["X-Process-Time"] = str(process_time)
            return response

        except DomainException as exc:
            # Domain exceptions: mapping from pure exception to HTTP code based on 'internal_code'
            status_code = status_for(exc)
            client_host = request.client.host if request.client else 'N/A'

            if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
                logger.error(
                    f"Server error: {str(exc)} | Code: {exc.internal_code} | "
                    f"Path: {request.url.path} | Client: {client_host}"
                )
                detail = SERVER_ERROR_MESSAGE if settings.ENVIRONMENT == "production" else str(exc)
            else:
                logger.warning(
                    f"Domain exception: {str(exc)} | Code: {exc.internal_code} | "
                    f"Path: {request.url.path}"
                )
                detail = str(exc)

            return JSONResponse(
                status_code=status_code,
                content={
                    "detail": detail,
                    "code": exc.internal_code,
                    "errors": getattr(exc, "details", {})
                }
            )

        except IntegrityError as exc:
            # Database integrity error
            error_info = str(exc)
            constraint_name = self._extract_constraint_name(error_info)

            if settings.ENVIRONMENT == "production":
                error_message = "Database integrity error"
                logger.error(
                    f"Integrity error: Type={type(exc).__name__} | "
                    f"Constraint={constraint_name or 'N/A'} | "
                    f"Path: {request.url.path}"
                )
            else:
                error_message = error_info
                logger.error(
                    f"Integrity error: {error_info} | "
                    f"Constraint={constraint_name or 'N/A'} | "
                    f"Path: {request.url.path}"
                )

            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT,
                content={
                    "detail": error_message,
                    "code": f"INTEGRITY_ERROR{f'_{constraint_name}' if constraint_name else ''}"
                }
            )

        except SQLAlchemyError as exc:
            # Other SQLAlchemy errors
            if settings.ENVIRONMENT == "production":
                error_message = "Internal database error"
                logger.error(
                    f"Database error: Type={type(exc).__name__} | "
                    f"Path: {request.url.path}"
                )
            else:
                error_message = str(exc)
                logger.error(
                    f"Database error: {str(exc)} | "
                    f"Path: {request.url.path}"
                )

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "detail": error_message,
                    "code": "DATABASE_ERROR"
                }
            )

        except Exception as exc:
            # Unhandled exceptions
            if settings.ENVIRONMENT == "production":
                error_message = SERVER_ERROR_MESSAGE
                logger.exception(
                    f"Unhandled exception: Type={type(exc).__name__} | "
                    f"Path: {request.url.path}"
                )
            else:
                error_message = str(exc)
                logger.exception(
                    f"Unhandled exception: {str(exc)} | "
                    f"Path: {request.url.path}\n"
                    f"Traceback: {traceback.format_exc()}"
                )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "detail": error_message,
                    "code": "INTERNAL_SERVER_ERROR"
                }
            )

    def _extract_constraint_name(self, error_message: str) -> Optional[str]:
        """
        Attempts to extract the constraint name from an integrity error message.

        Args:
            error_message: The complete error message

        Returns:
            The constraint name or None if not found
        """
        # Common patterns for different databases
        patterns = [
            r'violates unique constraint "(.*?)"',
            r'violates foreign key constraint "(.*?)"',
            r'UNIQUE constraint failed: (.*)',
            r'constraint "(.*?)"',
        ]

        for pattern in patterns:
            match = re.search(pattern, error_message)
            if match:
                return match.group(1)
        return None
