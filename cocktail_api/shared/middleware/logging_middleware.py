# cocktail_api/shared/middleware/logging_middleware.py (async version)

"""
Middleware for HTTP request logging.

Two routes carry secrets in the URL: the confirmation link
(``/token/validate?email=...&token=...``) and restricted endpoints called
with ``?api_key=<client_id>:<secret>``. A logged query string would leak a
confirmation token or a working bearer to anyone who can read the logs, so
only the method and the path are written.
"""

import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from cocktail_api.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)


class AsyncRequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request and one per response.

    The client address and the processing time are added outside production.
    Headers are never logged either: ``Authorization`` and ``X-Admin-Token``
    hold credentials.
    """

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        if settings.ENVIRONMENT == "production":
            logger.info(f"Request: {request.method} {path}")
        else:
            logger.info(
                f"Request: {request.method} {path} | "
                f"Client: {request.client.host if request.client else 'N/A'}"
            )

        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        if settings.ENVIRONMENT == "production":
            logger.info(f"Response: {response.status_code} for {request.method} {path}")
        else:
            logger.info(
                f"Response: {response.status_code} for {request.method} {path} | "
                f"Time: {process_time:.4f}s"
            )

        return response
