# cocktail_api/adapters/inbound/api/v1/endpoints/access_endpoint.py (async version)

import logging

from fastapi import APIRouter, Depends, Response, status

from cocktail_api.adapters.inbound.api.deps import require_api_access
from cocktail_api.domain.models.client_identity import ClientIdentity

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/check",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Check Token - Probe of the restricted endpoints",
    description="""
    Runs the access check used by every restricted endpoint. The token is sent
    as the `api_key` query parameter or as an `Authorization: Bearer` header,
    with the form `<client_id>:<secret>`.
    """,
    responses={
        204: {"description": "The token grants access"},
        400: {"description": "Malformed token or unknown client"},
        401: {"description": "Expired token"},
        403: {"description": "Wrong token or client not enabled"},
    },
)
async def check_token(client_id: ClientIdentity = Depends(require_api_access)):
    logger.debug(f"Token check passed for client {client_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
