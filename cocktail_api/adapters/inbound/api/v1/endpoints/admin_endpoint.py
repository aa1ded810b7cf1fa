# cocktail_api/adapters/inbound/api/v1/endpoints/admin_endpoint.py (async version)

"""
Administrative endpoints for the API clients.

Every route requires the administrative token in the ``X-Admin-Token`` header.
Errors are raised as domain exceptions and mapped by the exception middleware.
"""

import logging

from fastapi import APIRouter, Depends, Path
from fastapi_pagination import Page, Params
from sqlalchemy.ext.asyncio import AsyncSession

from cocktail_api.adapters.inbound.api.deps import get_db_session, require_admin
from cocktail_api.application.dtos.api_user_dto import ApiUserOutput, ClientStatusOutput, RevocationOutput
from cocktail_api.application.use_cases.client_admin_use_cases import AsyncClientAdminService
from cocktail_api.shared.utils.pagination import pagination_params

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get(
    "/pending",
    response_model=Page[ApiUserOutput],
    summary="List Pending Clients - Clients waiting for approval",
    description="Returns a paginated list of clients with a confirmed email that are not enabled yet, oldest first.",
)
async def list_pending_clients(
        db: AsyncSession = Depends(get_db_session),
        params: Params = Depends(pagination_params),
):
    service = AsyncClientAdminService(db)
    return await service.list_pending(params)


@router.post(
    "/{client_id}/enable",
    response_model=ClientStatusOutput,
    summary="Enable Client - Approve a token request",
    responses={
        404: {"description": "Client not found"},
        409: {"description": "The client has not confirmed its email"},
    },
)
async def enable_client(
        client_id: str = Path(..., description="ID of the client to enable"),
        db: AsyncSession = Depends(get_db_session),
):
    service = AsyncClientAdminService(db)
    user = await service.enable_client(client_id)
    return ClientStatusOutput(
        client_id=str(user.client_id),
        validated=user.validated,
        enabled=user.enabled,
        message="Client enabled",
    )


@router.post(
    "/{client_id}/disable",
    response_model=ClientStatusOutput,
    summary="Disable Client - Withdraw the approval of a client",
    responses={404: {"description": "Client not found"}},
)
async def disable_client(
        client_id: str = Path(..., description="ID of the client to disable"),
        db: AsyncSession = Depends(get_db_session),
):
    service = AsyncClientAdminService(db)
    user = await service.disable_client(client_id)
    return ClientStatusOutput(
        client_id=str(user.client_id),
        validated=user.validated,
        enabled=user.enabled,
        message="Client disabled",
    )


@router.delete(
    "/{client_id}/credentials",
    response_model=RevocationOutput,
    summary="Revoke Tokens - Delete every token of a client",
    responses={404: {"description": "Client not found"}},
)
async def revoke_credentials(
        client_id: str = Path(..., description="ID of the client"),
        db: AsyncSession = Depends(get_db_session),
):
    service = AsyncClientAdminService(db)
    revoked = await service.revoke_credentials(client_id)
    return RevocationOutput(client_id=client_id, revoked=revoked)
