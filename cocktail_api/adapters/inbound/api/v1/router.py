# cocktail_api/adapters/inbound/api/v1/router.py

from fastapi import APIRouter
from cocktail_api.adapters.inbound.api.v1.endpoints import access_endpoint, admin_endpoint

api_router = APIRouter()

# Restricted endpoints
api_router.include_router(access_endpoint.router, prefix="/token", tags=["Token"])

# Administration of the clients
api_router.include_router(admin_endpoint.router, prefix="/admin/clients", tags=["Admin"])
