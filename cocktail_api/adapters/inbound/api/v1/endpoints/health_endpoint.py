# cocktail_api/adapters/inbound/api/v1/endpoints/health_endpoint.py

from fastapi import APIRouter, Response, status

router = APIRouter(tags=["Health"])


@router.get("/health", status_code=status.HTTP_200_OK, response_class=Response)
async def health_check():
    """Liveness probe."""
    return Response(status_code=status.HTTP_200_OK)
