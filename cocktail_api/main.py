# cocktail_api/main.py (async version)

import logging
import asyncio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.openapi.utils import get_openapi
from contextlib import asynccontextmanager

from cocktail_api import __version__
from cocktail_api.adapters.configuration.config import settings
from cocktail_api.adapters.outbound.persistence.database import engine, Base

# ─── UNIQUE LOGGING CONFIGURATION ─────────────────────────────────────────────────
level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.INFO)
logging.basicConfig(
    level=level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Async context manager to handle startup and shutdown events.
    """
    # Startup
    logger.info("Application starting up...")

    # Create database tables if they don't exist
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Start background tasks
    app.state.cleanup_task = asyncio.create_task(periodic_cleanup())

    yield

    # Shutdown
    logger.info("Application shutting down...")
    app.state.cleanup_task.cancel()
    try:
        await app.state.cleanup_task
    except asyncio.CancelledError:
        pass
    await engine.dispose()


# Create FastAPI instance
app = FastAPI(
    title="Cocktail API",
    description="Access tokens for the restricted endpoints of the Cocktail API",
    version=__version__,
    debug=settings.DEBUG,
    lifespan=lifespan,
    docs_url="/docs" if settings.SCHEMA_VISIBILITY else None,
    redoc_url=None,
    openapi_url="/openapi.json" if settings.SCHEMA_VISIBILITY else None,
)

# Middlewares
from cocktail_api.shared.middleware import (
    AsyncExceptionMiddleware,
    AsyncRequestLoggingMiddleware,
)

app.add_middleware(AsyncRequestLoggingMiddleware)
app.add_middleware(AsyncExceptionMiddleware)

# Routers
from cocktail_api.adapters.inbound.api.v1.router import api_router as api_v1_router
from cocktail_api.adapters.inbound.api.v1.endpoints import health_endpoint, token_endpoint

app.include_router(health_endpoint.router)
app.include_router(token_endpoint.router, include_in_schema=False)
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def redirect_to_token_request():
    return RedirectResponse(url="/token/request")


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    # Remove unwanted schemas and 422 responses
    for schema in ("HTTPValidationError", "ValidationError"):
        openapi_schema.get("components", {}).get("schemas", {}).pop(schema, None)

    for path in openapi_schema.get("paths", {}).values():
        for op in path.values():
            op.get("responses", {}).pop("422", None)

    app.openapi_schema = openapi_schema
    return openapi_schema


app.openapi = custom_openapi


# ── EXPIRED CREDENTIALS CLEANUP TASK ──────────────────────────────────────────
async def cleanup_expired_credentials() -> int:
    """Removes expired tokens from the database."""
    from cocktail_api.adapters.outbound.persistence.database import get_db_context
    from cocktail_api.adapters.outbound.persistence.repositories.credential_repository import credential_store

    async with get_db_context() as db:
        deleted = await credential_store.purge_expired(db)
        logger.info(f"Cleaned up {deleted} expired tokens")
    return deleted


async def periodic_cleanup():
    """Background task to periodically clean up expired tokens."""
    while True:
        try:
            await asyncio.sleep(settings.CREDENTIAL_CLEANUP_INTERVAL_HOURS * 60 * 60)
            await cleanup_expired_credentials()
        except asyncio.CancelledError:
            logger.info("Token cleanup task cancelled")
            break
        except Exception as e:
            logger.exception(f"Error in cleanup_expired_credentials: {e}")
