"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from infrastructure.dependencies import get_platform_client
from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from permissions.presentation import routes as permissions_routes
from upgrades.presentation import routes as upgrades_routes


@asynccontextmanager
async def console_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - structlog configuration
    - Platform client lifecycle (created lazily, closed on shutdown)
    """
    configure_logging(debug=get_settings().debug)

    yield

    # Shutdown: release the shared httpx connection pool
    await get_platform_client().aclose()


app = FastAPI(
    title="PKMS Console API",
    description="Tenant-scoped RBAC and upgrade-target administration",
    version=__version__,
    lifespan=console_lifespan,
)

# Include bounded context routes
app.include_router(permissions_routes.router)
app.include_router(upgrades_routes.router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok", "version": __version__}
