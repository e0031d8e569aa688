"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from infrastructure.database.dependencies import close_database_connections
from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from workforce.dependencies import close_identity_store
from workforce.presentation import router as workforce_router


@asynccontextmanager
async def shiftdesk_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Identity provider client lifecycle (created lazily, closed on shutdown)
    - Database engine lifecycle (created lazily, disposed on shutdown)
    """
    configure_logging(debug=get_settings().debug)

    yield

    await close_identity_store()
    await close_database_connections()


app = FastAPI(
    title="ShiftDesk API",
    description="Restaurant workforce scheduling: tenant and employee lifecycle",
    version=__version__,
    lifespan=shiftdesk_lifespan,
)

# Include Workforce bounded context routes
app.include_router(workforce_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
