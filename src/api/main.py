"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from iam.dependencies.outbox import build_outbox_relay
from iam.presentation import router as iam_router
from infrastructure.database.dependencies import (
    close_database_connections,
    get_write_sessionmaker,
)
from infrastructure.logging import configure_logging
from infrastructure.settings import get_outbox_settings, get_settings
from infrastructure.version import __version__


@asynccontextmanager
async def outbox_relay_lifespan(app: FastAPI):
    """Run the outbox relay for the lifetime of the application.

    The relay is skipped entirely when disabled in settings. On shutdown it
    stops between entries, so no handler is interrupted midway.
    """
    settings = get_outbox_settings()
    if not settings.enabled:
        app.state.outbox_relay = None
        yield
        return

    relay = build_outbox_relay(settings, get_write_sessionmaker())
    app.state.outbox_relay = relay
    await relay.start()
    try:
        yield
    finally:
        await relay.stop()


@asynccontextmanager
async def apptemplate_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Outbox relay startup and graceful shutdown
    - Database engine disposal
    """
    configure_logging(debug=get_settings().debug)

    try:
        async with outbox_relay_lifespan(app):
            yield
    finally:
        await close_database_connections()


app = FastAPI(
    title="AppTemplate API",
    description="Administration backend with a transactional outbox",
    version=__version__,
    lifespan=apptemplate_lifespan,
)

# Include IAM bounded context routes
app.include_router(iam_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
