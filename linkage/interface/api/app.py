"""FastAPI application."""

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI

from linkage.interface.api.routes import health, identities
from linkage.util.di import create_container
from linkage.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; the production container by default
    """
    # Instrument httpx for outbound Management API requests
    # (Logfire must be configured before instrumentation)
    instrument_httpx()

    app_instance = FastAPI(
        title="Linkage API",
        description="Account linking and metadata merge over an identity directory",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    if container is None:
        container = create_container()
    setup_dishka(container, app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(identities.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
