"""FastAPI application: relays, scan endpoint and health endpoints.

Run with:
    uvicorn ethical_scan.app:app --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import structlog
from fastapi import FastAPI

from ethical_scan.api import dependencies
from ethical_scan.api.errors import register_exception_handlers
from ethical_scan.api.relays import router as relays_router
from ethical_scan.api.scan import router as scan_router
from ethical_scan.application.scan.orchestration_service import ScanOrchestrator
from ethical_scan.config import ScannerSettings
from ethical_scan.infrastructure.factory import create_clients
from ethical_scan.logging_config import configure_logging

logger = structlog.get_logger("startup")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the HTTP clients for the lifetime of the server.

    Startup: log the (masked) configuration, enter every client's
    ``async with`` and register the orchestrator for injection.
    Shutdown: the context managers close the sessions.
    """
    settings: ScannerSettings = app.state.settings
    logger.info("startup.config", **settings.masked())

    clients = create_clients(settings)
    logger.info("lifespan.startup", phase="http_clients_init")

    async with (
        clients.nutrition,
        clients.manufacturer,
        clients.ethical,
        clients.visual,
    ):
        orchestrator = ScanOrchestrator(
            decoder=clients.decoder,
            nutrition_lookup=clients.nutrition,
            manufacturer_lookup=clients.manufacturer,
            ethical_lookup=clients.ethical,
            visual_search=clients.visual,
        )
        dependencies.set_runtime(clients, orchestrator)

        logger.info("lifespan.ready", status="serving")
        try:
            yield
        finally:
            dependencies.clear_runtime()
            logger.info("lifespan.shutdown", status="cleanup")


def create_app(settings: Optional[ScannerSettings] = None) -> FastAPI:
    """Build the application; settings default to the environment."""
    if settings is None:
        settings = ScannerSettings.from_env()
    configure_logging(settings.log_level)

    application = FastAPI(
        title="Ethical Scan",
        version=settings.app_version,
        lifespan=lifespan,
    )
    application.state.settings = settings

    register_exception_handlers(application)
    application.include_router(relays_router)
    application.include_router(scan_router)

    @application.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @application.get("/version")
    async def version() -> dict[str, str]:
        return {"version": settings.app_version}

    return application


app = create_app()
